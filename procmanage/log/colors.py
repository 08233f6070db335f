"""
ANSI color selection for log levels.
"""

import logging

from .constants import LogConstants


class ColorManager:
    """Centralized ANSI color code management."""

    RED = "\x1b[31"
    YELLOW = "\x1b[33"
    MAGENTA = "\x1b[35"
    CYAN = "\x1b[36"
    DEFAULT = "\x1b[38"

    RESET = LogConstants.RESET

    COLORS: dict[int, str] = {
        logging.DEBUG: "\x1b[38;5;32",
        logging.INFO: CYAN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: MAGENTA,
    }

    @staticmethod
    def create_gray_level(level: int) -> str:
        """Gray escape sequence for level, clamped to the 24-step ramp."""
        level = max(0, min(level, LogConstants.GRAY_MAX_LEVELS - 1))
        return f"\x1b[38;5;{LogConstants.GRAY_BASE + level}"

    @staticmethod
    def get_color_for_level(level: int) -> str:
        """
        Color for a record level.

        Trace levels sit below DEBUG and get progressively darker grays.
        """
        if level in ColorManager.COLORS:
            return ColorManager.COLORS[level]
        if level < logging.DEBUG:
            return ColorManager.create_gray_level(8 + level * 2)
        return ColorManager.DEFAULT

    @staticmethod
    def create_bold_color(color: str) -> str:
        return color + ";1m"
