"""
Immutable logger configuration.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .constants import LogConstants
from .exceptions import InvalidLogLevelError


def resolve_level(level: str | int | bool) -> int | bool:
    """
    Resolve a log level from a name, a number, or False.

    Args:
        level: Level name ("debug", "trace", ...), numeric value, or False to
            disable logging. True maps to INFO.

    Returns:
        Numeric level, or False when logging is disabled

    Raises:
        InvalidLogLevelError: If the level name is unknown
    """
    if isinstance(level, bool):
        return logging.INFO if level else False
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        if level.isnumeric():
            return int(level)
        key = level.lower()
        if key in LogConstants.LEVEL_NAMES:
            return LogConstants.LEVEL_NAMES[key]
    raise InvalidLogLevelError(level)


@dataclass(frozen=True)
class LogConfig:
    """
    Configuration for a logger and its console handler.

    Attributes:
        level: Numeric level, or False to disable logging
        location: Number of caller frames to render as file:line (0 = none)
        micros: Render timestamps with microsecond precision
        colors: Emit ANSI colors
    """

    level: int | bool = logging.INFO
    location: int = 0
    micros: bool = False
    colors: bool = True

    @classmethod
    def from_params(
        cls,
        level: str | int | bool,
        location: bool | int = 0,
        micros: bool = False,
        colors: bool = True,
    ) -> LogConfig:
        """
        Create LogConfig from individual parameters.

        Args:
            level: Log level (string name, numeric value, or False)
            location: Location display depth (bool or int)
            micros: Whether to show microsecond precision
            colors: Whether to enable colored output
        """
        resolved_location = (
            1 if location is True else (0 if location is False else int(location))
        )
        return cls(
            level=resolve_level(level),
            location=resolved_location,
            micros=micros,
            colors=colors,
        )

    @classmethod
    def from_config(cls, config_dict: dict, section: str = "logging") -> LogConfig:
        """
        Create LogConfig from a configuration dictionary.

        Args:
            config_dict: Configuration dictionary (e.g., from load_config())
            section: Dotted path of the section to read (default: "logging")

        Example:
            config = load_config("etc/procmanage.yaml")
            log_config = LogConfig.from_config(config)
        """
        current: Any = config_dict
        for part in section.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                current = {}
                break
        if not isinstance(current, dict):
            current = {}

        colors = current.get("colors", True)
        if isinstance(colors, dict):
            colors = colors.get("enabled", True)

        return cls.from_params(
            level=current.get("level", "info"),
            location=current.get("location", 0),
            micros=current.get("microseconds", current.get("micros", False)),
            colors=colors,
        )
