"""
Constants for the logging layer.

Format strings, rule widths, custom levels and the ANSI sequences used by the
formatter.
"""

import logging


class LogConstants:
    """Constants for the logging layer."""

    DEFAULT_FORMAT: str = "[%(asctime)s] [%(levelname).1s] %(message)s"

    # Column where extra fields start
    DEFAULT_RULE_WIDTH: int = 70
    MICRO_RULE_WIDTH: int = 74

    CUSTOM_LEVELS: dict[str, int] = {"TRACE": 5, "TRACE2": 4}

    LEVEL_NAMES: dict[str, int | bool] = {
        "critical": logging.CRITICAL,
        "error": logging.ERROR,
        "warning": logging.WARNING,
        "info": logging.INFO,
        "debug": logging.DEBUG,
        "trace": 5,
        "trace2": 4,
        "false": False,  # disables all logging
    }

    RESET: str = "\x1b[0m"

    GRAY_BASE: int = 232
    GRAY_MAX_LEVELS: int = 24

    # Name of the package-wide default logger
    ROOT_NAME: str = "/procmanage"
