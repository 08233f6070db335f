"""
Logging layer for procmanage.

Extends Python's standard logging with:
- Custom TRACE and TRACE2 levels for detailed debugging
- Structured extra fields rendered as [key:value] after the message
- Colored console output
- Derived loggers sharing their parent's handlers

Log Level Control:
- Standard levels: debug, info, warning, error, critical
- Custom levels: trace, trace2
- Disable logging completely: False or "false"
"""

import logging

from .config import LogConfig, resolve_level
from .constants import LogConstants
from .exceptions import InvalidLogLevelError, LogError
from .factory import LoggerFactory
from .formatters import LogFormatter
from .logger import Logger

logging.addLevelName(LogConstants.CUSTOM_LEVELS["TRACE"], "TRACE")
logging.addLevelName(LogConstants.CUSTOM_LEVELS["TRACE2"], "TRACE2")


def create_lg(
    name: str,
    level: str | int | bool = "info",
    location: bool | int = 0,
    micros: bool = False,
    colors: bool = True,
) -> Logger:
    """
    Create a logger with the specified configuration.

    Example:
        >>> lg = create_lg("/myapp", "debug")
    """
    config = LogConfig.from_params(level, location, micros, colors)
    return LoggerFactory.create(name, config)


def derive_lg(lg: Logger, tags: str | list[str]) -> Logger:
    """
    Derive a logger with tags from a parent logger.

    Example:
        >>> child_lg = derive_lg(create_lg("/myapp"), "spawn")
    """
    return LoggerFactory.derive(lg, tags)


def get_default_lg() -> Logger:
    """
    Package-wide default logger used when a Process is built without one.

    Logs warnings and above; callers wanting more detail pass their own logger.
    """
    return create_lg(LogConstants.ROOT_NAME, "warning")


__all__ = [
    "Logger",
    "LoggerFactory",
    "LogConfig",
    "LogConstants",
    "LogFormatter",
    "LogError",
    "InvalidLogLevelError",
    "resolve_level",
    "create_lg",
    "derive_lg",
    "get_default_lg",
]
