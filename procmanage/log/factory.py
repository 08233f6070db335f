"""
Factory for creating and deriving loggers.
"""

import collections
import logging
import sys
from typing import Any, cast

from .config import LogConfig
from .formatters import LogFormatter
from .logger import Logger


class LoggerFactory:
    """Factory for creating and configuring loggers."""

    @staticmethod
    def create(
        name: str,
        config: LogConfig,
        logger_class: type[Logger] = Logger,
        extra: dict[str, Any] | collections.OrderedDict | None = None,
    ) -> Logger:
        """
        Create a logger with a console handler.

        Returns the already registered logger when name is taken.

        Example:
            >>> config = LogConfig.from_params(level="debug")
            >>> lg = LoggerFactory.create("/procmanage", config)
            >>> lg.info("ready", extra={"pid": 4242})
            [12:34:56,789] [I] ready                    [pid:4242] [4240] [/procmanage]
        """
        existing = logging.root.manager.loggerDict.get(name)
        if isinstance(existing, Logger):
            return existing

        lg = logger_class(name, config, extra)
        lg.addHandler(LoggerFactory._console_handler(config))
        lg.propagate = False
        lg.parent = logging.root
        logging.root.manager.loggerDict[name] = lg

        lg.trace2(
            "created logger",
            extra={
                "level": logging.getLevelName(lg.level),
                "location": config.location,
            },
        )
        return lg

    @staticmethod
    def _console_handler(config: LogConfig) -> logging.Handler:
        handler = logging.StreamHandler(sys.stdout)
        if config.level is not False:
            handler.setLevel(cast(int, config.level))
        handler.setFormatter(LogFormatter(config))
        return handler

    @staticmethod
    def derive(
        parent: Logger,
        tags: str | list[str],
        extra: dict[str, Any] | collections.OrderedDict | None = None,
    ) -> Logger:
        """
        Derive a child logger sharing the parent's handlers.

        The child name is the parent name joined with tags by slashes. Its level
        follows the parent, and extra fields of both are merged.

        Example:
            >>> child = LoggerFactory.derive(lg, "process")
            >>> child.name
            '/procmanage/process'
        """
        if isinstance(tags, str):
            tags = [tags]
        base = parent.name.rstrip("/")
        name = "/".join([base, *tags])

        merged = dict(parent.extra)
        if extra:
            merged.update(extra)

        lg = parent.__class__(name, parent.config, merged)
        lg.setLevel(parent.level)
        lg._root_logger = parent._root_logger or parent
        lg.propagate = False
        lg.parent = parent
        return lg
