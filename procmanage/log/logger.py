"""
Logger class with trace levels and pre-populated extra fields.
"""

import collections
import logging
from typing import Any

from .config import LogConfig
from .constants import LogConstants
from .formatters import EXTRA_ATTR

ExtraLike = dict[str, Any] | collections.OrderedDict


class Logger(logging.Logger):
    """
    Enhanced logger with structured extra fields.

    Extends the standard Python logger with:
    - TRACE and TRACE2 levels below DEBUG
    - Extra fields fixed at construction and merged into every record
    - Complete disabling via a level of False
    """

    def __init__(
        self,
        name: str,
        config: LogConfig | None = None,
        extra: ExtraLike | None = None,
    ):
        """
        Initialize the logger.

        Args:
            name: Logger name (slash-separated path, e.g. "/procmanage/process")
            config: Logger configuration; defaults to level info
            extra: Pre-populated extra fields included in all records
        """
        if config is None:
            config = LogConfig.from_params("info")

        if config.level is False:
            super().__init__(name, logging.CRITICAL + 1)
            self._logging_disabled = True
        else:
            super().__init__(name, config.level)
            self._logging_disabled = False

        self._config = config
        self._extra: ExtraLike = extra or {}
        self._root_logger: Logger | None = None  # set for derived loggers

    @property
    def config(self) -> LogConfig:
        return self._config

    @property
    def extra(self) -> ExtraLike:
        return self._extra

    @property
    def disabled(self) -> bool:  # type: ignore[override]
        """Check if logging is disabled."""
        return self._logging_disabled

    @disabled.setter
    def disabled(self, value: bool) -> None:
        self._logging_disabled = value

    def _merge_extra(self, extra: ExtraLike | None) -> ExtraLike:
        """Merge pre-populated extra fields with per-call extra fields."""
        merged: ExtraLike
        if isinstance(self._extra, collections.OrderedDict) or isinstance(
            extra, collections.OrderedDict
        ):
            merged = collections.OrderedDict(self._extra)
        else:
            merged = dict(self._extra)
        if extra:
            merged.update(extra)
        return merged

    def makeRecord(
        self,
        name: str,
        level: int,
        fn: str,
        lno: int,
        msg: object,
        args: Any,
        exc_info: Any,
        func: str | None = None,
        extra: ExtraLike | None = None,
        sinfo: str | None = None,
    ) -> logging.LogRecord:
        """Create a record and attach merged extra fields to it."""
        merged = self._merge_extra(extra)
        record = super().makeRecord(
            name, level, fn, lno, msg, args, exc_info, func=func, sinfo=sinfo
        )
        setattr(record, EXTRA_ATTR, merged)
        return record

    def _log(self, level: int, msg: object, args: Any, **kwargs: Any) -> None:  # type: ignore[override]
        if self._logging_disabled:
            return
        super()._log(level, msg, args, **kwargs)

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a TRACE level message."""
        level = LogConstants.CUSTOM_LEVELS["TRACE"]
        if self.isEnabledFor(level):
            self._log(level, msg, args, **kwargs)

    def trace2(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a TRACE2 level message (most verbose level)."""
        level = LogConstants.CUSTOM_LEVELS["TRACE2"]
        if self.isEnabledFor(level):
            self._log(level, msg, args, **kwargs)

    def isEnabledFor(self, level: int) -> bool:
        if self._logging_disabled:
            return False
        if self._root_logger is not None and not self._root_logger.isEnabledFor(
            level
        ):
            return False
        return super().isEnabledFor(level)

    def callHandlers(self, record: logging.LogRecord) -> None:
        """
        Pass a record to all relevant handlers.

        Derived loggers have no handlers of their own and write through the
        handlers of the logger they were derived from.
        """
        if self._root_logger is not None:
            for handler in self._root_logger.handlers:
                if record.levelno >= handler.level:
                    handler.handle(record)
        else:
            super().callHandlers(record)
