"""
Log formatter rendering structured extra fields after the message.

Output shape:

    [12:34:56,789] [D] spawned process          [path:/bin/echo] [pid:4242] [4240] [/procmanage]
"""

import collections
import logging
import os
from typing import Any

from .colors import ColorManager
from .config import LogConfig
from .constants import LogConstants

# Record attribute carrying merged extra fields (set by Logger)
EXTRA_ATTR = "__procmanage__extra"


def _ordered_keys(extra: dict[str, Any]) -> list[str]:
    if isinstance(extra, collections.OrderedDict):
        return list(extra.keys())
    return sorted(extra.keys())


def _render_value(value: Any) -> str:
    if isinstance(value, BaseException):
        return value.__class__.__name__
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


class LogFormatter(logging.Formatter):
    """
    Formatter for Logger records.

    Pads the message to a fixed rule so extra fields line up in a column, then
    appends each extra field as [key:value], the pid and the logger name.
    """

    def __init__(self, config: LogConfig) -> None:
        datefmt = "%H:%M:%S"
        super().__init__(LogConstants.DEFAULT_FORMAT, datefmt=datefmt)
        self._config = config

    @property
    def config(self) -> LogConfig:
        return self._config

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        base = super().formatTime(record, datefmt)
        if self._config.micros:
            return f"{base},{int(record.msecs * 1000):06d}"
        return f"{base},{int(record.msecs):03d}"

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        head = f"[{self.formatTime(record, self.datefmt)}] [{record.levelname[:1]}] {message}"
        rule = (
            LogConstants.MICRO_RULE_WIDTH
            if self._config.micros
            else LogConstants.DEFAULT_RULE_WIDTH
        )
        pad = " " * max(1, rule - len(head))

        fields = [
            f"[{key}:{_render_value(value)}]"
            for key, value in self._extra_items(record)
        ]
        meta = [f"[{record.process}]", f"[{record.name}]"]
        location = self._render_location(record)

        if self._config.colors:
            line = self._colorize(record, head, fields, meta)
        else:
            line = head + pad + " ".join(fields + meta)
            if not fields:
                line = head + " " + " ".join(meta)
        if location:
            line += " " + location

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line

    def _extra_items(self, record: logging.LogRecord) -> list[tuple[str, Any]]:
        extra = getattr(record, EXTRA_ATTR, None)
        if not extra:
            return []
        return [(key, extra[key]) for key in _ordered_keys(extra)]

    def _render_location(self, record: logging.LogRecord) -> str:
        if self._config.location <= 0:
            return ""
        return f"[{os.path.basename(record.pathname)}:{record.lineno}]"

    def _colorize(
        self,
        record: logging.LogRecord,
        head: str,
        fields: list[str],
        meta: list[str],
    ) -> str:
        col = ColorManager.get_color_for_level(record.levelno)
        bold = ColorManager.create_bold_color(col)
        gray = ColorManager.create_gray_level(9) + "m"
        reset = ColorManager.RESET

        rule = (
            LogConstants.MICRO_RULE_WIDTH
            if self._config.micros
            else LogConstants.DEFAULT_RULE_WIDTH
        )
        pad = " " * max(1, rule - len(head))
        line = bold + head + reset
        if fields:
            line += pad + col + "m" + " ".join(fields) + reset + " "
        else:
            line += " "
        return line + gray + " ".join(meta) + reset
