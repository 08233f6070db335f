"""
Tests for LogFormatter.
"""

import collections
import logging
import sys

import pytest

from procmanage.log import LogConfig, LogConstants, LogFormatter
from procmanage.log.formatters import EXTRA_ATTR


def _record(msg="hello", level=logging.INFO, extra=None, name="/test/fmt"):
    record = logging.LogRecord(name, level, __file__, 10, msg, (), None)
    if extra is not None:
        setattr(record, EXTRA_ATTR, extra)
    return record


@pytest.mark.unit
class TestLogFormatter:
    def test_plain_layout(self):
        fmt = LogFormatter(LogConfig.from_params("info", colors=False))
        line = fmt.format(_record(extra={"pid": 5, "path": "/bin/echo"}))
        assert "[I] hello" in line
        # sorted keys, padded to the rule
        assert line.index("[path:/bin/echo]") < line.index("[pid:5]")
        assert line.index("[path:") >= LogConstants.DEFAULT_RULE_WIDTH
        assert line.endswith(f"[{_record().process}] [/test/fmt]")

    def test_without_extra(self):
        fmt = LogFormatter(LogConfig.from_params("info", colors=False))
        line = fmt.format(_record())
        assert "[I] hello [" in line
        assert "[/test/fmt]" in line

    def test_ordered_extra_keeps_order(self):
        fmt = LogFormatter(LogConfig.from_params("info", colors=False))
        extra = collections.OrderedDict([("z", 1), ("a", 2)])
        line = fmt.format(_record(extra=extra))
        assert line.index("[z:1]") < line.index("[a:2]")

    def test_exception_value_renders_class_name(self):
        fmt = LogFormatter(LogConfig.from_params("info", colors=False))
        line = fmt.format(_record(extra={"exception": OSError("boom")}))
        assert "[exception:OSError]" in line

    def test_list_value(self):
        fmt = LogFormatter(LogConfig.from_params("info", colors=False))
        line = fmt.format(_record(extra={"argv": ["echo", "hi"]}))
        assert "[argv:echo,hi]" in line

    def test_colors(self):
        fmt = LogFormatter(LogConfig.from_params("info", colors=True))
        line = fmt.format(_record(level=logging.ERROR, extra={"pid": 1}))
        assert "\x1b[31" in line
        assert LogConstants.RESET in line
        assert "[pid:1]" in line

    def test_trace_colors_are_gray(self):
        fmt = LogFormatter(LogConfig.from_params("trace2", colors=True))
        line = fmt.format(_record(level=5))
        assert "\x1b[38;5;" in line

    def test_location(self):
        fmt = LogFormatter(LogConfig.from_params("info", location=1, colors=False))
        line = fmt.format(_record())
        assert line.endswith("[test_formatters.py:10]")

    def test_micros(self):
        fmt = LogFormatter(LogConfig.from_params("info", micros=True, colors=False))
        line = fmt.format(_record())
        stamp = line[1 : line.index("]")]
        assert len(stamp.split(",")[1]) == 6

    def test_exception_info(self):
        fmt = LogFormatter(LogConfig.from_params("info", colors=False))
        try:
            raise ValueError("bad")
        except ValueError:
            record = logging.LogRecord(
                "/t", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )
        assert "ValueError: bad" in fmt.format(record)
