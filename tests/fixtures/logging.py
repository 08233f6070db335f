"""
Logging fixtures for testing.

Provides fixtures for loggers and log capturing.
"""

import logging
from collections.abc import Generator
from io import StringIO

import pytest

from procmanage.log import LogConfig, Logger, LogFormatter


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None, None, None]:
    """
    Drop loggers registered by a test so the next test starts clean.
    """
    yield

    for name in list(logging.root.manager.loggerDict.keys()):
        if name.startswith("/") or name.startswith("test"):
            del logging.root.manager.loggerDict[name]


@pytest.fixture
def log_stream() -> StringIO:
    return StringIO()


@pytest.fixture
def capture_lg(log_stream: StringIO) -> Logger:
    """
    Logger at trace2 level writing uncolored lines into log_stream.
    """
    config = LogConfig.from_params("trace2", colors=False)
    lg = Logger("/test", config)
    handler = logging.StreamHandler(log_stream)
    handler.setLevel(1)
    handler.setFormatter(LogFormatter(config))
    lg.addHandler(handler)
    lg.propagate = False
    return lg


@pytest.fixture
def quiet_lg() -> Logger:
    """Logger with logging disabled."""
    return Logger("/test/quiet", LogConfig.from_params(False))
