"""
Process fixtures for testing.

Provides paths to small system binaries, a factory that guarantees teardown of
every Process a test creates, and helpers for pipe I/O.
"""

import os
import shutil
import time
from collections.abc import Callable, Generator

import pytest

from procmanage import Process
from procmanage.log import Logger


def read_all(fd: int) -> bytes:
    """Read from fd until EOF."""
    chunks = []
    while True:
        chunk = os.read(fd, 4096)
        if not chunk:
            return b"".join(chunks)
        chunks.append(chunk)


def read_exactly(fd: int, n: int) -> bytes:
    """Read n bytes from fd, or fewer if EOF comes first."""
    data = b""
    while len(data) < n:
        chunk = os.read(fd, n - len(data))
        if not chunk:
            break
        data += chunk
    return data


def wait_until(predicate: Callable[[], bool], timeout: float = 5.0) -> bool:
    """Poll predicate until it holds or timeout seconds pass."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def _require(name: str) -> str:
    path = shutil.which(name)
    if path is None:
        pytest.skip(f"{name} not available")
    return path


@pytest.fixture
def echo_path() -> str:
    return _require("echo")


@pytest.fixture
def cat_path() -> str:
    return _require("cat")


@pytest.fixture
def sh_path() -> str:
    return _require("sh")


@pytest.fixture
def env_path() -> str:
    return _require("env")


@pytest.fixture
def make_process(
    quiet_lg: Logger,
) -> Generator[Callable[..., Process], None, None]:
    """
    Factory for Process.create() that closes and frees everything it made.
    """
    made: list[Process] = []

    def factory(*args, **kwargs) -> Process:
        kwargs.setdefault("lg", quiet_lg)
        proc = Process.create(*args, **kwargs)
        made.append(proc)
        return proc

    yield factory

    for proc in made:
        proc.free(force=True)
