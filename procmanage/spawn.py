"""
Fork with three pipes and describe the outcome as a tagged result.

fork() returns twice. Instead of branching on its raw return value at the call
site, fork_with_pipes() hands back one of:

    Parent(pid, stdin_fd, stdout_fd, stderr_fd)  in the calling process
    Child(continuation)                          in the new process
    Failed(error)                                when pipes or fork failed

The Child continuation wires descriptors 0/1/2 to the pipes, detaches into a
new session and replaces the program image. It never returns: if anything
before or during exec fails, the child exits with the configured status.
"""

from __future__ import annotations

import fcntl
import functools
import os
import signal
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import NoReturn, Union

STDIN_FILENO = 0
STDOUT_FILENO = 1
STDERR_FILENO = 2


@dataclass(frozen=True)
class Parent:
    """Fork succeeded; we are the caller and hold the parent-side pipe ends."""

    pid: int
    stdin_fd: int
    stdout_fd: int
    stderr_fd: int


@dataclass(frozen=True)
class Child:
    """Fork succeeded; we are the new process."""

    continuation: Callable[[], NoReturn]

    def run(self) -> NoReturn:
        self.continuation()
        # continuation always ends in exec or _exit
        raise AssertionError("child continuation returned")


@dataclass(frozen=True)
class Failed:
    """Pipe creation or fork failed; no process and no descriptors remain."""

    error: OSError


SpawnResult = Union[Parent, Child, Failed]


def _close_fds(*fds: int) -> None:
    for fd in fds:
        os.close(fd)


def _lift_fd(fd: int) -> int:
    """Move fd above the standard descriptors, closing the original."""
    if fd > STDERR_FILENO:
        return fd
    lifted = fcntl.fcntl(fd, fcntl.F_DUPFD, STDERR_FILENO + 1)
    os.close(fd)
    return lifted


def _make_pipes(n: int = 3) -> list[tuple[int, int]]:
    """Create n pipes, closing the ones already made if a later one fails."""
    pipes: list[tuple[int, int]] = []
    try:
        for _ in range(n):
            pipes.append(os.pipe())
    except OSError:
        for r, w in pipes:
            _close_fds(r, w)
        raise
    return pipes


def materialize_env(envp: Sequence[str]) -> dict[str, str]:
    """
    Turn KEY=VALUE strings into the mapping execve() expects.

    The first occurrence of a key wins, matching what getenv() in the child
    would return for a duplicated entry.
    """
    env: dict[str, str] = {}
    for entry in envp:
        key, sep, value = entry.partition("=")
        if not sep or not key:
            raise ValueError(f"environment entry must be KEY=VALUE: {entry!r}")
        env.setdefault(key, value)
    return env


def _exec_child(
    path: str,
    argv: Sequence[str],
    env: Mapping[str, str],
    stdin_pipe: tuple[int, int],
    stdout_pipe: tuple[int, int],
    stderr_pipe: tuple[int, int],
    exec_failure_status: int,
) -> NoReturn:
    in_r, in_w = stdin_pipe
    out_r, out_w = stdout_pipe
    err_r, err_w = stderr_pipe
    try:
        _close_fds(in_w, out_r, err_r)

        # Child ends land on 0-2 when the caller had those closed.
        in_r, out_w, err_w = (_lift_fd(fd) for fd in (in_r, out_w, err_w))

        os.dup2(in_r, STDIN_FILENO)
        os.dup2(out_w, STDOUT_FILENO)
        os.dup2(err_w, STDERR_FILENO)
        _close_fds(in_r, out_w, err_w)

        # Python ignores SIGPIPE; the new program should not inherit that.
        signal.signal(signal.SIGPIPE, signal.SIG_DFL)
        os.setsid()

        os.execve(path, list(argv), dict(env))
    finally:
        os._exit(exec_failure_status)


def fork_with_pipes(
    path: str,
    argv: Sequence[str],
    env: Mapping[str, str],
    exec_failure_status: int,
) -> SpawnResult:
    """
    Create stdin/stdout/stderr pipes and fork.

    Args:
        path: Executable to run in the child
        argv: Argument vector for the child, argv[0] included
        env: Complete environment for the child
        exec_failure_status: Exit status of the child when exec fails

    Returns:
        Parent, Child or Failed depending on which side of the fork we are on
    """
    try:
        stdin_pipe, stdout_pipe, stderr_pipe = _make_pipes()
    except OSError as e:
        return Failed(e)

    try:
        pid = os.fork()
    except OSError as e:
        _close_fds(*stdin_pipe, *stdout_pipe, *stderr_pipe)
        return Failed(e)

    if pid == 0:
        return Child(
            functools.partial(
                _exec_child,
                path,
                argv,
                env,
                stdin_pipe,
                stdout_pipe,
                stderr_pipe,
                exec_failure_status,
            )
        )

    # The child owns the read end of stdin and the write ends of stdout/stderr.
    _close_fds(stdin_pipe[0], stdout_pipe[1], stderr_pipe[1])
    return Parent(
        pid=pid,
        stdin_fd=stdin_pipe[1],
        stdout_fd=stdout_pipe[0],
        stderr_fd=stderr_pipe[0],
    )
