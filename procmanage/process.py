"""
Process entity and its lifecycle.

A Process owns a binary path, an argument array, an environment array, the
parent-side ends of three pipes and the pid of the child it spawned. It moves
through a small state machine:

    create -> IDLE --open--> RUNNING --close--> IDLE --free--> FREED

Descriptors and pid are set together by open() and reset together by close().
A closed Process can be opened again; a freed one cannot be used at all.

Example:
    proc = Process.create("/bin/echo", ["echo", "hello"])
    with proc:
        data = os.read(proc.stdout_fd, 64)
    proc.free()
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from enum import Enum
from types import TracebackType

from .config import ProcessOptions
from .exceptions import ProcessFreedError, ProcessStillRunningError, SpawnError
from .log import Logger, derive_lg, get_default_lg
from .spawn import Child, Failed, fork_with_pipes, materialize_env
from .strarray import StringArray

UNSET_FD = -1
UNSET_PID = -1


class ProcessState(str, Enum):
    """
    Lifecycle states of a Process entity.

    - IDLE: no child; descriptors and pid unset. Reached after create or close.
    - RUNNING: a child was forked and has not been closed yet.
    - FREED: owned strings released; the entity is unusable.
    """

    IDLE = "idle"
    RUNNING = "running"
    FREED = "freed"


class Process:
    """
    Handle for a child process and the resources it owns.

    Not thread-safe: a Process has a single owner, and concurrent calls must be
    serialized by the caller.
    """

    def __init__(
        self,
        path: str,
        options: ProcessOptions | None = None,
        lg: Logger | None = None,
    ) -> None:
        """
        Create an idle Process with empty argument and environment arrays.

        Most callers want Process.create(), which also fills argv and envp.

        Args:
            path: Path to the executable (absolute or relative)
            options: Spawn and teardown options; defaults to ProcessOptions()
            lg: Logger; defaults to a child of the package logger

        Raises:
            ValueError: If path is empty or contains a null character
        """
        if not isinstance(path, str) or not path:
            raise ValueError("process path must be a non-empty string")
        if "\x00" in path:
            raise ValueError(f"embedded null character in path {path!r}")

        self._path: str | None = str(path)
        self._argv = StringArray()
        self._envp = StringArray()
        self._stdin_fd = UNSET_FD
        self._stdout_fd = UNSET_FD
        self._stderr_fd = UNSET_FD
        self._pid = UNSET_PID
        self._state = ProcessState.IDLE
        self._options = options or ProcessOptions()
        self._lg = lg if lg is not None else derive_lg(get_default_lg(), "process")

    @classmethod
    def create(
        cls,
        path: str,
        argv: Iterable[str] | None = None,
        envp: Iterable[str] | None = None,
        *,
        insert_path: bool | None = None,
        options: ProcessOptions | None = None,
        lg: Logger | None = None,
    ) -> Process:
        """
        Create a Process and fill its argument and environment arrays.

        Args:
            path: Path to the executable
            argv: Initial arguments, appended in order (None for none)
            envp: Initial KEY=VALUE environment entries (None for none)
            insert_path: Push path as argv[0] before argv; None defers to
                options.insert_path_as_argv0
            options: Spawn and teardown options
            lg: Logger

        Returns:
            An idle Process
        """
        proc = cls(path, options=options, lg=lg)
        if insert_path is None:
            insert_path = proc._options.insert_path_as_argv0
        if insert_path:
            proc.add_arg(path)
        proc.add_args(argv)
        proc.add_envs(envp)
        proc._lg.debug(
            "created process",
            extra={"path": path, "argc": len(proc._argv), "envc": len(proc._envp)},
        )
        return proc

    # -- accessors ---------------------------------------------------------

    @property
    def path(self) -> str | None:
        """Executable path; None once freed."""
        return self._path

    @property
    def argv(self) -> list[str]:
        """Copy of the argument array, in insertion order."""
        return self._argv.to_list()

    @property
    def envp(self) -> list[str]:
        """Copy of the environment array, in insertion order."""
        return self._envp.to_list()

    @property
    def stdin_fd(self) -> int:
        """Write end of the child's stdin pipe, or UNSET_FD."""
        return self._stdin_fd

    @property
    def stdout_fd(self) -> int:
        """Read end of the child's stdout pipe, or UNSET_FD."""
        return self._stdout_fd

    @property
    def stderr_fd(self) -> int:
        """Read end of the child's stderr pipe, or UNSET_FD."""
        return self._stderr_fd

    @property
    def pid(self) -> int:
        """Pid of the running child, or UNSET_PID."""
        return self._pid

    @property
    def state(self) -> ProcessState:
        return self._state

    @property
    def running(self) -> bool:
        return self._pid != UNSET_PID

    @property
    def options(self) -> ProcessOptions:
        return self._options

    # -- accumulation ------------------------------------------------------

    def _check_not_freed(self, operation: str) -> str:
        """Return the executable path, or raise if the process was freed."""
        if self._state is ProcessState.FREED or self._path is None:
            raise ProcessFreedError(
                "process already freed", operation=operation
            )
        return self._path

    def add_arg(self, arg: str | bytes) -> None:
        """
        Append one argument.

        Arguments appended while running only take effect on the next open().

        Raises:
            ProcessFreedError: If the process was freed
            ValueError: If arg contains a null character
        """
        self._check_not_freed("add_arg")
        self._argv.push(arg)
        self._log_late_append("argument", arg)

    def add_env(self, env: str | bytes) -> None:
        """
        Append one KEY=VALUE environment entry.

        Raises:
            ProcessFreedError: If the process was freed
            ValueError: If env is not KEY=VALUE or contains a null character
        """
        self._check_not_freed("add_env")
        if isinstance(env, bytes):
            env = os.fsdecode(env)
        key, sep, _ = env.partition("=")
        if not sep or not key:
            raise ValueError(f"environment entry must be KEY=VALUE: {env!r}")
        self._envp.push(env)
        self._log_late_append("environment", env)

    def add_args(self, args: Iterable[str] | None) -> None:
        """Append every argument in args, in order. None is a no-op."""
        if args is None:
            return
        for arg in args:
            self.add_arg(arg)

    def add_envs(self, envs: Iterable[str] | None) -> None:
        """Append every KEY=VALUE entry in envs, in order. None is a no-op."""
        if envs is None:
            return
        for env in envs:
            self.add_env(env)

    def _log_late_append(self, kind: str, value: str) -> None:
        if self._state is ProcessState.RUNNING:
            self._lg.debug(
                f"{kind} appended to running process",
                extra={"pid": self._pid, "value": value},
            )
        else:
            self._lg.trace2(f"appended {kind}", extra={"value": value})

    # -- lifecycle ---------------------------------------------------------

    def _exec_argv(self, path: str) -> list[str]:
        """
        Argument vector handed to exec.

        exec needs at least one argument, so an empty array runs the program
        with its path as argv[0].
        """
        if not self._argv:
            return [path]
        return self._argv.to_list()

    def open(self) -> bool:
        """
        Spawn the child process.

        Creates three pipes, forks, and in the child redirects stdin/stdout/
        stderr to the pipes, starts a new session and execs path with argv and
        envp. Exec failure in the child is not visible here: the child exits
        with options.exec_failure_status and open() still returns True.

        Returns:
            True if a child was forked; False if one is already running or
            pipe creation/fork failed (fields stay unset and open() may be
            retried)

        Raises:
            ProcessFreedError: If the process was freed
        """
        path = self._check_not_freed("open")
        if self._pid != UNSET_PID:
            self._lg.debug("process already running", extra={"pid": self._pid})
            return False

        argv = self._exec_argv(path)
        env = materialize_env(self._envp.to_list())

        result = fork_with_pipes(
            path, argv, env, self._options.exec_failure_status
        )
        if isinstance(result, Child):
            result.run()
        if isinstance(result, Failed):
            self._lg.warning(
                "spawn failed", extra={"path": path, "exception": result.error}
            )
            return False

        self._stdin_fd = result.stdin_fd
        self._stdout_fd = result.stdout_fd
        self._stderr_fd = result.stderr_fd
        self._pid = result.pid
        self._state = ProcessState.RUNNING
        self._lg.debug("spawned process", extra={"path": path, "pid": self._pid})
        return True

    def _close_fd(self, fd: int, name: str) -> None:
        try:
            os.close(fd)
        except OSError as e:
            self._lg.debug(
                "descriptor already closed", extra={"fd": name, "exception": e}
            )

    def close(self) -> None:
        """
        Close the pipes, kill the child and try once to reap it.

        Each descriptor is closed and reset independently. The child is sent
        options.kill_signal and reaped without blocking; pid is reset whether
        or not the reap succeeded, so a zombie may linger briefly. Safe to call
        on an idle or freed process. The process can be opened again afterwards.
        """
        if self._stdin_fd != UNSET_FD:
            self._close_fd(self._stdin_fd, "stdin")
            self._stdin_fd = UNSET_FD
        if self._stdout_fd != UNSET_FD:
            self._close_fd(self._stdout_fd, "stdout")
            self._stdout_fd = UNSET_FD
        if self._stderr_fd != UNSET_FD:
            self._close_fd(self._stderr_fd, "stderr")
            self._stderr_fd = UNSET_FD

        if self._pid != UNSET_PID:
            pid = self._pid
            self._terminate(pid)
            self._pid = UNSET_PID
            self._lg.debug("closed process", extra={"pid": pid})

        if self._state is ProcessState.RUNNING:
            self._state = ProcessState.IDLE

    def _terminate(self, pid: int) -> None:
        try:
            os.kill(pid, self._options.kill_signal)
        except ProcessLookupError:
            self._lg.debug("process already gone", extra={"pid": pid})
            return
        try:
            reaped, _ = os.waitpid(pid, os.WNOHANG)
        except ChildProcessError:
            self._lg.debug("process already reaped", extra={"pid": pid})
            return
        if reaped == 0:
            self._lg.trace("process not reaped yet", extra={"pid": pid})

    def free(self, force: bool = False) -> None:
        """
        Release path, argv and envp; the process cannot be used afterwards.

        Args:
            force: Close a still-running child first instead of refusing

        Raises:
            ProcessStillRunningError: If a child is running and force is False
        """
        if self._state is ProcessState.FREED:
            return
        if self._pid != UNSET_PID:
            if not force:
                raise ProcessStillRunningError(
                    "close the process before freeing it", pid=self._pid
                )
            self.close()

        self._path = None
        self._argv.clear()
        self._envp.clear()
        self._state = ProcessState.FREED
        self._lg.debug("freed process")

    # -- scoped acquisition ------------------------------------------------

    def __enter__(self) -> Process:
        """Open the process for the duration of a with block."""
        if not self.open():
            raise SpawnError(
                "could not spawn process", path=self._path, running=self.running
            )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"Process(path={self._path!r}, state={self._state.value}, "
            f"pid={self._pid})"
        )


@contextmanager
def spawned(
    path: str,
    argv: Iterable[str] | None = None,
    envp: Iterable[str] | None = None,
    *,
    insert_path: bool | None = None,
    options: ProcessOptions | None = None,
    lg: Logger | None = None,
) -> Iterator[Process]:
    """
    Create, open, and on exit close and free a Process.

    Example:
        with spawned("/bin/cat", ["cat"]) as proc:
            os.write(proc.stdin_fd, b"ping")

    Raises:
        SpawnError: If the child could not be forked
    """
    proc = Process.create(
        path, argv, envp, insert_path=insert_path, options=options, lg=lg
    )
    try:
        with proc:
            yield proc
    finally:
        proc.free()
