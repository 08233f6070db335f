"""
Handle-style functions over Process.

These mirror the Process methods for callers that prefer passing a handle
around, in the manner of the os module:

    from procmanage import lifecycle

    p = lifecycle.create("/bin/echo", ["echo"], ["LANG=C"])
    lifecycle.add_arg(p, "hello")
    if lifecycle.open(p):
        out = os.read(p.stdout_fd, 64)
    lifecycle.close(p)
    lifecycle.free(p)

open() shadows the builtin inside this module only; import the module rather
than its names.
"""

from collections.abc import Iterable

from .config import ProcessOptions
from .log import Logger
from .process import Process


def create(
    path: str,
    argv: Iterable[str] | None = None,
    envp: Iterable[str] | None = None,
    *,
    insert_path: bool | None = None,
    options: ProcessOptions | None = None,
    lg: Logger | None = None,
) -> Process:
    """Create an idle Process; see Process.create()."""
    return Process.create(
        path, argv, envp, insert_path=insert_path, options=options, lg=lg
    )


def add_arg(p: Process, arg: str) -> None:
    p.add_arg(arg)


def add_env(p: Process, env: str) -> None:
    p.add_env(env)


def add_args(p: Process, args: Iterable[str] | None) -> None:
    p.add_args(args)


def add_envs(p: Process, envs: Iterable[str] | None) -> None:
    p.add_envs(envs)


def open(p: Process) -> bool:  # noqa: A001
    """Spawn p; True iff a child was forked."""
    return p.open()


def close(p: Process | None) -> None:
    """Close p's pipes, kill and try to reap its child. None is a no-op."""
    if p is not None:
        p.close()


def free(p: Process | None, force: bool = False) -> None:
    """
    Free p. None is a no-op.

    Raises:
        ProcessStillRunningError: If p is running and force is False
    """
    if p is not None:
        p.free(force=force)
