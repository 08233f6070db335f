"""
Per-process behavior options.
"""

from __future__ import annotations

import signal
from dataclasses import dataclass
from typing import Any

from ..exceptions import ConfigError
from .constants import DEFAULT_EXEC_FAILURE_STATUS


def resolve_signal(value: str | int | signal.Signals) -> int:
    """
    Resolve a signal from its name ("SIGKILL", "kill") or number.

    Raises:
        ConfigError: If the name or number is not a known signal
    """
    if isinstance(value, bool):
        raise ConfigError("invalid signal", value=value)
    if isinstance(value, int):
        try:
            return int(signal.Signals(value))
        except ValueError as e:
            raise ConfigError("unknown signal number", value=value) from e
    if isinstance(value, str):
        if value.isnumeric():
            return resolve_signal(int(value))
        name = value.upper()
        if not name.startswith("SIG"):
            name = "SIG" + name
        try:
            return int(signal.Signals[name])
        except KeyError as e:
            raise ConfigError("unknown signal name", value=value) from e
    raise ConfigError("invalid signal", value=value)


@dataclass(frozen=True)
class ProcessOptions:
    """
    Options controlling how a Process is built, spawned and torn down.

    Attributes:
        insert_path_as_argv0: Push the binary path as the first argument on
            create, before any caller-supplied arguments
        kill_signal: Signal sent by close() to a running child
        exec_failure_status: Exit status of a child that failed to exec
    """

    insert_path_as_argv0: bool = False
    kill_signal: int = int(signal.SIGKILL)
    exec_failure_status: int = DEFAULT_EXEC_FAILURE_STATUS

    @classmethod
    def from_params(
        cls,
        insert_path_as_argv0: bool = False,
        kill_signal: str | int = "SIGKILL",
        exec_failure_status: int = DEFAULT_EXEC_FAILURE_STATUS,
    ) -> ProcessOptions:
        """
        Create ProcessOptions from loosely typed values.

        Raises:
            ConfigError: If the signal is unknown or the status is not in 1..255
        """
        status = int(exec_failure_status)
        if not 1 <= status <= 255:
            raise ConfigError(
                "exec failure status must be in 1..255", value=exec_failure_status
            )
        return cls(
            insert_path_as_argv0=bool(insert_path_as_argv0),
            kill_signal=resolve_signal(kill_signal),
            exec_failure_status=status,
        )

    @classmethod
    def from_config(
        cls, config_dict: dict[str, Any], section: str = "process"
    ) -> ProcessOptions:
        """
        Create ProcessOptions from a configuration dictionary.

        Example:
            options = ProcessOptions.from_config(load_config("etc/procmanage.yaml"))
        """
        current = config_dict.get(section) or {}
        if not isinstance(current, dict):
            raise ConfigError("section must be a mapping", section=section)
        return cls.from_params(
            insert_path_as_argv0=current.get("insert_path_as_argv0", False),
            kill_signal=current.get("kill_signal", "SIGKILL"),
            exec_failure_status=current.get(
                "exec_failure_status", DEFAULT_EXEC_FAILURE_STATUS
            ),
        )
