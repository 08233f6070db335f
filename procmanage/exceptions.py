"""
Exception hierarchy for procmanage.

Every error raised on purpose by this package derives from ProcError, so callers
can catch package failures with a single except clause. Spawn failures from the
plain open() call are reported as a False return value rather than an exception;
SpawnError only surfaces from the context-manager form.
"""

from typing import Any


class ProcError(Exception):
    """
    Base exception for all procmanage errors.

    Carries a human-readable message plus optional keyword context that is
    rendered after the message.

    Example:
        try:
            proc.free()
        except ProcError as e:
            lg.error("cannot free process", extra={"exception": e})
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigError(ProcError):
    """
    Configuration-related errors.

    Examples:
        - Config file not found or too large
        - Invalid YAML syntax
        - Unknown signal name or out-of-range exit status
    """

    pass


class SpawnError(ProcError):
    """
    Raised when a process could not be spawned inside a managed scope.

    open() itself reports spawn failure as False; the context-manager entry
    turns that into this exception so the body never runs without a child.
    """

    pass


class ProcessStateError(ProcError):
    """Operation is not valid in the current lifecycle state."""

    pass


class ProcessFreedError(ProcessStateError):
    """Operation attempted on a process entity that was already freed."""

    pass


class ProcessStillRunningError(ProcessStateError):
    """free() called while the child is still running and force was not set."""

    pass
