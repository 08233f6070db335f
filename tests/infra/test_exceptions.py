"""
Tests for the procmanage exception hierarchy.
"""

import pytest

from procmanage.exceptions import (
    ConfigError,
    ProcError,
    ProcessFreedError,
    ProcessStateError,
    ProcessStillRunningError,
    SpawnError,
)


@pytest.mark.unit
class TestProcError:
    """Test ProcError base class."""

    def test_message_only(self):
        error = ProcError("boom")
        assert str(error) == "boom"
        assert error.message == "boom"
        assert error.context == {}

    def test_context_is_rendered(self):
        error = ProcError("cannot free", pid=42, state="running")
        assert error.context == {"pid": 42, "state": "running"}
        assert str(error) == "cannot free (pid=42, state=running)"


@pytest.mark.unit
class TestHierarchy:
    """Test exception inheritance."""

    @pytest.mark.parametrize(
        "cls", [ConfigError, SpawnError, ProcessStateError]
    )
    def test_direct_subclasses(self, cls):
        assert issubclass(cls, ProcError)

    @pytest.mark.parametrize(
        "cls", [ProcessFreedError, ProcessStillRunningError]
    )
    def test_state_errors(self, cls):
        error = cls("misuse", operation="open")
        assert isinstance(error, ProcessStateError)
        assert isinstance(error, ProcError)
        assert "operation=open" in str(error)

    def test_catch_all_with_base(self):
        with pytest.raises(ProcError):
            raise ProcessStillRunningError("still running", pid=1)
