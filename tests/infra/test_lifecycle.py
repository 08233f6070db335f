"""
Tests for the handle-style lifecycle functions.
"""

import pytest

from procmanage import ProcessState, ProcessStillRunningError, lifecycle
from tests.fixtures.process import read_all


@pytest.mark.unit
class TestHandleFunctions:
    def test_create_and_accumulate(self, quiet_lg):
        p = lifecycle.create("/bin/prog", ["a"], ["B=1"], lg=quiet_lg)
        lifecycle.add_arg(p, "c")
        lifecycle.add_env(p, "D=2")
        lifecycle.add_args(p, ["e", "f"])
        lifecycle.add_envs(p, ["G=3"])
        lifecycle.add_args(p, None)
        lifecycle.add_envs(p, None)
        assert p.argv == ["a", "c", "e", "f"]
        assert p.envp == ["B=1", "D=2", "G=3"]

    def test_create_with_insert_path(self, quiet_lg):
        p = lifecycle.create("/bin/prog", ["a"], insert_path=True, lg=quiet_lg)
        assert p.argv == ["/bin/prog", "a"]

    def test_exposed_on_package(self):
        import procmanage

        assert procmanage.lifecycle is lifecycle
        assert "lifecycle" in procmanage.__all__

    def test_free_none_is_noop(self):
        lifecycle.free(None)

    def test_close_none_is_noop(self):
        lifecycle.close(None)

    def test_free_idle(self, quiet_lg):
        p = lifecycle.create("/bin/prog", lg=quiet_lg)
        lifecycle.free(p)
        assert p.state is ProcessState.FREED


@pytest.mark.integration
class TestHandleLifecycle:
    def test_open_close_free(self, quiet_lg, echo_path):
        p = lifecycle.create(echo_path, ["echo", "hi"], lg=quiet_lg)
        assert lifecycle.open(p) is True
        assert read_all(p.stdout_fd) == b"hi\n"
        with pytest.raises(ProcessStillRunningError):
            lifecycle.free(p)
        lifecycle.close(p)
        lifecycle.free(p)
        assert p.state is ProcessState.FREED

    def test_free_with_force(self, quiet_lg, cat_path):
        p = lifecycle.create(cat_path, ["cat"], lg=quiet_lg)
        lifecycle.open(p)
        lifecycle.free(p, force=True)
        assert p.state is ProcessState.FREED
        assert not p.running
