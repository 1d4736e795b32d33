"""Tests for the lifecycle guard."""

from foodorder.lifecycle import LifecycleGuard


class TestLifecycleGuard:
    def test_alive_on_construction(self):
        assert LifecycleGuard().is_alive

    def test_teardown(self):
        guard = LifecycleGuard()
        guard.teardown()
        assert not guard.is_alive

    def test_teardown_twice_is_harmless(self):
        guard = LifecycleGuard()
        guard.teardown()
        guard.teardown()
        assert not guard.is_alive

    def test_commit_applies_while_alive(self):
        guard = LifecycleGuard()
        writes = []
        result = guard.commit(writes.append, "x")
        assert writes == ["x"]
        assert result is None

    def test_commit_returns_mutation_result(self):
        guard = LifecycleGuard()
        assert guard.commit(lambda a, b=0: a + b, 1, b=2) == 3

    def test_commit_after_teardown_is_dropped(self):
        guard = LifecycleGuard()
        writes = []
        guard.teardown()
        assert guard.commit(writes.append, "x") is None
        assert writes == []
