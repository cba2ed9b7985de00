"""Tests for blocker resolution."""

from datetime import datetime, timezone

from stradl_mcp.engine.blockers import auto_resolve, blockers_for_task, is_blocked, resolve_dependents


class TestAutoResolve:
    """Tests for auto_resolve."""

    def test_past_date_resolves(self, make_blocker):
        blockers = [make_blocker(1, task_id=1, blocked_until_date="2020-01-01T00:00:00Z")]
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)

        assert auto_resolve(blockers, [], now) is True
        assert blockers[0].resolved is True

    def test_date_equal_to_now_resolves(self, now, make_blocker):
        blockers = [make_blocker(1, task_id=1, blocked_until_date="2026-02-20T09:00:00.000Z")]
        assert auto_resolve(blockers, [], now) is True

    def test_future_date_stays_pending(self, now, make_blocker):
        blockers = [make_blocker(1, task_id=1, blocked_until_date="2026-02-21T00:00:00.000Z")]
        assert auto_resolve(blockers, [], now) is False
        assert blockers[0].resolved is False

    def test_completed_blocking_task_resolves(self, now, make_task, make_blocker):
        tasks = [make_task(1), make_task(2, completed_at="2026-02-19T00:00:00.000Z")]
        blockers = [make_blocker(1, task_id=1, blocked_by_task_id=2)]

        assert auto_resolve(blockers, tasks, now) is True
        assert blockers[0].resolved is True

    def test_open_or_missing_blocking_task_stays_pending(self, now, make_task, make_blocker):
        tasks = [make_task(1), make_task(2)]
        blockers = [
            make_blocker(1, task_id=1, blocked_by_task_id=2),
            make_blocker(2, task_id=1, blocked_by_task_id=99),
        ]
        assert auto_resolve(blockers, tasks, now) is False
        assert not any(b.resolved for b in blockers)

    def test_idempotent(self, now, make_task, make_blocker):
        tasks = [make_task(1), make_task(2, completed_at="2026-02-19T00:00:00.000Z")]
        blockers = [
            make_blocker(1, task_id=1, blocked_by_task_id=2),
            make_blocker(2, task_id=1, blocked_until_date="2020-01-01T00:00:00Z"),
        ]
        assert auto_resolve(blockers, tasks, now) is True
        assert auto_resolve(blockers, tasks, now) is False

    def test_self_reference_never_resolves(self, now, make_task, make_blocker):
        """A task blocked on itself stays blocked until the blocker is removed."""
        tasks = [make_task(1)]
        blockers = [make_blocker(1, task_id=1, blocked_by_task_id=1)]
        assert auto_resolve(blockers, tasks, now) is False
        assert is_blocked(1, blockers)


class TestBlockerHelpers:
    """Tests for is_blocked, resolve_dependents and blockers_for_task."""

    def test_is_blocked_ignores_resolved(self, make_blocker):
        blockers = [make_blocker(1, task_id=1, blocked_by_task_id=2, resolved=True)]
        assert is_blocked(1, blockers) is False

    def test_is_blocked_with_pending(self, make_blocker):
        blockers = [
            make_blocker(1, task_id=1, blocked_by_task_id=2, resolved=True),
            make_blocker(2, task_id=1, blocked_by_task_id=3),
        ]
        assert is_blocked(1, blockers) is True
        assert is_blocked(2, blockers) is False

    def test_resolve_dependents_only_touches_matching(self, make_blocker):
        blockers = [
            make_blocker(1, task_id=1, blocked_by_task_id=5),
            make_blocker(2, task_id=2, blocked_by_task_id=5),
            make_blocker(3, task_id=3, blocked_by_task_id=6),
            make_blocker(4, task_id=5, blocked_by_task_id=7),
        ]
        assert resolve_dependents(5, blockers) == 2
        assert [b.resolved for b in blockers] == [True, True, False, False]

    def test_blockers_for_task_sorted_by_id(self, make_blocker):
        blockers = [
            make_blocker(4, task_id=1, blocked_by_task_id=3),
            make_blocker(2, task_id=1, blocked_until_date="2026-03-01T00:00:00.000Z"),
            make_blocker(3, task_id=2, blocked_by_task_id=1),
        ]
        assert [b.id for b in blockers_for_task(1, blockers)] == [2, 4]
