"""Tests for task classification, ranking and focus normalization."""

from datetime import timedelta

import pytest

from stradl_mcp.engine.ranking import _VIEWS, classify, normalize_focus, rank, refresh, select_view
from stradl_mcp.enums import View
from stradl_mcp.models.task import SettingsModel
from stradl_mcp.utils.clock import format_timestamp


def _ids(tasks):
    return [t.id for t in tasks]


class TestRank:
    """Tests for rank."""

    def test_priority_then_created(self, make_task):
        tasks = [
            make_task(1, priority="P2", created_hours_ago=10),
            make_task(2, priority="P0", created_hours_ago=1),
            make_task(3, priority="P1", created_hours_ago=5),
            make_task(4, priority="P0", created_hours_ago=3),
        ]
        assert _ids(rank(tasks)) == [4, 2, 3, 1]

    def test_updated_at_does_not_change_order(self, now, make_task):
        first = make_task(1, priority="P1", created_hours_ago=10)
        second = make_task(2, priority="P1", created_hours_ago=5)
        assert _ids(rank([first, second])) == [1, 2]

        first.updated_at = format_timestamp(now - timedelta(days=365))
        second.updated_at = format_timestamp(now + timedelta(days=365))
        assert _ids(rank([first, second])) == [1, 2]
        assert _ids(rank([second, first])) == [1, 2]

    def test_equal_keys_keep_input_order(self, make_task):
        tasks = [make_task(3, created_hours_ago=1), make_task(1, created_hours_ago=1)]
        assert _ids(rank(tasks)) == [3, 1]


class TestActiveBacklogSplit:
    """Tests for the active/backlog split at top_n."""

    def test_twenty_five_p1_tasks(self, now, make_task):
        tasks = [make_task(i, priority="P1", created_hours_ago=100 - i) for i in range(1, 26)]
        settings = SettingsModel(top_n=20)

        active = select_view(tasks, [], settings, View.ACTIVE, now)
        backlog = select_view(tasks, [], settings, View.BACKLOG, now)

        assert _ids(active) == list(range(1, 21))
        assert _ids(backlog) == list(range(21, 26))

    def test_p0_tasks_take_the_top_slots(self, now, make_task):
        p1 = [make_task(i, priority="P1", created_hours_ago=200 - i) for i in range(1, 21)]
        p0 = [make_task(i, priority="P0", created_hours_ago=1) for i in range(21, 26)]
        settings = SettingsModel(top_n=20)

        active = select_view(p1 + p0, [], settings, View.ACTIVE, now)
        backlog = select_view(p1 + p0, [], settings, View.BACKLOG, now)

        assert _ids(active) == list(range(21, 26)) + list(range(1, 16))
        assert _ids(backlog) == list(range(16, 21))

    def test_ineligible_tasks_do_not_use_slots(self, now, make_task, make_blocker):
        tasks = [
            make_task(1, created_hours_ago=9),
            make_task(2, created_hours_ago=8, is_archived=True),
            make_task(3, created_hours_ago=7, completed_at=format_timestamp(now)),
            make_task(4, created_hours_ago=6, hidden_until_at=format_timestamp(now + timedelta(hours=1))),
            make_task(5, created_hours_ago=5),
            make_task(6, priority=None, created_hours_ago=4),
            make_task(7, created_hours_ago=3),
            make_task(8, created_hours_ago=2),
        ]
        blockers = [make_blocker(1, task_id=5, blocked_by_task_id=1)]
        settings = SettingsModel(top_n=2)

        assert _ids(select_view(tasks, blockers, settings, View.ACTIVE, now)) == [1, 7]
        assert _ids(select_view(tasks, blockers, settings, View.BACKLOG, now)) == [8]


class TestOtherViews:
    """Tests for the ideas, blocked, hidden, completed and archive views."""

    @pytest.fixture
    def tasks(self, now, make_task):
        return [
            make_task(1, priority=None, updated_hours_ago=5),
            make_task(2, priority=None, updated_hours_ago=10),
            make_task(3, updated_hours_ago=3),
            make_task(4, updated_hours_ago=9),
            make_task(5, hidden_until_at=format_timestamp(now + timedelta(minutes=60))),
            make_task(6, hidden_until_at=format_timestamp(now + timedelta(minutes=15))),
            make_task(7, completed_at=format_timestamp(now - timedelta(hours=2))),
            make_task(8, completed_at=format_timestamp(now - timedelta(hours=1))),
            make_task(9, updated_hours_ago=4, is_archived=True),
            make_task(10, updated_hours_ago=1, is_archived=True),
            make_task(11, hidden_until_at=format_timestamp(now - timedelta(minutes=1))),
        ]

    @pytest.fixture
    def blockers(self, make_blocker):
        return [
            make_blocker(1, task_id=3, blocked_by_task_id=1),
            make_blocker(2, task_id=4, blocked_until_date="2026-03-01T00:00:00.000Z"),
            make_blocker(3, task_id=9, blocked_by_task_id=1),
        ]

    def _view(self, tasks, blockers, view, now):
        return _ids(select_view(tasks, blockers, SettingsModel(), view, now))

    def test_ideas_oldest_update_first(self, now, tasks, blockers):
        assert self._view(tasks, blockers, View.IDEAS, now) == [2, 1]

    def test_blocked_open_tasks_only(self, now, tasks, blockers):
        assert self._view(tasks, blockers, View.BLOCKED, now) == [4, 3]

    def test_hidden_soonest_first(self, now, tasks, blockers):
        assert self._view(tasks, blockers, View.HIDDEN, now) == [6, 5]

    def test_expired_hide_is_active_again(self, now, tasks, blockers):
        assert 11 in self._view(tasks, blockers, View.ACTIVE, now)

    def test_completed_newest_first(self, now, tasks, blockers):
        assert self._view(tasks, blockers, View.COMPLETED, now) == [8, 7]

    def test_archive_most_recent_first(self, now, tasks, blockers):
        assert self._view(tasks, blockers, View.ARCHIVE, now) == [10, 9]

    def test_tasks_alias_selects_active(self, now, tasks, blockers):
        assert View("tasks") is View.ACTIVE
        assert self._view(tasks, blockers, "tasks", now) == self._view(tasks, blockers, View.ACTIVE, now)

    def test_every_view_has_a_selector(self):
        assert set(_VIEWS) == set(View)


class TestFocusAndRefresh:
    """Tests for normalize_focus, refresh and classify."""

    def test_focus_on_eligible_task_kept(self, now, make_task):
        settings = SettingsModel(focused_task_id=1)
        assert normalize_focus([make_task(1)], [], settings, now) is False
        assert settings.focused_task_id == 1

    @pytest.mark.parametrize(
        "fields",
        [
            {"is_archived": True},
            {"completed_at": "2026-02-20T08:00:00.000Z"},
            {"hidden_until_at": "2026-02-20T10:00:00.000Z"},
        ],
    )
    def test_focus_on_ineligible_task_cleared(self, now, make_task, fields):
        settings = SettingsModel(focused_task_id=1)
        assert normalize_focus([make_task(1, **fields)], [], settings, now) is True
        assert settings.focused_task_id is None

    def test_focus_on_blocked_task_cleared(self, now, make_task, make_blocker):
        settings = SettingsModel(focused_task_id=1)
        blockers = [make_blocker(1, task_id=1, blocked_by_task_id=2)]
        assert normalize_focus([make_task(1), make_task(2)], blockers, settings, now) is True
        assert settings.focused_task_id is None

    def test_focus_on_missing_task_cleared(self, now):
        settings = SettingsModel(focused_task_id=42)
        assert normalize_focus([], [], settings, now) is True
        assert settings.focused_task_id is None

    def test_classify_resolves_before_selecting(self, now, make_task, make_blocker):
        tasks = [make_task(1), make_task(2, completed_at="2026-02-19T00:00:00.000Z")]
        blockers = [make_blocker(1, task_id=1, blocked_by_task_id=2)]

        active, changed = classify(tasks, blockers, SettingsModel(), View.ACTIVE, now)

        assert changed is True
        assert _ids(active) == [1]
        assert blockers[0].resolved is True

    def test_classify_unchanged_state(self, now, make_task):
        _, changed = classify([make_task(1)], [], SettingsModel(), View.ACTIVE, now)
        assert changed is False

    def test_refresh_reports_changes(self, now, make_task, make_blocker, make_data):
        data = make_data(
            tasks=[make_task(1)],
            blockers=[make_blocker(1, task_id=1, blocked_until_date="2026-03-01T00:00:00.000Z")],
            focused_task_id=1,
        )
        assert refresh(data, now) is True
        assert data.settings.focused_task_id is None
        assert refresh(data, now) is False
