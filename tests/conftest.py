"""Pytest configuration and fixtures for stradl-mcp tests."""

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from stradl_mcp.config import get_settings
from stradl_mcp.models.task import AppData, BlockerModel, TaskModel
from stradl_mcp.utils.clock import format_timestamp
from stradl_mcp.utils.storage import get_store

NOW = datetime(2026, 2, 20, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    """Fixed "current time" shared by the engine tests."""
    return NOW


@pytest.fixture
def make_task():
    """Factory for TaskModel instances; ages are hours before NOW."""

    def _make(task_id, title=None, priority="P1", created_hours_ago=0.0, updated_hours_ago=None, **fields):
        if updated_hours_ago is None:
            updated_hours_ago = created_hours_ago
        return TaskModel(
            id=task_id,
            title=title or f"Task {task_id}",
            priority=priority,
            created_at=format_timestamp(NOW - timedelta(hours=created_hours_ago)),
            updated_at=format_timestamp(NOW - timedelta(hours=updated_hours_ago)),
            **fields,
        )

    return _make


@pytest.fixture
def make_blocker():
    """Factory for BlockerModel instances."""

    def _make(blocker_id, task_id, blocked_by_task_id=None, blocked_until_date=None, resolved=False):
        return BlockerModel(
            id=blocker_id,
            task_id=task_id,
            blocked_by_task_id=blocked_by_task_id,
            blocked_until_date=blocked_until_date,
            resolved=resolved,
        )

    return _make


@pytest.fixture
def make_data():
    """Build an AppData snapshot with id counters past the given records."""

    def _make(tasks=(), blockers=(), **settings):
        tasks = list(tasks)
        blockers = list(blockers)
        data = AppData(
            tasks=tasks,
            blockers=blockers,
            next_task_id=max((t.id for t in tasks), default=0) + 1,
            next_blocker_id=max((b.id for b in blockers), default=0) + 1,
        )
        for name, value in settings.items():
            setattr(data.settings, name, value)
        return data

    return _make


@pytest.fixture
def store(tmp_path, monkeypatch):
    """A JsonStore on a temp file, wired in through the environment."""
    monkeypatch.setenv("STRADL_DATA_FILE", str(tmp_path / "stradl" / "tasks.json"))
    monkeypatch.setenv("STRADL_PROJECT_ROOT", str(tmp_path / "project"))
    get_settings.cache_clear()
    get_store.cache_clear()
    yield get_store()
    get_settings.cache_clear()
    get_store.cache_clear()


@pytest.fixture
def clock():
    """Freeze the tool layer's clock at NOW. Set ``return_value`` to move it."""
    with patch("stradl_mcp.tools.common.utc_now") as mock_now:
        mock_now.return_value = NOW
        yield mock_now
