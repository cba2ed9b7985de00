"""Task classification and ranking.

Every view is computed from the full snapshot on read. ``classify`` first
runs blocker auto-resolution and focus normalization, then hands off to the
read-only ``select_view``.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from stradl_mcp.engine.blockers import auto_resolve, is_blocked
from stradl_mcp.enums import PRIORITY_ORDER, View
from stradl_mcp.models.task import AppData, BlockerModel, SettingsModel, TaskModel
from stradl_mcp.utils.clock import parse_timestamp

logger = logging.getLogger(__name__)

UNKNOWN_PRIORITY_RANK = 99

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _ts(value: str | None) -> datetime:
    """Sort key for a stored timestamp; unparseable values sort as the epoch."""
    return parse_timestamp(value) or _EPOCH


def _priority_rank(task: TaskModel) -> int:
    if task.priority is None:
        return UNKNOWN_PRIORITY_RANK
    return PRIORITY_ORDER.get(task.priority.value, UNKNOWN_PRIORITY_RANK)


# ============================================================================
# Eligibility predicates
# ============================================================================


def is_hidden(task: TaskModel, now: datetime) -> bool:
    """Hidden while ``hidden_until_at`` is strictly in the future."""
    until = parse_timestamp(task.hidden_until_at)
    return until is not None and until > now


def is_open(task: TaskModel) -> bool:
    return not task.is_archived and task.completed_at is None


def is_focus_eligible(task: TaskModel, blockers: list[BlockerModel], now: datetime) -> bool:
    """Not archived, not completed, not blocked, not hidden."""
    return is_open(task) and not is_blocked(task.id, blockers) and not is_hidden(task, now)


def is_rank_eligible(task: TaskModel, blockers: list[BlockerModel], now: datetime) -> bool:
    """A prioritized task: focus-eligible and not an idea."""
    return task.priority is not None and is_focus_eligible(task, blockers, now)


# ============================================================================
# Ordering
# ============================================================================


def rank(tasks: list[TaskModel]) -> list[TaskModel]:
    """
    Order tasks by priority tier, then creation time.

    ``updated_at`` is not a key, so editing a task never moves it
    between the active and backlog views. Equal keys keep input order.
    """
    return sorted(tasks, key=lambda t: (_priority_rank(t), _ts(t.created_at)))


def prioritized_tasks(tasks: list[TaskModel], blockers: list[BlockerModel], now: datetime) -> list[TaskModel]:
    return rank([t for t in tasks if is_rank_eligible(t, blockers, now)])


# ============================================================================
# Views
# ============================================================================

_ViewFn = Callable[[list[TaskModel], list[BlockerModel], SettingsModel, datetime], list[TaskModel]]


def _active_view(
    tasks: list[TaskModel], blockers: list[BlockerModel], settings: SettingsModel, now: datetime
) -> list[TaskModel]:
    return prioritized_tasks(tasks, blockers, now)[: settings.top_n]


def _backlog_view(
    tasks: list[TaskModel], blockers: list[BlockerModel], settings: SettingsModel, now: datetime
) -> list[TaskModel]:
    return prioritized_tasks(tasks, blockers, now)[settings.top_n :]


def _ideas_view(
    tasks: list[TaskModel], blockers: list[BlockerModel], settings: SettingsModel, now: datetime
) -> list[TaskModel]:
    ideas = [t for t in tasks if t.priority is None and is_open(t) and not is_hidden(t, now)]
    return sorted(ideas, key=lambda t: _ts(t.updated_at))


def _blocked_view(
    tasks: list[TaskModel], blockers: list[BlockerModel], settings: SettingsModel, now: datetime
) -> list[TaskModel]:
    blocked = [t for t in tasks if is_open(t) and is_blocked(t.id, blockers)]
    return sorted(blocked, key=lambda t: _ts(t.updated_at))


def _hidden_view(
    tasks: list[TaskModel], blockers: list[BlockerModel], settings: SettingsModel, now: datetime
) -> list[TaskModel]:
    hidden = [t for t in tasks if is_open(t) and not is_blocked(t.id, blockers) and is_hidden(t, now)]

    def key(t: TaskModel) -> tuple[bool, datetime, datetime]:
        until = parse_timestamp(t.hidden_until_at)
        return (until is None, until or _EPOCH, _ts(t.updated_at))

    return sorted(hidden, key=key)


def _completed_view(
    tasks: list[TaskModel], blockers: list[BlockerModel], settings: SettingsModel, now: datetime
) -> list[TaskModel]:
    done = [t for t in tasks if t.completed_at is not None and not t.is_archived]
    return sorted(done, key=lambda t: _ts(t.completed_at), reverse=True)


def _archive_view(
    tasks: list[TaskModel], blockers: list[BlockerModel], settings: SettingsModel, now: datetime
) -> list[TaskModel]:
    archived = [t for t in tasks if t.is_archived]
    return sorted(archived, key=lambda t: _ts(t.updated_at), reverse=True)


_VIEWS: dict[View, _ViewFn] = {
    View.ACTIVE: _active_view,
    View.BACKLOG: _backlog_view,
    View.IDEAS: _ideas_view,
    View.BLOCKED: _blocked_view,
    View.HIDDEN: _hidden_view,
    View.COMPLETED: _completed_view,
    View.ARCHIVE: _archive_view,
}


def select_view(
    tasks: list[TaskModel],
    blockers: list[BlockerModel],
    settings: SettingsModel,
    view: View,
    now: datetime,
) -> list[TaskModel]:
    """Filter and order tasks for ``view``. Read-only."""
    return _VIEWS[View(view)](tasks, blockers, settings, now)


# ============================================================================
# Pre-read passes
# ============================================================================


def normalize_focus(
    tasks: list[TaskModel],
    blockers: list[BlockerModel],
    settings: SettingsModel,
    now: datetime,
) -> bool:
    """Clear ``focused_task_id`` if it points at a missing or ineligible task."""
    focused_id = settings.focused_task_id
    if focused_id is None:
        return False

    task = next((t for t in tasks if t.id == focused_id), None)
    if task is not None and is_focus_eligible(task, blockers, now):
        return False

    logger.info("Clearing focus on task %s (no longer eligible)", focused_id)
    settings.focused_task_id = None
    return True


def refresh(data: AppData, now: datetime) -> bool:
    """Run auto-resolution then focus normalization; True if either changed state."""
    resolved = auto_resolve(data.blockers, data.tasks, now)
    refocused = normalize_focus(data.tasks, data.blockers, data.settings, now)
    return resolved or refocused


def classify(
    tasks: list[TaskModel],
    blockers: list[BlockerModel],
    settings: SettingsModel,
    view: View,
    now: datetime,
) -> tuple[list[TaskModel], bool]:
    """
    Compute a view after bringing blockers and focus up to date.

    Returns:
        Tuple of (ordered tasks, changed) where ``changed`` tells the caller
        whether the pre-read passes mutated state that should be persisted
    """
    resolved = auto_resolve(blockers, tasks, now)
    refocused = normalize_focus(tasks, blockers, settings, now)
    return select_view(tasks, blockers, settings, view, now), resolved or refocused
