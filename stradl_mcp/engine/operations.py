"""State transitions for tasks, blockers and settings.

Every operation validates its input before touching the snapshot, so a
raised ``ValidationError`` or ``NotFoundError`` means nothing was mutated.
"""

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any

import pydantic

from stradl_mcp.engine.blockers import is_blocked, resolve_dependents
from stradl_mcp.engine.ranking import is_hidden
from stradl_mcp.engine.staleness import current_anchor
from stradl_mcp.enums import HIDE_DURATIONS_MINUTES, Priority
from stradl_mcp.errors import NotFoundError, ValidationError
from stradl_mcp.models.task import AppData, BlockerModel, SettingsModel, TaskModel
from stradl_mcp.utils.clock import end_of_utc_day, format_timestamp, parse_timestamp

logger = logging.getLogger(__name__)

UPDATABLE_TASK_FIELDS = frozenset({"title", "status", "priority", "is_archived"})
UPDATABLE_SETTINGS_FIELDS = frozenset(
    {"stale_threshold_hours", "top_n", "one_time_offset_hours", "one_time_offset_expires_at"}
)


# ============================================================================
# Helpers
# ============================================================================


def require_task(data: AppData, task_id: int) -> TaskModel:
    task = data.find_task(task_id)
    if task is None:
        raise NotFoundError("task", task_id)
    return task


def require_blocker(data: AppData, blocker_id: int) -> BlockerModel:
    blocker = data.find_blocker(blocker_id)
    if blocker is None:
        raise NotFoundError("blocker", blocker_id)
    return blocker


def _clean_title(title: Any) -> str:
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("title is required and must be non-empty text")
    return title.strip()


def _clean_status(status: Any) -> str:
    if status is None:
        return ""
    if not isinstance(status, str):
        raise ValidationError("status must be text")
    return status.strip()


def _coerce_priority(value: Any) -> Priority | None:
    """Falsy values mean "no priority" (an idea); anything else must be a tier."""
    if not value:
        return None
    if isinstance(value, Priority):
        return value
    try:
        return Priority(value)
    except ValueError:
        raise ValidationError(
            f"priority must be one of {', '.join(p.value for p in Priority)} or empty, got {value!r}"
        ) from None


def _unfocus_if(data: AppData, task_id: int) -> None:
    if data.settings.focused_task_id == task_id:
        data.settings.focused_task_id = None
        logger.info("Cleared focus from task %s", task_id)


def _ineligibility_reason(task: TaskModel, blockers: list[BlockerModel], now: datetime) -> str | None:
    if task.is_archived:
        return "it is archived"
    if task.completed_at is not None:
        return "it is completed"
    if is_blocked(task.id, blockers):
        return "it is blocked"
    if is_hidden(task, now):
        return "it is hidden"
    return None


# ============================================================================
# Task operations
# ============================================================================


def create_task(
    data: AppData,
    title: Any,
    now: datetime,
    status: Any = None,
    priority: Any = None,
) -> TaskModel:
    """
    Create a task with the next id.

    Raises:
        ValidationError: empty/non-text title, non-text status or unknown priority
    """
    clean_title = _clean_title(title)
    clean_status = _clean_status(status)
    clean_priority = _coerce_priority(priority)

    stamp = format_timestamp(now)
    task = TaskModel(
        id=data.next_task_id,
        title=clean_title,
        status=clean_status,
        priority=clean_priority,
        created_at=stamp,
        updated_at=stamp,
    )
    data.next_task_id += 1
    data.tasks.append(task)
    logger.info("Task created id=%s priority=%s", task.id, task.priority.value if task.priority else None)
    return task


def update_task(data: AppData, task_id: int, changes: Mapping[str, Any], now: datetime) -> TaskModel:
    """
    Apply a partial update and always bump ``updated_at``.

    An empty ``changes`` mapping is a valid "touch". Archiving cascades:
    the hide is cleared, focus is dropped, and blockers waiting on this task
    are resolved. Unarchiving has no cascade.

    Args:
        data: Snapshot to mutate
        task_id: Task to update
        changes: Any of ``title``, ``status``, ``priority``, ``is_archived``
        now: Current time

    Raises:
        NotFoundError: unknown task id
        ValidationError: unknown field or invalid value
    """
    task = require_task(data, task_id)

    unknown = set(changes) - UPDATABLE_TASK_FIELDS
    if unknown:
        raise ValidationError(f"cannot update field(s): {', '.join(sorted(unknown))}")

    # Validate everything first so a bad field leaves the task untouched.
    cleaned: dict[str, Any] = {}
    if "title" in changes:
        cleaned["title"] = _clean_title(changes["title"])
    if "status" in changes:
        cleaned["status"] = _clean_status(changes["status"])
    if "priority" in changes:
        cleaned["priority"] = _coerce_priority(changes["priority"])
    if "is_archived" in changes:
        if not isinstance(changes["is_archived"], bool):
            raise ValidationError("is_archived must be true or false")
        cleaned["is_archived"] = changes["is_archived"]

    for name, value in cleaned.items():
        setattr(task, name, value)

    if cleaned.get("is_archived") is True:
        task.hidden_until_at = None
        _unfocus_if(data, task.id)
        resolved = resolve_dependents(task.id, data.blockers)
        logger.info("Task archived id=%s resolved_dependents=%d", task.id, resolved)

    task.updated_at = format_timestamp(now)
    return task


def complete_task(data: AppData, task_id: int, now: datetime) -> TaskModel:
    """Mark a task done, resolve blockers waiting on it, and drop its focus."""
    task = require_task(data, task_id)

    stamp = format_timestamp(now)
    task.completed_at = stamp
    task.updated_at = stamp
    resolved = resolve_dependents(task.id, data.blockers)
    _unfocus_if(data, task.id)

    logger.info("Task completed id=%s resolved_dependents=%d", task.id, resolved)
    return task


def uncomplete_task(data: AppData, task_id: int, now: datetime) -> TaskModel:
    """Reopen a task. Blockers it already resolved stay resolved."""
    task = require_task(data, task_id)
    task.completed_at = None
    task.updated_at = format_timestamp(now)
    logger.info("Task reopened id=%s", task.id)
    return task


def hide_task(data: AppData, task_id: int, duration_minutes: int, now: datetime) -> TaskModel:
    """
    Defer an active prioritized task for one of the allowed durations.

    Raises:
        ValidationError: disallowed duration, or the task is an idea,
            archived, completed, blocked or already hidden
        NotFoundError: unknown task id
    """
    if duration_minutes not in HIDE_DURATIONS_MINUTES:
        allowed = ", ".join(str(m) for m in HIDE_DURATIONS_MINUTES)
        raise ValidationError(f"hide duration must be one of {allowed} minutes, got {duration_minutes}")

    task = require_task(data, task_id)
    reason = _ineligibility_reason(task, data.blockers, now)
    if reason is None and task.priority is None:
        reason = "it has no priority"
    if reason is not None:
        raise ValidationError(f"Task {task_id} cannot be hidden because {reason}")

    task.hidden_until_at = format_timestamp(now + timedelta(minutes=duration_minutes))
    task.updated_at = format_timestamp(now)
    _unfocus_if(data, task.id)

    logger.info("Task hidden id=%s until=%s", task.id, task.hidden_until_at)
    return task


def unhide_task(data: AppData, task_id: int, now: datetime) -> TaskModel:
    task = require_task(data, task_id)
    task.hidden_until_at = None
    task.updated_at = format_timestamp(now)
    logger.info("Task unhidden id=%s", task.id)
    return task


def focus_task(data: AppData, task_id: int, now: datetime) -> TaskModel:
    """
    Make ``task_id`` the single focused task, replacing any previous focus.

    Raises:
        NotFoundError: unknown task id
        ValidationError: the task is archived, completed, blocked or hidden
    """
    task = require_task(data, task_id)
    reason = _ineligibility_reason(task, data.blockers, now)
    if reason is not None:
        raise ValidationError(f"Task {task_id} cannot be focused because {reason}")

    data.settings.focused_task_id = task.id
    logger.info("Task focused id=%s", task.id)
    return task


def clear_focus(data: AppData) -> None:
    data.settings.focused_task_id = None


def delete_task(data: AppData, task_id: int) -> TaskModel:
    """Remove a task for good, with every blocker on it or waiting on it."""
    task = require_task(data, task_id)

    data.tasks = [t for t in data.tasks if t.id != task_id]
    before = len(data.blockers)
    data.blockers = [b for b in data.blockers if b.task_id != task_id and b.blocked_by_task_id != task_id]
    _unfocus_if(data, task_id)

    logger.info("Task deleted id=%s removed_blockers=%d", task_id, before - len(data.blockers))
    return task


# ============================================================================
# Blocker operations
# ============================================================================


def add_blocker(
    data: AppData,
    task_id: int,
    blocked_by_task_id: int | None = None,
    blocked_until_date: str | None = None,
) -> BlockerModel:
    """
    Block ``task_id`` on another task or until a date.

    Self-references and cycles are accepted as-is; such tasks stay blocked
    until the blocker is removed.

    Raises:
        NotFoundError: unknown task id
        ValidationError: ``blocked_until_date`` is not a timestamp
    """
    require_task(data, task_id)

    until = None
    if blocked_until_date:
        parsed = parse_timestamp(blocked_until_date)
        if parsed is None:
            raise ValidationError(f"blocked_until_date is not a valid date: {blocked_until_date!r}")
        until = format_timestamp(parsed)

    blocker = BlockerModel(
        id=data.next_blocker_id,
        task_id=task_id,
        blocked_by_task_id=blocked_by_task_id,
        blocked_until_date=until,
    )
    data.next_blocker_id += 1
    data.blockers.append(blocker)
    # The task is now blocked, so it can no longer hold focus.
    _unfocus_if(data, task_id)

    logger.info(
        "Blocker added id=%s task=%s by_task=%s until=%s",
        blocker.id,
        task_id,
        blocked_by_task_id,
        until,
    )
    return blocker


def remove_blocker(data: AppData, blocker_id: int) -> BlockerModel:
    """Delete a blocker, resolved or not."""
    blocker = require_blocker(data, blocker_id)
    data.blockers = [b for b in data.blockers if b.id != blocker_id]
    logger.info("Blocker removed id=%s task=%s", blocker.id, blocker.task_id)
    return blocker


# ============================================================================
# Settings & vacation offset
# ============================================================================


def update_settings(data: AppData, changes: Mapping[str, Any]) -> SettingsModel:
    """
    Partially update the tracker settings.

    Raises:
        ValidationError: unknown field or out-of-range value
    """
    unknown = set(changes) - UPDATABLE_SETTINGS_FIELDS
    if unknown:
        raise ValidationError(f"cannot update setting(s): {', '.join(sorted(unknown))}")

    changes = dict(changes)
    if "one_time_offset_expires_at" in changes:
        expires_at = changes["one_time_offset_expires_at"] or None
        if expires_at is not None and parse_timestamp(expires_at) is None:
            raise ValidationError(f"one_time_offset_expires_at is not a valid date: {expires_at!r}")
        changes["one_time_offset_expires_at"] = expires_at

    merged = {**data.settings.model_dump(), **changes}
    try:
        candidate = SettingsModel.model_validate(merged)
    except pydantic.ValidationError as e:
        messages = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors())
        raise ValidationError(messages) from None

    for name in changes:
        setattr(data.settings, name, getattr(candidate, name))
    logger.info("Settings updated: %s", ", ".join(sorted(changes)))
    return data.settings


def apply_vacation_offset(data: AppData, days: int, now: datetime) -> SettingsModel:
    """
    Extend the stale threshold by ``days`` for the rest of the current UTC day.

    Also records the current inactivity anchor so the nudge does not fire
    again for the same streak.
    """
    if isinstance(days, bool) or not isinstance(days, int) or days < 1:
        raise ValidationError(f"days must be a whole number >= 1, got {days!r}")

    settings = data.settings
    settings.one_time_offset_hours = float(days * 24)
    settings.one_time_offset_expires_at = format_timestamp(end_of_utc_day(now))
    anchor = current_anchor(data.tasks)
    if anchor is not None:
        settings.vacation_prompt_last_shown_for_updated_at = anchor

    logger.info("Vacation offset applied days=%d expires=%s", days, settings.one_time_offset_expires_at)
    return settings


def dismiss_vacation_nudge(data: AppData) -> str | None:
    """Mark the nudge as shown for the current streak. Returns the anchor recorded."""
    anchor = current_anchor(data.tasks)
    if anchor is not None:
        data.settings.vacation_prompt_last_shown_for_updated_at = anchor
    return anchor
