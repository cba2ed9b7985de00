"""Time & staleness evaluation.

Pure functions: nothing here mutates tasks or settings.
"""

import math
from datetime import datetime

from stradl_mcp.models.insights import VacationNudgeRecommendation
from stradl_mcp.models.task import SettingsModel, TaskModel
from stradl_mcp.utils.clock import hours_between, parse_timestamp

VACATION_INACTIVITY_HOURS = 24.0


def has_active_offset(settings: SettingsModel, now: datetime) -> bool:
    """The one-time offset counts while its expiry is at or after ``now``."""
    expires_at = parse_timestamp(settings.one_time_offset_expires_at)
    return expires_at is not None and expires_at >= now


def effective_threshold_hours(settings: SettingsModel, now: datetime) -> float:
    """Stale threshold plus the one-time offset while that offset is active."""
    offset = settings.one_time_offset_hours if has_active_offset(settings, now) else 0
    return settings.stale_threshold_hours + offset


def is_stale(updated_at: str, settings: SettingsModel, now: datetime) -> bool:
    """
    Check whether a task last touched at ``updated_at`` is stale.

    Stale means the elapsed hours strictly exceed the effective threshold.
    An unparseable timestamp is never stale.
    """
    updated = parse_timestamp(updated_at)
    if updated is None:
        return False
    return hours_between(updated, now) > effective_threshold_hours(settings, now)


def find_stale_tasks(tasks: list[TaskModel], settings: SettingsModel, now: datetime) -> list[TaskModel]:
    """Open (not completed, not archived) tasks that are stale, oldest update first."""
    stale = [
        t
        for t in tasks
        if t.completed_at is None and not t.is_archived and is_stale(t.updated_at, settings, now)
    ]
    return sorted(stale, key=lambda t: parse_timestamp(t.updated_at) or now)


def _find_anchor(tasks: list[TaskModel]) -> tuple[str, datetime] | None:
    """Most recent ``updated_at`` among open tasks, as (raw string, parsed)."""
    anchor: tuple[str, datetime] | None = None
    for task in tasks:
        if task.completed_at is not None or task.is_archived:
            continue
        updated = parse_timestamp(task.updated_at)
        if updated is None:
            continue
        if anchor is None or updated > anchor[1]:
            anchor = (task.updated_at, updated)
    return anchor


def current_anchor(tasks: list[TaskModel]) -> str | None:
    """The raw ``updated_at`` string that identifies the current inactivity streak."""
    anchor = _find_anchor(tasks)
    return anchor[0] if anchor else None


def get_vacation_nudge_recommendation(
    tasks: list[TaskModel],
    settings: SettingsModel,
    now: datetime,
) -> VacationNudgeRecommendation | None:
    """
    Decide whether to suggest a vacation offset.

    The nudge fires at most once per inactivity streak: the streak is keyed by
    the anchor timestamp string, and ``vacation_prompt_last_shown_for_updated_at``
    records the last anchor the nudge was shown for.

    Returns:
        A recommendation, or None when there is nothing to suggest.
    """
    anchor = _find_anchor(tasks)
    if anchor is None:
        return None

    anchor_raw, anchor_dt = anchor
    inactivity_hours = hours_between(anchor_dt, now)
    if inactivity_hours <= VACATION_INACTIVITY_HOURS:
        return None

    if settings.vacation_prompt_last_shown_for_updated_at == anchor_raw:
        return None

    if has_active_offset(settings, now):
        return None

    return VacationNudgeRecommendation(
        anchor_timestamp=anchor_raw,
        inactivity_hours=inactivity_hours,
        suggested_days=max(1, math.floor(inactivity_hours / 24)),
    )
