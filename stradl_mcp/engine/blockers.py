"""Blocker resolution."""

import logging
from datetime import datetime

from stradl_mcp.models.task import BlockerModel, TaskModel
from stradl_mcp.utils.clock import parse_timestamp

logger = logging.getLogger(__name__)


def auto_resolve(blockers: list[BlockerModel], tasks: list[TaskModel], now: datetime) -> bool:
    """
    Resolve blockers whose date has passed or whose blocking task is completed.

    Both conditions are checked independently. Blockers pointing at a task
    that no longer exists are left alone.

    Args:
        blockers: Blockers to inspect, mutated in place
        tasks: All tasks, used to look up blocking tasks
        now: Current time

    Returns:
        True if any blocker changed state
    """
    completed_ids = {t.id for t in tasks if t.completed_at is not None}
    resolved_count = 0

    for blocker in blockers:
        if blocker.resolved:
            continue

        until = parse_timestamp(blocker.blocked_until_date)
        date_passed = until is not None and until <= now
        dependency_done = blocker.blocked_by_task_id is not None and blocker.blocked_by_task_id in completed_ids

        if date_passed or dependency_done:
            blocker.resolved = True
            resolved_count += 1

    if resolved_count:
        logger.info("Auto-resolved %d blocker(s)", resolved_count)
    return resolved_count > 0


def is_blocked(task_id: int, blockers: list[BlockerModel]) -> bool:
    """True iff the task has at least one unresolved blocker."""
    return any(b.task_id == task_id and not b.resolved for b in blockers)


def resolve_dependents(task_id: int, blockers: list[BlockerModel]) -> int:
    """Resolve every unresolved blocker waiting on ``task_id``. Returns how many changed."""
    count = 0
    for blocker in blockers:
        if blocker.blocked_by_task_id == task_id and not blocker.resolved:
            blocker.resolved = True
            count += 1
    return count


def blockers_for_task(task_id: int, blockers: list[BlockerModel]) -> list[BlockerModel]:
    return sorted((b for b in blockers if b.task_id == task_id), key=lambda b: b.id)
