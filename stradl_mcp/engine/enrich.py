"""Enrichment helpers: derive per-task flags from the snapshot."""

from datetime import datetime

from stradl_mcp.engine.blockers import blockers_for_task, is_blocked
from stradl_mcp.engine.ranking import is_hidden
from stradl_mcp.engine.staleness import is_stale
from stradl_mcp.models.insights import TaskInsight
from stradl_mcp.models.task import AppData, TaskModel


def enrich_task(task: TaskModel, data: AppData, now: datetime) -> TaskInsight:
    """
    Attach blockers and derived flags to a task.

    Args:
        task: Task to enrich
        data: Snapshot the task belongs to
        now: Current time, for hidden/stale checks

    Returns:
        TaskInsight for the task
    """
    return TaskInsight(
        task=task,
        blockers=blockers_for_task(task.id, data.blockers),
        is_blocked=is_blocked(task.id, data.blockers),
        is_hidden=is_hidden(task, now),
        is_stale=task.completed_at is None and is_stale(task.updated_at, data.settings, now),
        is_focused=data.settings.focused_task_id == task.id,
    )


def enrich_tasks(tasks: list[TaskModel], data: AppData, now: datetime) -> list[TaskInsight]:
    return [enrich_task(t, data, now) for t in tasks]
