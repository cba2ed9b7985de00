"""Task query and command MCP tools."""

import json

from mcp.types import ToolAnnotations

from stradl_mcp.engine.enrich import enrich_task, enrich_tasks
from stradl_mcp.engine.operations import (
    clear_focus,
    complete_task,
    create_task,
    delete_task,
    focus_task,
    hide_task,
    require_task,
    uncomplete_task,
    unhide_task,
    update_task,
)
from stradl_mcp.engine.ranking import classify, refresh
from stradl_mcp.enums import ResponseFormat, View
from stradl_mcp.models.inputs import (
    AddTaskInput,
    ClearFocusInput,
    CompleteTaskInput,
    DeleteTaskInput,
    FocusTaskInput,
    GetTaskInput,
    HideTaskInput,
    ListTasksInput,
    UncompleteTaskInput,
    UnhideTaskInput,
    UpdateTaskInput,
)
from stradl_mcp.server import mcp
from stradl_mcp.tools.common import _run_command, _run_query
from stradl_mcp.utils.formatters import (
    _format_task_concise,
    _format_task_markdown,
    _format_tasks_concise,
    _format_tasks_markdown,
    _task_record,
    _tasks_json,
)

VIEW_TITLES = {
    View.ACTIVE: "Active Tasks",
    View.BACKLOG: "Backlog",
    View.IDEAS: "Ideas",
    View.BLOCKED: "Blocked Tasks",
    View.HIDDEN: "Hidden Tasks",
    View.COMPLETED: "Completed Tasks",
    View.ARCHIVE: "Archive",
}


# ============================================================================
# Query Tools
# ============================================================================


@mcp.tool(
    name="stradl_list",
    annotations=ToolAnnotations(
        title="List Task View",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def stradl_list(params: ListTasksInput) -> str:
    """
    List the tasks in one view, in display order.

    Before listing, expired date blockers and blockers on completed tasks are
    resolved, and a focus on a no-longer-eligible task is cleared. That is the
    only state this tool changes.

    VIEWS:
    - active: prioritized, unblocked, visible tasks; the first top_n by priority then age
    - backlog: prioritized tasks beyond the first top_n
    - ideas: tasks with no priority
    - blocked: open tasks with at least one pending blocker
    - hidden: tasks temporarily hidden with stradl_hide, soonest to reappear first
    - completed: done but not archived, newest first
    - archive: archived tasks, most recently updated first

    USE THIS WHEN:
    - User asks "what should I work on?" → view="active"
    - Reviewing ideas, the backlog, or what is waiting on something

    DO NOT USE WHEN:
    - You have a specific task ID → use stradl_get instead
    - You want tasks nobody touched lately → use stradl_stale

    Args:
        params: ListTasksInput containing view, limit, and response_format

    Returns:
        Formatted list of tasks (markdown, concise, or JSON)

    Examples:
        - Current work: params with view="active"
        - Overflow: params with view="backlog"
        - Machine-readable: params with view="blocked", response_format="json"
    """

    def action(data, now):
        tasks, changed = classify(data.tasks, data.blockers, data.settings, params.view, now)
        return enrich_tasks(tasks, data, now), changed

    success, result = _run_query(action)
    if not success:
        return str(result)

    insights = result if isinstance(result, list) else []
    total_count = len(insights)
    if params.limit and len(insights) > params.limit:
        insights = insights[: params.limit]

    if params.response_format == ResponseFormat.JSON:
        return _tasks_json(insights, view=params.view.value, total=total_count)

    if params.response_format == ResponseFormat.CONCISE:
        return _format_tasks_concise(insights, params.view.value)

    return _format_tasks_markdown(insights, VIEW_TITLES[params.view])


@mcp.tool(
    name="stradl_get",
    annotations=ToolAnnotations(
        title="Get Task Details",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def stradl_get(params: GetTaskInput) -> str:
    """
    Retrieve full details for a single task, including its blockers and flags.

    Args:
        params: GetTaskInput containing task_id and response_format

    Returns:
        Detailed task information (markdown, concise, or JSON)

    Examples:
        - Get task #5: params with task_id=5
    """

    def action(data, now):
        changed = refresh(data, now)
        return enrich_task(require_task(data, params.task_id), data, now), changed

    success, result = _run_query(action)
    if not success:
        return str(result)

    if params.response_format == ResponseFormat.JSON:
        return json.dumps(_task_record(result), indent=2)

    if params.response_format == ResponseFormat.CONCISE:
        return _format_task_concise(result)

    return _format_task_markdown(result)


# ============================================================================
# Task Command Tools
# ============================================================================


@mcp.tool(
    name="stradl_add",
    annotations=ToolAnnotations(
        title="Add Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def stradl_add(params: AddTaskInput) -> str:
    """
    Create a new task.

    Tasks without a priority are ideas: they only show up in the ideas view
    until given P0, P1, or P2.

    Args:
        params: AddTaskInput containing title and optional status and priority

    Returns:
        Confirmation message with the created task

    Examples:
        - Idea: params with title="Try a standing desk"
        - Urgent task: params with title="Fix login bug", priority="P0"
        - With status: params with title="Quarterly report", priority="P1", status="Draft sent to Ana"
    """
    success, result = _run_command(
        lambda data, now: enrich_task(
            create_task(data, params.title, now, status=params.status, priority=params.priority), data, now
        )
    )
    if not success:
        return str(result)
    return f"Task created successfully.\n{_format_task_concise(result)}"


@mcp.tool(
    name="stradl_update",
    annotations=ToolAnnotations(
        title="Update Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def stradl_update(params: UpdateTaskInput) -> str:
    """
    Update a task's title, status, priority, or archived flag.

    Every call refreshes the task's last-updated time, even with no fields:
    call it with only task_id to mark a task as "still current" and reset
    its staleness.

    Archiving also un-hides the task, drops its focus, and resolves every
    blocker that was waiting on it.

    USE THIS WHEN:
    - Recording progress in the status text
    - Re-prioritizing (priority="" turns a task into an idea)
    - Archiving or unarchiving

    DO NOT USE WHEN:
    - The task is done → use stradl_complete
    - The task should disappear for good → use stradl_delete

    Args:
        params: UpdateTaskInput containing task_id and the fields to change

    Returns:
        Confirmation message with the updated task

    Examples:
        - Touch: params with task_id=5
        - New status: params with task_id=5, status="Waiting for review"
        - Promote an idea: params with task_id=9, priority="P1"
        - Archive: params with task_id=5, is_archived=True
    """
    success, result = _run_command(
        lambda data, now: enrich_task(update_task(data, params.task_id, params.changes(), now), data, now)
    )
    if not success:
        return str(result)
    return f"Task {params.task_id} updated successfully.\n{_format_task_concise(result)}"


@mcp.tool(
    name="stradl_complete",
    annotations=ToolAnnotations(
        title="Complete Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def stradl_complete(params: CompleteTaskInput) -> str:
    """
    Mark a task as completed.

    Blockers waiting on this task are resolved, and focus is cleared if it
    was on this task.

    Args:
        params: CompleteTaskInput containing the task_id to complete

    Returns:
        Confirmation message
    """
    success, result = _run_command(
        lambda data, now: enrich_task(complete_task(data, params.task_id, now), data, now)
    )
    if not success:
        return str(result)
    return f"Task {params.task_id} marked as complete.\n{_format_task_concise(result)}"


@mcp.tool(
    name="stradl_uncomplete",
    annotations=ToolAnnotations(
        title="Reopen Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def stradl_uncomplete(params: UncompleteTaskInput) -> str:
    """
    Reopen a completed task.

    Blockers that were resolved when the task was completed stay resolved.
    """
    success, result = _run_command(
        lambda data, now: enrich_task(uncomplete_task(data, params.task_id, now), data, now)
    )
    if not success:
        return str(result)
    return f"Task {params.task_id} reopened.\n{_format_task_concise(result)}"


@mcp.tool(
    name="stradl_hide",
    annotations=ToolAnnotations(
        title="Hide Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def stradl_hide(params: HideTaskInput) -> str:
    """
    Temporarily hide an active task for 15, 30, 60, 120, or 240 minutes.

    Only prioritized tasks that are not archived, completed, blocked, or
    already hidden can be hidden. Hidden tasks leave the active/backlog
    views and come back on their own when the time is up.

    Args:
        params: HideTaskInput containing task_id and duration_minutes

    Returns:
        Confirmation message with when the task reappears

    Examples:
        - Snooze for an hour: params with task_id=5, duration_minutes=60
    """
    success, result = _run_command(
        lambda data, now: enrich_task(hide_task(data, params.task_id, params.duration_minutes, now), data, now)
    )
    if not success:
        return str(result)
    return f"Task {params.task_id} hidden until {result.task.hidden_until_at}.\n{_format_task_concise(result)}"


@mcp.tool(
    name="stradl_unhide",
    annotations=ToolAnnotations(
        title="Unhide Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def stradl_unhide(params: UnhideTaskInput) -> str:
    """Bring a hidden task back immediately."""
    success, result = _run_command(
        lambda data, now: enrich_task(unhide_task(data, params.task_id, now), data, now)
    )
    if not success:
        return str(result)
    return f"Task {params.task_id} is visible again.\n{_format_task_concise(result)}"


@mcp.tool(
    name="stradl_focus",
    annotations=ToolAnnotations(
        title="Focus Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def stradl_focus(params: FocusTaskInput) -> str:
    """
    Mark a task as the single current focus, replacing any previous focus.

    The task must not be archived, completed, blocked, or hidden. Focus is
    dropped automatically when the task stops being eligible.

    Args:
        params: FocusTaskInput containing the task_id to focus

    Returns:
        Confirmation message
    """
    success, result = _run_command(lambda data, now: enrich_task(focus_task(data, params.task_id, now), data, now))
    if not success:
        return str(result)
    return f"Now focusing on task {params.task_id}.\n{_format_task_concise(result)}"


@mcp.tool(
    name="stradl_clear_focus",
    annotations=ToolAnnotations(
        title="Clear Focus",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def stradl_clear_focus(params: ClearFocusInput) -> str:
    """Clear the focused task, if any."""
    success, result = _run_command(lambda data, now: clear_focus(data))
    if not success:
        return str(result)
    return "Focus cleared."


@mcp.tool(
    name="stradl_delete",
    annotations=ToolAnnotations(
        title="Delete Task",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def stradl_delete(params: DeleteTaskInput) -> str:
    """
    Permanently delete a task.

    This cannot be undone. Every blocker on the task, and every blocker
    waiting on it, is deleted too. To keep the task around, archive it with
    stradl_update(is_archived=True) instead.

    Args:
        params: DeleteTaskInput containing the task_id to delete

    Returns:
        Confirmation message
    """
    success, result = _run_command(lambda data, now: delete_task(data, params.task_id))
    if not success:
        return str(result)
    return f"Task {params.task_id} deleted: {result.title}"
