"""Blocker MCP tools."""

import json

from mcp.types import ToolAnnotations

from stradl_mcp.engine.blockers import blockers_for_task
from stradl_mcp.engine.operations import add_blocker, remove_blocker, require_task
from stradl_mcp.engine.ranking import refresh
from stradl_mcp.enums import ResponseFormat
from stradl_mcp.models.inputs import AddBlockerInput, ListBlockersInput, RemoveBlockerInput
from stradl_mcp.server import mcp
from stradl_mcp.tools.common import _run_command, _run_query
from stradl_mcp.utils.formatters import _format_blocker


@mcp.tool(
    name="stradl_blockers",
    annotations=ToolAnnotations(
        title="List Task Blockers",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def stradl_blockers(params: ListBlockersInput) -> str:
    """
    List every blocker on a task, pending and resolved.

    Expired and satisfied blockers are resolved before listing.

    Args:
        params: ListBlockersInput containing task_id and response_format

    Returns:
        Blockers on the task (markdown, concise, or JSON)

    Examples:
        - Why is task #4 blocked?: params with task_id=4
    """

    def action(data, now):
        changed = refresh(data, now)
        task = require_task(data, params.task_id)
        return (task, blockers_for_task(task.id, data.blockers)), changed

    success, result = _run_query(action)
    if not success:
        return str(result)

    task, blockers = result

    if params.response_format == ResponseFormat.JSON:
        return json.dumps(
            {"taskId": task.id, "blockers": [b.model_dump(mode="json", by_alias=True) for b in blockers]},
            indent=2,
        )

    if params.response_format == ResponseFormat.CONCISE:
        return "\n".join([f"{len(blockers)} blocker(s) | task #{task.id}"] + [_format_blocker(b) for b in blockers])

    lines = [f"# Blockers for [{task.id}] {task.title}", ""]
    if not blockers:
        lines.append("No blockers.")
    for blocker in blockers:
        lines.append(f"- {_format_blocker(blocker)}")
    return "\n".join(lines)


@mcp.tool(
    name="stradl_add_blocker",
    annotations=ToolAnnotations(
        title="Add Blocker",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def stradl_add_blocker(params: AddBlockerInput) -> str:
    """
    Block a task until another task is completed or until a date passes.

    The blocker resolves on its own: date blockers once the date is reached,
    task blockers once the blocking task is completed or archived. Nothing
    stops a task from blocking itself or two tasks from blocking each other;
    such tasks stay blocked until the blocker is removed with
    stradl_remove_blocker.

    USE THIS WHEN:
    - "Can't start X until Y is done" → blocked_by_task_id
    - "Revisit after March 1st" → blocked_until_date

    Args:
        params: AddBlockerInput containing task_id and exactly one condition

    Returns:
        Confirmation message with the new blocker

    Examples:
        - Wait on task #3: params with task_id=7, blocked_by_task_id=3
        - Wait for a date: params with task_id=7, blocked_until_date="2026-03-01"
    """
    success, result = _run_command(
        lambda data, now: add_blocker(
            data,
            params.task_id,
            blocked_by_task_id=params.blocked_by_task_id,
            blocked_until_date=params.blocked_until_date,
        )
    )
    if not success:
        return str(result)
    return f"Task {params.task_id} is now blocked.\n{_format_blocker(result)}"


@mcp.tool(
    name="stradl_remove_blocker",
    annotations=ToolAnnotations(
        title="Remove Blocker",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def stradl_remove_blocker(params: RemoveBlockerInput) -> str:
    """Delete a blocker, whether or not it has been resolved."""
    success, result = _run_command(lambda data, now: remove_blocker(data, params.blocker_id))
    if not success:
        return str(result)
    return f"Blocker {params.blocker_id} removed from task {result.task_id}."
