"""Settings, staleness, and vacation offset MCP tools."""

import json

from mcp.types import ToolAnnotations

from stradl_mcp.engine.enrich import enrich_tasks
from stradl_mcp.engine.operations import apply_vacation_offset, dismiss_vacation_nudge, update_settings
from stradl_mcp.engine.ranking import refresh
from stradl_mcp.engine.staleness import (
    effective_threshold_hours,
    find_stale_tasks,
    get_vacation_nudge_recommendation,
)
from stradl_mcp.enums import ResponseFormat
from stradl_mcp.models.inputs import (
    ApplyVacationOffsetInput,
    DismissVacationNudgeInput,
    GetSettingsInput,
    StaleTasksInput,
    UpdateSettingsInput,
    VacationNudgeInput,
)
from stradl_mcp.server import mcp
from stradl_mcp.tools.common import _run_command, _run_query
from stradl_mcp.utils.formatters import (
    _format_nudge_markdown,
    _format_settings_markdown,
    _format_tasks_concise,
    _format_tasks_markdown,
    _tasks_json,
)


def _settings_json(settings) -> str:
    return json.dumps(settings.model_dump(mode="json", by_alias=True), indent=2)


# ============================================================================
# Settings Tools
# ============================================================================


@mcp.tool(
    name="stradl_get_settings",
    annotations=ToolAnnotations(
        title="Get Settings",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def stradl_get_settings(params: GetSettingsInput) -> str:
    """
    Show the tracker settings: stale threshold, active view size, the
    one-time staleness offset, and the focused task.

    Args:
        params: GetSettingsInput containing response_format

    Returns:
        Current settings (markdown or JSON)
    """
    success, result = _run_query(lambda data, now: (data.settings, refresh(data, now)))
    if not success:
        return str(result)

    if params.response_format == ResponseFormat.JSON:
        return _settings_json(result)
    return _format_settings_markdown(result)


@mcp.tool(
    name="stradl_update_settings",
    annotations=ToolAnnotations(
        title="Update Settings",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def stradl_update_settings(params: UpdateSettingsInput) -> str:
    """
    Change one or more settings. Omitted fields keep their current value.

    USE THIS WHEN:
    - "Tasks go stale too fast" → raise stale_threshold_hours
    - "Show me fewer tasks at once" → lower top_n

    DO NOT USE WHEN:
    - Coming back from a break → use stradl_vacation_nudge and
      stradl_apply_vacation_offset instead of editing the offset by hand

    Args:
        params: UpdateSettingsInput with any of stale_threshold_hours, top_n,
            one_time_offset_hours, one_time_offset_expires_at

    Returns:
        Confirmation message with the resulting settings

    Examples:
        - Three-day threshold: params with stale_threshold_hours=72
        - Smaller active view: params with top_n=5
        - Drop the offset: params with one_time_offset_hours=0, one_time_offset_expires_at=""
    """
    changes = params.changes()
    if not changes:
        return (
            "Error: No settings to update.\n"
            "Tip: Pass at least one of stale_threshold_hours, top_n, one_time_offset_hours, "
            "one_time_offset_expires_at."
        )

    success, result = _run_command(lambda data, now: update_settings(data, changes))
    if not success:
        return str(result)
    return f"Settings updated.\n\n{_format_settings_markdown(result)}"


# ============================================================================
# Staleness Tools
# ============================================================================


@mcp.tool(
    name="stradl_stale",
    annotations=ToolAnnotations(
        title="List Stale Tasks",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def stradl_stale(params: StaleTasksInput) -> str:
    """
    List open tasks that have not been updated within the stale threshold,
    oldest first.

    The threshold is stale_threshold_hours plus the one-time offset while
    that offset is active. Completed and archived tasks are never stale.

    USE THIS WHEN:
    - Weekly review: "what have I been neglecting?"
    - Looking for tasks to touch, re-prioritize, or archive

    Args:
        params: StaleTasksInput containing limit and response_format

    Returns:
        Stale tasks (markdown, concise, or JSON)
    """

    def action(data, now):
        changed = refresh(data, now)
        stale = find_stale_tasks(data.tasks, data.settings, now)
        return (enrich_tasks(stale, data, now), effective_threshold_hours(data.settings, now)), changed

    success, result = _run_query(action)
    if not success:
        return str(result)

    insights, threshold = result
    total_count = len(insights)
    insights = insights[: params.limit]

    if params.response_format == ResponseFormat.JSON:
        return _tasks_json(insights, thresholdHours=threshold, total=total_count)

    if params.response_format == ResponseFormat.CONCISE:
        return _format_tasks_concise(insights, "stale")

    return _format_tasks_markdown(insights, f"Stale Tasks (no update in {threshold:g}h)")


# ============================================================================
# Vacation Offset Tools
# ============================================================================


@mcp.tool(
    name="stradl_vacation_nudge",
    annotations=ToolAnnotations(
        title="Check Vacation Nudge",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def stradl_vacation_nudge(params: VacationNudgeInput) -> str:
    """
    Check whether a one-time staleness offset should be suggested.

    A suggestion appears after more than 24 hours with no update to any open
    task, unless an offset is already active or the suggestion was already
    applied or dismissed for this stretch of inactivity.

    USE THIS WHEN:
    - Starting a session after time away, before reviewing stale tasks

    Args:
        params: VacationNudgeInput containing response_format

    Returns:
        The suggestion (markdown or JSON), or a message saying there is none
    """
    success, result = _run_query(
        lambda data, now: (get_vacation_nudge_recommendation(data.tasks, data.settings, now), False)
    )
    if not success:
        return str(result)

    if params.response_format == ResponseFormat.JSON:
        payload = result.model_dump(mode="json", by_alias=True) if result is not None else None
        return json.dumps({"recommendation": payload}, indent=2)

    if result is None:
        return "No vacation offset suggested."
    return _format_nudge_markdown(result)


@mcp.tool(
    name="stradl_apply_vacation_offset",
    annotations=ToolAnnotations(
        title="Apply Vacation Offset",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def stradl_apply_vacation_offset(params: ApplyVacationOffsetInput) -> str:
    """
    Extend the stale threshold by a number of days until the end of today (UTC).

    This also dismisses the current vacation suggestion.

    Args:
        params: ApplyVacationOffsetInput containing days

    Returns:
        Confirmation message with the offset and its expiry

    Examples:
        - Back from a week off: params with days=7
    """
    success, result = _run_command(lambda data, now: apply_vacation_offset(data, params.days, now))
    if not success:
        return str(result)
    return (
        f"Vacation offset applied: +{result.one_time_offset_hours:g} hours "
        f"until {result.one_time_offset_expires_at}."
    )


@mcp.tool(
    name="stradl_dismiss_vacation_nudge",
    annotations=ToolAnnotations(
        title="Dismiss Vacation Nudge",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def stradl_dismiss_vacation_nudge(params: DismissVacationNudgeInput) -> str:
    """Skip the vacation suggestion for the current stretch of inactivity."""
    success, result = _run_command(lambda data, now: dismiss_vacation_nudge(data))
    if not success:
        return str(result)
    if result is None:
        return "Nothing to dismiss: there are no open tasks."
    return "Vacation suggestion dismissed."
