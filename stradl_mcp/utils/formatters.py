"""Formatting utilities for task output."""

import json

from stradl_mcp.models.insights import TaskInsight, VacationNudgeRecommendation
from stradl_mcp.models.task import BlockerModel, SettingsModel


def _markers(insight: TaskInsight) -> list[str]:
    marks = []
    if insight.is_focused:
        marks.append("FOCUS")
    if insight.task.completed_at:
        marks.append("DONE")
    if insight.task.is_archived:
        marks.append("ARCHIVED")
    if insight.is_blocked:
        pending = sum(1 for b in insight.blockers if not b.resolved)
        marks.append(f"BLOCKED({pending})")
    if insight.is_hidden and insight.task.hidden_until_at:
        marks.append(f"hidden until {insight.task.hidden_until_at[:16]}")
    if insight.is_stale:
        marks.append("STALE")
    return marks


def _format_blocker(blocker: BlockerModel) -> str:
    """
    Format a blocker on one line.

    Output: "blocker #3: waiting on task #7 (resolved)"
    """
    if blocker.blocked_by_task_id is not None:
        condition = f"waiting on task #{blocker.blocked_by_task_id}"
    elif blocker.blocked_until_date:
        condition = f"until {blocker.blocked_until_date[:10]}"
    else:
        condition = "no condition"
    state = "resolved" if blocker.resolved else "pending"
    return f"blocker #{blocker.id}: {condition} ({state})"


def _format_task_concise(insight: TaskInsight) -> str:
    """
    Format a single task in concise format for token efficiency.

    Output: "#5: Title (P1, FOCUS, STALE)"
    """
    task = insight.task
    title = task.title[:60] if task.title else "Untitled"

    meta = [task.priority.value if task.priority else "idea"]
    meta.extend(_markers(insight))
    return f"#{task.id}: {title} ({', '.join(meta)})"


def _format_tasks_concise(insights: list[TaskInsight], title: str | None = None) -> str:
    """
    Format a list of tasks in concise format.

    Output:
    2 task(s) | active
    #1: Task one (P0)
    #2: Task two (P1, STALE)
    """
    if not insights:
        return "0 tasks"

    header = f"{len(insights)} task(s)"
    if title:
        header = f"{len(insights)} task(s) | {title}"

    lines = [header]
    lines.extend(_format_task_concise(i) for i in insights)
    return "\n".join(lines)


def _format_task_markdown(insight: TaskInsight) -> str:
    """Format a single task as markdown."""
    task = insight.task
    lines = [f"### [{task.id}] {task.title or 'Untitled'}"]

    details = [f"**Priority**: {task.priority.value if task.priority else 'idea'}"]
    details.append(f"**Updated**: {task.updated_at}")
    if task.completed_at:
        details.append(f"**Completed**: {task.completed_at}")
    marks = _markers(insight)
    if marks:
        details.append(f"**Flags**: {', '.join(marks)}")
    lines.append(" | ".join(details))

    if task.status:
        lines.append("**Status:**")
        for status_line in task.status.splitlines():
            lines.append(f"  {status_line}")

    pending = [b for b in insight.blockers if not b.resolved]
    if pending:
        lines.append(f"**Blocked by** ({len(pending)} pending):")
        for blocker in pending:
            lines.append(f"  - {_format_blocker(blocker)}")
    elif insight.blockers:
        lines.append("**Blockers** (all resolved)")

    return "\n".join(lines)


def _format_tasks_markdown(insights: list[TaskInsight], title: str = "Tasks") -> str:
    """Format a list of tasks as markdown."""
    if not insights:
        return f"# {title}\n\nNo tasks found."

    lines = [f"# {title}", f"*{len(insights)} task(s)*", ""]
    for insight in insights:
        lines.append(_format_task_markdown(insight))
        lines.append("")

    return "\n".join(lines)


def _task_record(insight: TaskInsight) -> dict[str, object]:
    """camelCase task record plus derived flags, as returned in JSON responses."""
    return {
        **insight.task.model_dump(mode="json", by_alias=True),
        "isBlocked": insight.is_blocked,
        "isHidden": insight.is_hidden,
        "isStale": insight.is_stale,
        "isFocused": insight.is_focused,
        "blockers": [b.model_dump(mode="json", by_alias=True) for b in insight.blockers],
    }


def _tasks_json(insights: list[TaskInsight], **extra: object) -> str:
    payload = {**extra, "count": len(insights), "tasks": [_task_record(i) for i in insights]}
    return json.dumps(payload, indent=2)


def _format_settings_markdown(settings: SettingsModel) -> str:
    lines = [
        "# Settings",
        "",
        f"- **Stale threshold**: {settings.stale_threshold_hours:g} hours",
        f"- **Active view size (top N)**: {settings.top_n}",
    ]
    if settings.one_time_offset_expires_at:
        lines.append(
            f"- **One-time offset**: {settings.one_time_offset_hours:g} hours "
            f"(expires {settings.one_time_offset_expires_at})"
        )
    else:
        lines.append("- **One-time offset**: none")
    focus = f"task #{settings.focused_task_id}" if settings.focused_task_id is not None else "none"
    lines.append(f"- **Focus**: {focus}")
    return "\n".join(lines)


def _format_nudge_markdown(nudge: VacationNudgeRecommendation) -> str:
    days = int(nudge.inactivity_hours // 24)
    return "\n".join(
        [
            "# Vacation Offset Suggested",
            "",
            f"No active task has been updated in about {days} day{'' if days == 1 else 's'} "
            f"(last update {nudge.anchor_timestamp}).",
            f"Suggested one-time offset: **{nudge.suggested_days} day(s)**.",
            "",
            "Use stradl_apply_vacation_offset to apply it, or stradl_dismiss_vacation_nudge to skip.",
        ]
    )
