"""Task prioritization and blocking-resolution engine."""

from stradl_mcp.engine.blockers import auto_resolve, blockers_for_task, is_blocked, resolve_dependents
from stradl_mcp.engine.enrich import enrich_task, enrich_tasks
from stradl_mcp.engine.operations import (
    add_blocker,
    apply_vacation_offset,
    clear_focus,
    complete_task,
    create_task,
    delete_task,
    dismiss_vacation_nudge,
    focus_task,
    hide_task,
    remove_blocker,
    uncomplete_task,
    unhide_task,
    update_settings,
    update_task,
)
from stradl_mcp.engine.ranking import (
    classify,
    is_focus_eligible,
    is_hidden,
    is_rank_eligible,
    normalize_focus,
    rank,
    refresh,
    select_view,
)
from stradl_mcp.engine.staleness import (
    find_stale_tasks,
    get_vacation_nudge_recommendation,
    has_active_offset,
    is_stale,
)

__all__ = [
    # Staleness
    "is_stale",
    "has_active_offset",
    "find_stale_tasks",
    "get_vacation_nudge_recommendation",
    # Blockers
    "auto_resolve",
    "is_blocked",
    "resolve_dependents",
    "blockers_for_task",
    # Enrichment
    "enrich_task",
    "enrich_tasks",
    # Classification
    "rank",
    "classify",
    "select_view",
    "refresh",
    "normalize_focus",
    "is_hidden",
    "is_focus_eligible",
    "is_rank_eligible",
    # Mutations
    "create_task",
    "update_task",
    "complete_task",
    "uncomplete_task",
    "hide_task",
    "unhide_task",
    "focus_task",
    "clear_focus",
    "delete_task",
    "add_blocker",
    "remove_blocker",
    "update_settings",
    "apply_vacation_offset",
    "dismiss_vacation_nudge",
]
