"""MCP tool definitions for Stradl."""

# Import all tools to register them with the MCP server
from stradl_mcp.tools.blockers import (
    stradl_add_blocker,
    stradl_blockers,
    stradl_remove_blocker,
)
from stradl_mcp.tools.settings import (
    stradl_apply_vacation_offset,
    stradl_dismiss_vacation_nudge,
    stradl_get_settings,
    stradl_stale,
    stradl_update_settings,
    stradl_vacation_nudge,
)
from stradl_mcp.tools.tasks import (
    stradl_add,
    stradl_clear_focus,
    stradl_complete,
    stradl_delete,
    stradl_focus,
    stradl_get,
    stradl_hide,
    stradl_list,
    stradl_uncomplete,
    stradl_unhide,
    stradl_update,
)

__all__ = [
    # Task tools
    "stradl_list",
    "stradl_get",
    "stradl_add",
    "stradl_update",
    "stradl_complete",
    "stradl_uncomplete",
    "stradl_hide",
    "stradl_unhide",
    "stradl_focus",
    "stradl_clear_focus",
    "stradl_delete",
    # Blocker tools
    "stradl_blockers",
    "stradl_add_blocker",
    "stradl_remove_blocker",
    # Settings & staleness tools
    "stradl_get_settings",
    "stradl_update_settings",
    "stradl_stale",
    "stradl_vacation_nudge",
    "stradl_apply_vacation_offset",
    "stradl_dismiss_vacation_nudge",
]
