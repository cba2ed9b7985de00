"""
MCP Server for Stradl.

Stradl is a single-user task tracker. This server exposes its engine as MCP
tools: prioritized views over tasks, blockers that resolve themselves,
temporary hiding, a single focused task, and staleness tracking with a
one-time vacation offset.
"""

# Re-export enums
from stradl_mcp.enums import Priority, ResponseFormat, View

# Re-export errors
from stradl_mcp.errors import NotFoundError, StradlError, ValidationError

# Re-export models
from stradl_mcp.models import (
    AddBlockerInput,
    AddTaskInput,
    AppData,
    ApplyVacationOffsetInput,
    BlockerModel,
    ClearFocusInput,
    CompleteTaskInput,
    DeleteTaskInput,
    DismissVacationNudgeInput,
    FocusTaskInput,
    GetSettingsInput,
    GetTaskInput,
    HideTaskInput,
    ListBlockersInput,
    ListTasksInput,
    RemoveBlockerInput,
    SettingsModel,
    StaleTasksInput,
    TaskInsight,
    TaskModel,
    UncompleteTaskInput,
    UnhideTaskInput,
    UpdateSettingsInput,
    UpdateTaskInput,
    VacationNudgeInput,
    VacationNudgeRecommendation,
)

# Re-export MCP server instance
from stradl_mcp.server import mcp

# Re-export tools
from stradl_mcp.tools import (
    stradl_add,
    stradl_add_blocker,
    stradl_apply_vacation_offset,
    stradl_blockers,
    stradl_clear_focus,
    stradl_complete,
    stradl_delete,
    stradl_dismiss_vacation_nudge,
    stradl_focus,
    stradl_get,
    stradl_get_settings,
    stradl_hide,
    stradl_list,
    stradl_remove_blocker,
    stradl_stale,
    stradl_uncomplete,
    stradl_unhide,
    stradl_update,
    stradl_update_settings,
    stradl_vacation_nudge,
)

# Re-export utilities (including private functions used by tests)
from stradl_mcp.utils import (
    JsonStore,
    _format_blocker,
    _format_task_concise,
    _format_task_markdown,
    _format_tasks_concise,
    _format_tasks_markdown,
    get_store,
)

__all__ = [
    # Enums
    "ResponseFormat",
    "Priority",
    "View",
    # Errors
    "StradlError",
    "NotFoundError",
    "ValidationError",
    # Records
    "TaskModel",
    "BlockerModel",
    "SettingsModel",
    "AppData",
    # Input models
    "ListTasksInput",
    "GetTaskInput",
    "AddTaskInput",
    "UpdateTaskInput",
    "CompleteTaskInput",
    "UncompleteTaskInput",
    "HideTaskInput",
    "UnhideTaskInput",
    "FocusTaskInput",
    "ClearFocusInput",
    "DeleteTaskInput",
    "ListBlockersInput",
    "AddBlockerInput",
    "RemoveBlockerInput",
    "GetSettingsInput",
    "UpdateSettingsInput",
    "StaleTasksInput",
    "VacationNudgeInput",
    "ApplyVacationOffsetInput",
    "DismissVacationNudgeInput",
    # Output models
    "TaskInsight",
    "VacationNudgeRecommendation",
    # Storage & formatting
    "JsonStore",
    "get_store",
    "_format_blocker",
    "_format_task_concise",
    "_format_task_markdown",
    "_format_tasks_concise",
    "_format_tasks_markdown",
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
    # MCP server instance
    "mcp",
]
