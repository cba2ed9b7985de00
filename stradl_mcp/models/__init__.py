"""Pydantic models for Stradl MCP."""

from stradl_mcp.models.inputs import (
    AddBlockerInput,
    AddTaskInput,
    ApplyVacationOffsetInput,
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
    StaleTasksInput,
    UncompleteTaskInput,
    UnhideTaskInput,
    UpdateSettingsInput,
    UpdateTaskInput,
    VacationNudgeInput,
)
from stradl_mcp.models.insights import TaskInsight, VacationNudgeRecommendation
from stradl_mcp.models.task import AppData, BlockerModel, SettingsModel, TaskModel

__all__ = [
    # Records
    "TaskModel",
    "BlockerModel",
    "SettingsModel",
    "AppData",
    # Query input models
    "ListTasksInput",
    "GetTaskInput",
    # Task command input models
    "AddTaskInput",
    "UpdateTaskInput",
    "CompleteTaskInput",
    "UncompleteTaskInput",
    "HideTaskInput",
    "UnhideTaskInput",
    "FocusTaskInput",
    "ClearFocusInput",
    "DeleteTaskInput",
    # Blocker input models
    "ListBlockersInput",
    "AddBlockerInput",
    "RemoveBlockerInput",
    # Settings input models
    "GetSettingsInput",
    "UpdateSettingsInput",
    "StaleTasksInput",
    "VacationNudgeInput",
    "ApplyVacationOffsetInput",
    "DismissVacationNudgeInput",
    # Output models
    "TaskInsight",
    "VacationNudgeRecommendation",
]
