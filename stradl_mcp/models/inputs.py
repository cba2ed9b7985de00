"""Input models for Stradl MCP tools."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from stradl_mcp.enums import HIDE_DURATIONS_MINUTES, ResponseFormat, View

# ============================================================================
# Query Input Models
# ============================================================================


class ListTasksInput(BaseModel):
    """Input model for listing a task view."""

    model_config = ConfigDict(str_strip_whitespace=True)

    view: View = Field(
        default=View.ACTIVE,
        description="View: active, backlog, ideas, blocked, hidden, completed, or archive",
    )
    limit: int | None = Field(default=None, description="Maximum number of tasks to return", ge=1, le=500)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown', 'concise', or 'json'",
    )


class GetTaskInput(BaseModel):
    """Input model for getting a single task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: int = Field(..., description="Task ID to retrieve", ge=1)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'markdown', 'concise', or 'json'",
    )


# ============================================================================
# Task Command Input Models
# ============================================================================


class AddTaskInput(BaseModel):
    """Input model for adding a new task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., description="Task title (required)", min_length=1, max_length=1000)
    status: str | None = Field(default=None, description="Free-text status, may span multiple lines")
    priority: str | None = Field(default=None, description="Priority tier: P0, P1, P2, or empty/omitted for an idea")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip()


class UpdateTaskInput(BaseModel):
    """Input model for updating a task. Omitted fields are left unchanged."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: int = Field(..., description="Task ID to update", ge=1)
    title: str | None = Field(default=None, description="New title", max_length=1000)
    status: str | None = Field(default=None, description="New status (use empty string to clear)")
    priority: str | None = Field(default=None, description="New priority: P0, P1, P2, or empty to make it an idea")
    is_archived: bool | None = Field(default=None, description="Archive (true) or unarchive (false) the task")

    def changes(self) -> dict[str, object]:
        """Only the fields the caller supplied."""
        return self.model_dump(exclude={"task_id"}, exclude_none=True)


class TaskIdInput(BaseModel):
    """Input model for tools that act on a single task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: int = Field(..., description="Task ID", ge=1)


class CompleteTaskInput(TaskIdInput):
    """Input model for completing a task."""


class UncompleteTaskInput(TaskIdInput):
    """Input model for reopening a completed task."""


class UnhideTaskInput(TaskIdInput):
    """Input model for unhiding a task."""


class FocusTaskInput(TaskIdInput):
    """Input model for focusing a task."""


class DeleteTaskInput(TaskIdInput):
    """Input model for permanently deleting a task."""


class HideTaskInput(BaseModel):
    """Input model for temporarily hiding a task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: int = Field(..., description="Task ID to hide", ge=1)
    duration_minutes: int = Field(..., description="How long to hide: 15, 30, 60, 120, or 240 minutes")

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, v: int) -> int:
        if v not in HIDE_DURATIONS_MINUTES:
            allowed = ", ".join(str(m) for m in HIDE_DURATIONS_MINUTES)
            raise ValueError(f"Duration must be one of {allowed} minutes")
        return v


class ClearFocusInput(BaseModel):
    """Input model for clearing focus."""

    model_config = ConfigDict(str_strip_whitespace=True)
    # No parameters needed - there is at most one focused task


# ============================================================================
# Blocker Input Models
# ============================================================================


class ListBlockersInput(BaseModel):
    """Input model for listing a task's blockers."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: int = Field(..., description="Task ID whose blockers to list", ge=1)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN, description="Output format: 'markdown', 'concise', or 'json'"
    )


class AddBlockerInput(BaseModel):
    """Input model for blocking a task on another task or until a date."""

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: int = Field(..., description="Task ID to block", ge=1)
    blocked_by_task_id: int | None = Field(default=None, description="Task that must be completed first", ge=1)
    blocked_until_date: str | None = Field(
        default=None,
        description="Date/time the block lifts (ISO 8601, e.g. '2026-03-01' or '2026-03-01T09:00:00Z')",
    )

    @model_validator(mode="after")
    def validate_condition(self) -> "AddBlockerInput":
        if (self.blocked_by_task_id is None) == (not self.blocked_until_date):
            raise ValueError("Provide exactly one of blocked_by_task_id or blocked_until_date")
        return self


class RemoveBlockerInput(BaseModel):
    """Input model for removing a blocker."""

    model_config = ConfigDict(str_strip_whitespace=True)

    blocker_id: int = Field(..., description="Blocker ID to remove", ge=1)


# ============================================================================
# Settings & Staleness Input Models
# ============================================================================


class GetSettingsInput(BaseModel):
    """Input model for reading settings."""

    model_config = ConfigDict(str_strip_whitespace=True)

    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN, description="Output format: 'markdown' or 'json'"
    )


class UpdateSettingsInput(BaseModel):
    """Input model for updating settings. Omitted fields are left unchanged."""

    model_config = ConfigDict(str_strip_whitespace=True)

    stale_threshold_hours: float | None = Field(
        default=None, description="Hours without an update before a task is stale", gt=0
    )
    top_n: int | None = Field(default=None, description="Size of the active view before overflow to backlog", ge=1)
    one_time_offset_hours: float | None = Field(
        default=None, description="Extra hours added to the stale threshold while the offset is active", ge=0
    )
    one_time_offset_expires_at: str | None = Field(
        default=None, description="When the one-time offset expires (ISO 8601, empty string to clear)"
    )

    def changes(self) -> dict[str, object]:
        return self.model_dump(exclude_none=True)


class StaleTasksInput(BaseModel):
    """Input model for listing stale tasks."""

    model_config = ConfigDict(str_strip_whitespace=True)

    limit: int = Field(default=20, description="Maximum number of tasks to return", ge=1, le=200)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN, description="Output format: 'markdown', 'concise', or 'json'"
    )


class VacationNudgeInput(BaseModel):
    """Input model for checking the vacation nudge."""

    model_config = ConfigDict(str_strip_whitespace=True)

    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN, description="Output format: 'markdown' or 'json'"
    )


class ApplyVacationOffsetInput(BaseModel):
    """Input model for applying a vacation offset."""

    model_config = ConfigDict(str_strip_whitespace=True)

    days: int = Field(..., description="Offset length in days (usually the suggested days)", ge=1, le=365)


class DismissVacationNudgeInput(BaseModel):
    """Input model for skipping the vacation nudge."""

    model_config = ConfigDict(str_strip_whitespace=True)
    # No parameters needed - the current inactivity streak is dismissed
