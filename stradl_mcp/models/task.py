"""Core records: tasks, blockers, settings and the stored snapshot."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stradl_mcp.enums import Priority

# Python attributes are snake_case; the data file keeps camelCase keys.
_RECORD_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class TaskModel(BaseModel):
    """A single task. ``priority=None`` marks it as an idea."""

    model_config = _RECORD_CONFIG

    id: int
    title: str
    status: str = ""
    priority: Priority | None = None
    created_at: str
    updated_at: str
    completed_at: str | None = None
    is_archived: bool = False
    hidden_until_at: str | None = None


class BlockerModel(BaseModel):
    """
    A blocking relationship on ``task_id``.

    Normally exactly one of ``blocked_by_task_id`` / ``blocked_until_date`` is
    set. ``resolved`` only ever goes from False to True.
    """

    model_config = _RECORD_CONFIG

    id: int
    task_id: int
    blocked_by_task_id: int | None = None
    blocked_until_date: str | None = None
    resolved: bool = False


class SettingsModel(BaseModel):
    """Global, persisted tracker settings."""

    model_config = _RECORD_CONFIG

    stale_threshold_hours: float = Field(default=48, gt=0)
    top_n: int = Field(default=20, ge=1)
    one_time_offset_hours: float = Field(default=0, ge=0)
    one_time_offset_expires_at: str | None = None
    vacation_prompt_last_shown_for_updated_at: str | None = None
    focused_task_id: int | None = None


class AppData(BaseModel):
    """The full stored snapshot handed to the engine."""

    model_config = _RECORD_CONFIG

    tasks: list[TaskModel] = Field(default_factory=list)
    blockers: list[BlockerModel] = Field(default_factory=list)
    settings: SettingsModel = Field(default_factory=SettingsModel)
    next_task_id: int = 1
    next_blocker_id: int = 1

    def find_task(self, task_id: int) -> TaskModel | None:
        return next((t for t in self.tasks if t.id == task_id), None)

    def find_blocker(self, blocker_id: int) -> BlockerModel | None:
        return next((b for b in self.blockers if b.id == blocker_id), None)
