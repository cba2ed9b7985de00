"""Output models computed by the engine."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from stradl_mcp.models.task import BlockerModel, TaskModel


class VacationNudgeRecommendation(BaseModel):
    """Suggestion to apply a one-time staleness offset after a quiet streak."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    anchor_timestamp: str
    inactivity_hours: float
    suggested_days: int


class TaskInsight(BaseModel):
    """A task together with its blockers and derived flags."""

    task: TaskModel
    blockers: list[BlockerModel]
    is_blocked: bool
    is_hidden: bool
    is_stale: bool
    is_focused: bool
