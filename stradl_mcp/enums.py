"""Enums for Stradl MCP."""

from enum import Enum


class ResponseFormat(str, Enum):
    """Output format for tool responses."""

    CONCISE = "concise"  # One line per task, for chaining
    MARKDOWN = "markdown"  # Human-readable (default)
    JSON = "json"  # Machine-readable with all fields


class Priority(str, Enum):
    """Priority tiers. A task without a tier is an idea."""

    P0 = "P0"
    P1 = "P1"
    P2 = "P2"


class View(str, Enum):
    """Task views computed by the classification engine."""

    ACTIVE = "active"
    BACKLOG = "backlog"
    IDEAS = "ideas"
    BLOCKED = "blocked"
    HIDDEN = "hidden"
    COMPLETED = "completed"
    ARCHIVE = "archive"

    @classmethod
    def _missing_(cls, value: object) -> "View | None":
        # Older clients call the active view the "tasks" tab.
        if isinstance(value, str) and value.strip().lower() == "tasks":
            return cls.ACTIVE
        return None


PRIORITY_ORDER: dict[str, int] = {Priority.P0.value: 0, Priority.P1.value: 1, Priority.P2.value: 2}

HIDE_DURATIONS_MINUTES: tuple[int, ...] = (15, 30, 60, 120, 240)
