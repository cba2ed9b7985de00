"""Error taxonomy for the task engine.

Both error classes are recoverable: they are raised before any state is
mutated, and the tool layer reports them back to the client as text.
"""


class StradlError(Exception):
    """Base class for engine errors."""


class ValidationError(StradlError):
    """Malformed or out-of-policy input (empty title, bad priority, bad hide duration...)."""


class NotFoundError(StradlError):
    """An operation referenced a task or blocker id that does not exist."""

    def __init__(self, kind: str, entity_id: int) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind.capitalize()} {entity_id} not found")
