"""Classification of applied and rejected intents."""

from enum import StrEnum


class Outcome(StrEnum):
    """Result of applying one intent to a character."""

    APPLIED = "applied"
    INSUFFICIENT_POINTS = "insufficient_points"
    INVALID_TARGET = "invalid_target"
    PRECONDITION_FAILED = "precondition_failed"
    # Applied, but a skill is now above its cap
    DEGRADED = "degraded"

    @property
    def accepted(self) -> bool:
        """Whether the character changed."""
        return self in (Outcome.APPLIED, Outcome.DEGRADED)
