"""EmotionalState record shared by the cache, the durable log and callers.

A state is one timestamped sample of six affect metrics plus an optional
label naming the activity that produced it. States are immutable; a
correction is a new state.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import NewType, Optional

from pydantic import BaseModel, ConfigDict, field_validator

RecordId = NewType("RecordId", int)

# Defaults served before the first real observation arrives
DEFAULT_FOCUS = 0.5
DEFAULT_STRESS = 0.3
DEFAULT_CONFUSION = 0.2
DEFAULT_FLOW = 0.4
DEFAULT_VALENCE = 0.0
DEFAULT_AROUSAL = 0.5

UNIT_METRICS = ("focus", "stress", "confusion", "flow", "arousal")


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def to_utc(value: datetime) -> datetime:
    """Normalize a datetime to UTC. Naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class EmotionalState(BaseModel):
    """A single emotional-state sample.

    focus, stress, confusion, flow and arousal are meant to lie in [0, 1] and
    valence in [-1, 1]. Nothing here rejects values outside those ranges.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    focus: float
    stress: float
    confusion: float
    flow: float
    valence: float
    arousal: float
    context: Optional[str] = None

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return to_utc(value)

    @classmethod
    def default(cls, timestamp: datetime | None = None) -> "EmotionalState":
        """The neutral state served before any observation has been made."""
        return cls(
            timestamp=timestamp or utcnow(),
            focus=DEFAULT_FOCUS,
            stress=DEFAULT_STRESS,
            confusion=DEFAULT_CONFUSION,
            flow=DEFAULT_FLOW,
            valence=DEFAULT_VALENCE,
            arousal=DEFAULT_AROUSAL,
        )

    def in_range(self) -> bool:
        """True when every metric lies inside its documented range."""
        if not all(0.0 <= getattr(self, name) <= 1.0 for name in UNIT_METRICS):
            return False
        return -1.0 <= self.valence <= 1.0
