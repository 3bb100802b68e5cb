"""Single-slot, in-memory register holding the latest EmotionalState."""

from __future__ import annotations

from config.logging import get_logger
from empathos_core.emotional_state import EmotionalState
from empathos_core.locking import GuardedLock

logger = get_logger("cache")


class CurrentStateCache:
    """Holds exactly one EmotionalState for low-latency reads.

    Reads and writes are mutually exclusive. There is no history here; each
    write replaces the previous value.
    """

    def __init__(self, initial: EmotionalState | None = None):
        self._guard = GuardedLock("state cache")
        self._state = initial if initial is not None else EmotionalState.default()

    @classmethod
    def initialize(cls) -> "CurrentStateCache":
        """Create a cache pre-populated with the default state."""
        return cls()

    def read(self) -> EmotionalState:
        with self._guard.hold():
            return self._state.model_copy()

    def write(self, state: EmotionalState) -> None:
        with self._guard.hold():
            self._state = state
        logger.debug(f"Current state replaced (timestamp={state.timestamp.isoformat()})")
