"""Coordinator over the current-state cache and the durable state log.

The store is what the UI layer talks to:

- get_current(): served from the cache, never touches storage
- set_current(state): updates the cache and appends to the log
- get_history(limit): delegates to the log

One cache and one log are built at process start (see ``create_store``) and
handed to consumers explicitly.
"""

from __future__ import annotations

from enum import Enum

from config.logging import get_logger
from empathos_core.config import EmpathosSettings, get_settings
from empathos_core.emotional_state import EmotionalState, RecordId
from empathos_core.errors import StoreError
from empathos_core.state_cache import CurrentStateCache
from empathos_core.state_log import SQLStateLog, StateLog

logger = get_logger("store")


class DurabilityMode(str, Enum):
    BEST_EFFORT = "best_effort"
    STRICT = "strict"


class EmotionalStateStore:
    """Routes reads and writes between the cache and the log.

    In BEST_EFFORT mode (the default) the cache is written first and the log
    second. If the append fails the error is raised, but the cache keeps the
    new value; there is no rollback. STRICT mode appends first and only then
    replaces the cached value, so a failed append leaves the cache untouched.
    """

    def __init__(
        self,
        cache: CurrentStateCache,
        log: StateLog,
        durability: DurabilityMode = DurabilityMode.BEST_EFFORT,
    ):
        self.cache = cache
        self.log = log
        self.durability = DurabilityMode(durability)

    def get_current(self) -> EmotionalState:
        return self.cache.read()

    def set_current(self, state: EmotionalState) -> RecordId:
        if self.durability is DurabilityMode.STRICT:
            record_id = self.log.append(state)
            self.cache.write(state)
            return record_id

        self.cache.write(state)
        try:
            return self.log.append(state)
        except StoreError as e:
            logger.warning(f"Current state updated but not persisted: {e}")
            raise

    def get_history(self, limit: int) -> list[EmotionalState]:
        return self.log.query_recent(limit)

    def close(self) -> None:
        self.log.close()


def create_store(settings: EmpathosSettings | None = None) -> EmotionalStateStore:
    """Build the process-wide cache and log and wire them into a store.

    Raises StorageUnavailable when the log cannot be initialized; there is no
    history-disabled fallback.
    """
    settings = settings or get_settings()
    location = settings.database.location()

    log = SQLStateLog(location, echo=settings.database.echo).initialize()
    cache = CurrentStateCache.initialize()
    store = EmotionalStateStore(cache, log, DurabilityMode(settings.store.durability))

    logger.info(f"State store ready ({store.durability.value})", extra={"location": location})
    return store
