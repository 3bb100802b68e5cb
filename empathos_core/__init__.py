"""EmpathOS state store: current-state cache, durable log, and their coordinator."""

from empathos_core.emotional_state import EmotionalState, RecordId
from empathos_core.errors import LockFailure, StorageUnavailable, StoreError, WriteFailed
from empathos_core.state_cache import CurrentStateCache
from empathos_core.state_log import SQLStateLog, StateLog, open_state_log
from empathos_core.store import DurabilityMode, EmotionalStateStore, create_store

__all__ = [
    "CurrentStateCache",
    "DurabilityMode",
    "EmotionalState",
    "EmotionalStateStore",
    "LockFailure",
    "RecordId",
    "SQLStateLog",
    "StateLog",
    "StorageUnavailable",
    "StoreError",
    "WriteFailed",
    "create_store",
    "open_state_log",
]
