"""Error kinds raised by the emotional-state store.

All failures reach the caller as one of these; nothing is retried.
"""

from __future__ import annotations


class StoreError(Exception):
    """Base class for state-store failures."""


class StorageUnavailable(StoreError):
    """Durable storage could not be opened, created, or reached."""


class WriteFailed(StoreError):
    """An append could not be committed."""


class LockFailure(StoreError):
    """Exclusive access to a shared resource could not be obtained."""
