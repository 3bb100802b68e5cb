"""Exclusive-access guard with poisoning.

A ``GuardedLock`` behaves like ``threading.Lock`` until an unexpected
exception escapes a guarded block. From then on the protected resource is in
an unknown state, so every further ``hold()`` raises ``LockFailure``.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from empathos_core.errors import LockFailure, StoreError


class GuardedLock:
    def __init__(self, name: str):
        self.name = name
        self._lock = threading.Lock()
        self._poisoned_by: BaseException | None = None

    @property
    def poisoned(self) -> bool:
        return self._poisoned_by is not None

    def _check(self) -> None:
        if self._poisoned_by is not None:
            raise LockFailure(
                f"{self.name} lock is poisoned by an earlier failure: {self._poisoned_by!r}"
            )

    @contextmanager
    def hold(self) -> Iterator[None]:
        """Hold the lock for the duration of the block.

        StoreErrors pass through untouched. Anything else poisons the lock
        before it propagates.
        """
        self._check()
        with self._lock:
            self._check()
            try:
                yield
            except StoreError:
                raise
            except BaseException as e:
                self._poisoned_by = e
                raise

    @contextmanager
    def hold_for_cleanup(self) -> Iterator[None]:
        """Hold the lock without the poisoning check, for releasing resources."""
        with self._lock:
            yield
