"""Durable, append-only log of EmotionalState samples.

The log is the only component that writes to storage. Every accepted state
becomes one row; rows are never updated or removed. History is read back by
recency ("most recent N").
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from config.logging import get_logger
from db.connection import MEMORY_LOCATION, create_storage_engine, init_schema, is_url, make_session_factory
from db.models import EmotionalStateRow
from empathos_core.emotional_state import EmotionalState, RecordId, to_utc, utcnow
from empathos_core.errors import StorageUnavailable, WriteFailed
from empathos_core.locking import GuardedLock

logger = get_logger("log")

# Driver error messages that mean the storage itself is gone
_UNAVAILABLE_MARKERS = (
    "unable to open database",
    "disk i/o error",
    "database disk image is malformed",
    "file is not a database",
    "readonly database",
)


def format_timestamp(value: datetime) -> str:
    """Fixed-width RFC-3339 text, so text order matches chronological order."""
    return to_utc(value).isoformat(timespec="microseconds")


def parse_timestamp(raw: str | None) -> datetime:
    """Parse a stored timestamp. Raises ValueError when it is not RFC-3339."""
    if not isinstance(raw, str):
        raise ValueError(f"timestamp is not text: {raw!r}")
    return to_utc(datetime.fromisoformat(raw.replace("Z", "+00:00")))


def _classify_write_error(e: SQLAlchemyError) -> type[StorageUnavailable] | type[WriteFailed]:
    if isinstance(e, DBAPIError):
        message = str(e.orig if e.orig is not None else e).lower()
        if any(marker in message for marker in _UNAVAILABLE_MARKERS):
            return StorageUnavailable
    return WriteFailed


class StateLog(ABC):
    """Abstract append-only store of emotional states."""

    @abstractmethod
    def initialize(self) -> "StateLog":
        """Ensure the storage exists with the required schema."""

    @abstractmethod
    def append(self, record: EmotionalState) -> RecordId:
        """Persist one state and return its identifier."""

    @abstractmethod
    def query_recent(self, limit: int) -> list[EmotionalState]:
        """Return up to ``limit`` states, most recent timestamp first."""

    @abstractmethod
    def close(self) -> None:
        """Release storage resources."""


class SQLStateLog(StateLog):
    """SQLAlchemy-backed state log.

    Args:
        storage_location: A filesystem path, ``":memory:"``, or a ``sqlite://`` URL.
        echo: Echo SQL statements (debugging).

    All storage access is serialized through one guard, so concurrent appends
    never race on identifier assignment and readers never interleave with a
    half-committed write.
    """

    def __init__(self, storage_location: str | Path, echo: bool = False):
        self.location = str(storage_location)
        self._echo = echo
        self._guard = GuardedLock("state log")
        self._engine = None
        self._session_factory = None

    def initialize(self) -> "SQLStateLog":
        """Create the storage location and schema if missing. Idempotent."""
        with self._guard.hold():
            if self._engine is not None:
                return self

            if self.location != MEMORY_LOCATION and not is_url(self.location):
                try:
                    Path(self.location).expanduser().parent.mkdir(parents=True, exist_ok=True)
                except OSError as e:
                    logger.error(f"Cannot create storage directory for {self.location}: {e}")
                    raise StorageUnavailable(f"Cannot create storage directory for {self.location}: {e}") from e

            engine = None
            try:
                engine = create_storage_engine(self.location, echo=self._echo)
                init_schema(engine)
            except (SQLAlchemyError, ValueError) as e:
                if engine is not None:
                    engine.dispose()
                logger.error(f"Cannot open storage at {self.location}: {e}")
                raise StorageUnavailable(f"Cannot open storage at {self.location}: {e}") from e

            self._engine = engine
            self._session_factory = make_session_factory(engine)
            logger.info("State log ready", extra={"location": self.location})
        return self

    def _require_session_factory(self):
        if self._session_factory is None:
            raise StorageUnavailable(f"State log at {self.location} is not initialized")
        return self._session_factory

    def append(self, record: EmotionalState) -> RecordId:
        with self._guard.hold():
            session = self._require_session_factory()()
            try:
                row = EmotionalStateRow(
                    timestamp=format_timestamp(record.timestamp),
                    focus=record.focus,
                    stress=record.stress,
                    confusion=record.confusion,
                    flow=record.flow,
                    valence=record.valence,
                    arousal=record.arousal,
                    context=record.context,
                )
                session.add(row)
                session.commit()
                record_id = RecordId(row.id)
            except SQLAlchemyError as e:
                session.rollback()
                error_cls = _classify_write_error(e)
                logger.error(f"Failed to append emotional state: {e}")
                raise error_cls(f"Failed to append emotional state: {e}") from e
            finally:
                session.close()

        logger.debug("Appended emotional state", extra={"record_id": record_id})
        return record_id

    def query_recent(self, limit: int) -> list[EmotionalState]:
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise TypeError(f"limit must be an int, got {type(limit).__name__}")
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        if limit == 0:
            return []

        with self._guard.hold():
            session = self._require_session_factory()()
            try:
                rows = (
                    session.query(EmotionalStateRow)
                    .order_by(EmotionalStateRow.timestamp.desc(), EmotionalStateRow.id.desc())
                    .limit(limit)
                    .all()
                )
                return [self._to_state(r) for r in rows]
            except SQLAlchemyError as e:
                logger.error(f"Failed to read emotional history: {e}")
                raise StorageUnavailable(f"Failed to read emotional history: {e}") from e
            except (ValidationError, TypeError) as e:
                # A stored metric that is not a number; the storage is corrupt
                logger.error(f"Corrupt row in emotional history: {e}")
                raise StorageUnavailable(f"Corrupt row in emotional history: {e}") from e
            finally:
                session.close()

    @staticmethod
    def _to_state(row: EmotionalStateRow) -> EmotionalState:
        try:
            timestamp = parse_timestamp(row.timestamp)
        except ValueError:
            # One bad row must not make the whole history unreadable
            logger.warning(
                f"Unparseable timestamp {row.timestamp!r}, substituting current time",
                extra={"record_id": row.id},
            )
            timestamp = utcnow()

        return EmotionalState(
            timestamp=timestamp,
            focus=row.focus,
            stress=row.stress,
            confusion=row.confusion,
            flow=row.flow,
            valence=row.valence,
            arousal=row.arousal,
            context=row.context,
        )

    def close(self) -> None:
        # Disposal must still work after a crash poisoned the guard
        with self._guard.hold_for_cleanup():
            if self._engine is not None:
                self._engine.dispose()
            self._engine = None
            self._session_factory = None


def open_state_log(storage_location: str | Path, echo: bool = False) -> SQLStateLog:
    """Construct and initialize a state log in one step."""
    return SQLStateLog(storage_location, echo=echo).initialize()
