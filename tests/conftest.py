"""Pytest configuration and fixtures for EmpathOS tests."""

from datetime import UTC, datetime, timedelta

import pytest

from empathos_core.config import reset_settings
from empathos_core.emotional_state import EmotionalState
from empathos_core.state_cache import CurrentStateCache
from empathos_core.state_log import SQLStateLog
from empathos_core.store import EmotionalStateStore

BASE_TIME = datetime(2024, 3, 1, 9, 30, tzinfo=UTC)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep settings, env vars and config files from leaking between tests."""
    for var in ("EMPATHOS_CONFIG", "DATABASE__URL", "DATABASE__DATA_DIR", "DATABASE__FILENAME", "STORE__DURABILITY"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def make_state():
    """Factory for EmotionalState samples offset from a fixed base time."""

    def _make(minutes: int = 0, context: str | None = None, **metrics) -> EmotionalState:
        values = {
            "focus": 0.7,
            "stress": 0.2,
            "confusion": 0.1,
            "flow": 0.6,
            "valence": 0.3,
            "arousal": 0.4,
        }
        values.update(metrics)
        return EmotionalState(timestamp=BASE_TIME + timedelta(minutes=minutes), context=context, **values)

    return _make


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "data" / "empathos.db"


@pytest.fixture
def state_log(db_path):
    """An initialized, file-backed state log."""
    log = SQLStateLog(db_path).initialize()
    yield log
    log.close()


@pytest.fixture
def store(state_log):
    """A best-effort store over a fresh cache and file-backed log."""
    return EmotionalStateStore(CurrentStateCache.initialize(), state_log)
