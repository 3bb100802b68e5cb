"""Unified configuration for EmpathOS.

Usage:
    from empathos_core.config import get_settings

    s = get_settings()
    s.database.location()   # "./empathos.db"
    s.store.durability      # "best_effort"
"""

from __future__ import annotations

from empathos_core.config._settings import EmpathosSettings

_settings: EmpathosSettings | None = None


def get_settings() -> EmpathosSettings:
    """Return the singleton EmpathosSettings instance (created on first call)."""
    global _settings
    if _settings is None:
        _settings = EmpathosSettings()
    return _settings


def reset_settings() -> None:
    """Force re-creation of the settings singleton (useful for tests)."""
    global _settings
    _settings = None


__all__ = ["EmpathosSettings", "get_settings", "reset_settings"]
