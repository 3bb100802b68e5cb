"""Config section models."""

from empathos_core.config._sections.database import DatabaseSettings
from empathos_core.config._sections.store import StoreSettings

__all__ = [
    "DatabaseSettings",
    "StoreSettings",
]
