from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config.logging import get_logger

logger = get_logger("db")

MEMORY_LOCATION = ":memory:"
MEMORY_URL = "sqlite://"


def is_url(location: str) -> bool:
    return "://" in location


def storage_url(location: str | Path) -> str:
    """Map a storage location (file path, ``:memory:`` or ``sqlite://`` URL) to a SQLAlchemy URL.

    Raises ValueError for URLs of any other database; only SQLite is supported.
    """
    location = str(location)
    if is_url(location):
        if not location.startswith("sqlite"):
            scheme = location.split("://", 1)[0]
            raise ValueError(f"Unsupported storage URL {scheme}://...; only SQLite is supported")
        return location
    if location == MEMORY_LOCATION:
        return MEMORY_URL
    return f"sqlite:///{location}"


def create_storage_engine(location: str | Path, echo: bool = False) -> Engine:
    """Build a SQLite engine for a storage location."""
    url = storage_url(location)

    if url == MEMORY_URL:
        # One shared connection, otherwise every checkout sees an empty database
        engine = create_engine(
            url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=echo,
        )
        logger.info("Using in-memory SQLite")
    else:
        engine = create_engine(url, connect_args={"check_same_thread": False}, echo=echo)
        logger.info(f"Using SQLite: {url}")

    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


def init_schema(engine: Engine) -> None:
    """Create any missing tables. Existing tables are left untouched."""
    from db.models import Base

    Base.metadata.create_all(bind=engine)
