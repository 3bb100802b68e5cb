"""Database layer for EmpathOS."""

from db.connection import create_storage_engine, init_schema, make_session_factory, storage_url

__all__ = [
    "create_storage_engine",
    "init_schema",
    "make_session_factory",
    "storage_url",
]
