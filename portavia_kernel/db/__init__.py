"""Database layer - engine, declarative base, session scope."""

from portavia_kernel.db.base import Base, is_view, new_id
from portavia_kernel.db.engine import (
    create_tables,
    get_engine,
    get_session,
    get_session_factory,
    init_engine_from_url,
    reset_engine,
    session_scope,
)

__all__ = [
    "Base",
    "create_tables",
    "get_engine",
    "get_session",
    "get_session_factory",
    "init_engine_from_url",
    "is_view",
    "new_id",
    "reset_engine",
    "session_scope",
]
