"""Database engine, sessions and lifecycle helpers."""

from blogapi.db.database import (
    async_session_maker,
    close_db,
    engine,
    init_db,
    transaction,
)

__all__ = [
    "engine",
    "async_session_maker",
    "init_db",
    "close_db",
    "transaction",
]
