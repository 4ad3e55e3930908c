"""
Database connection utilities.
Engines are built here and handed to callers explicitly; nothing in the package holds a global engine.
SQLite engines get a busy timeout so concurrent writers queue on the write lock instead of failing fast.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError


def is_sqlite_url(database_url: str) -> bool:
    return make_url(database_url).get_backend_name() == "sqlite"


def create_store_engine(database_url: str, *, busy_timeout_seconds: float = 5.0) -> Engine:
    """Create a pooled engine for the catalog store."""

    connect_args: dict[str, Any] = {}
    if is_sqlite_url(database_url):
        connect_args = {"timeout": busy_timeout_seconds, "check_same_thread": False}
    return create_engine(
        database_url,
        pool_pre_ping=True,
        future=True,
        connect_args=connect_args,
    )


def test_connection(engine: Engine) -> bool:
    """Return True if the database can be reached and queried."""

    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False
