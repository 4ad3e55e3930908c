# This file wraps database access so catalog services can run parameterized SQL safely.
# It exists to keep SQL execution details out of router code and make testing easier.
# `transaction()` is the only way to group statements: commit on success, rollback on any error.
# Driver failures are re-raised as StoreError so callers handle one error type.

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from sqlalchemy import inspect, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from library_catalog.api.error_handlers import StoreError
from library_catalog.common.db import create_store_engine, test_connection

logger = logging.getLogger(__name__)


def _store_error(exc: SQLAlchemyError) -> StoreError:
    original = getattr(exc, "orig", None)
    message = str(original) if original is not None else str(exc)
    logger.warning("store statement failed: %s", message)
    return StoreError(message)


class Transaction:
    """Statement runner bound to one open connection inside an atomic unit."""

    def __init__(self, connection: Connection) -> None:
        self._connection = connection

    def fetch_all(self, query: str, params: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        try:
            rows = self._connection.execute(text(query), dict(params or {})).mappings().all()
        except SQLAlchemyError as exc:
            raise _store_error(exc) from exc
        return [dict(row) for row in rows]

    def fetch_one(self, query: str, params: Mapping[str, Any] | None = None) -> dict[str, Any] | None:
        try:
            row = self._connection.execute(text(query), dict(params or {})).mappings().first()
        except SQLAlchemyError as exc:
            raise _store_error(exc) from exc
        return dict(row) if row is not None else None

    def execute(self, query: str, params: Mapping[str, Any] | None = None) -> int:
        """Run a write statement and return the affected-row count."""

        try:
            result = self._connection.execute(text(query), dict(params or {}))
        except SQLAlchemyError as exc:
            raise _store_error(exc) from exc
        return int(result.rowcount or 0)


class DatabaseClient:
    """Minimal SQLAlchemy wrapper for catalog read/write access."""

    def __init__(
        self,
        *,
        database_url: str | None = None,
        engine: Engine | None = None,
        busy_timeout_seconds: float = 5.0,
    ) -> None:
        if engine is None:
            if not database_url:
                raise ValueError("database_url or engine is required.")
            engine = create_store_engine(database_url, busy_timeout_seconds=busy_timeout_seconds)
        self._engine: Engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def dialect_name(self) -> str:
        return self._engine.dialect.name

    def can_connect(self) -> bool:
        return test_connection(self._engine)

    def table_exists(self, table_name: str) -> bool:
        try:
            return inspect(self._engine).has_table(table_name)
        except SQLAlchemyError as exc:
            raise _store_error(exc) from exc

    def fetch_all(self, query: str, params: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        try:
            with self._engine.connect() as connection:
                rows = connection.execute(text(query), dict(params or {})).mappings().all()
        except SQLAlchemyError as exc:
            raise _store_error(exc) from exc
        return [dict(row) for row in rows]

    def fetch_one(self, query: str, params: Mapping[str, Any] | None = None) -> dict[str, Any] | None:
        try:
            with self._engine.connect() as connection:
                row = connection.execute(text(query), dict(params or {})).mappings().first()
        except SQLAlchemyError as exc:
            raise _store_error(exc) from exc
        return dict(row) if row is not None else None

    def fetch_scalar(self, query: str, params: Mapping[str, Any] | None = None) -> Any:
        try:
            with self._engine.connect() as connection:
                return connection.execute(text(query), dict(params or {})).scalar_one()
        except SQLAlchemyError as exc:
            raise _store_error(exc) from exc

    def execute(self, query: str, params: Mapping[str, Any] | None = None) -> int:
        """Run one write statement in its own transaction and return the affected-row count."""

        with self.transaction() as tx:
            return tx.execute(query, params)

    @contextmanager
    def transaction(self) -> Iterator[Transaction]:
        """Run the enclosed statements as one atomic unit."""

        try:
            with self._engine.begin() as connection:
                yield Transaction(connection)
        except SQLAlchemyError as exc:
            # Raised by COMMIT itself; statement errors are already StoreError.
            raise _store_error(exc) from exc

    def dispose(self) -> None:
        self._engine.dispose()
