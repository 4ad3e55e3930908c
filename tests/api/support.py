# This file provides shared helpers for API endpoint tests.
# Tests run against a real SQLite file per test, so SQL and transactions are exercised end to end.
# The helpers build consistent config objects, stores, and scoped TestClient contexts.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from fastapi.testclient import TestClient

from library_catalog.api.api_config import ApiConfig
from library_catalog.api.app import create_app
from library_catalog.api.db_access import DatabaseClient
from library_catalog.catalog.ddl import apply_catalog_ddl
from library_catalog.catalog.seed import seed_sample_data

SEEDED_ISBN = "9780061122415"
SEEDED_MEMBER = "M001"


def build_test_config(*, database_url: str = "sqlite:///:memory:", **overrides: Any) -> ApiConfig:
    """Create deterministic API config for tests."""

    values: dict[str, Any] = {
        "api_name": "Test Library API",
        "api_prefix": "/api",
        "schema_version": "1.0.0",
        "host": "127.0.0.1",
        "port": 3000,
        "environment": "test",
        "database_url": database_url,
        "sqlite_busy_timeout_seconds": 10.0,
        "default_loan_days": 14,
        "popular_report_limit": 10,
        "enable_request_logging": False,
        "allowed_origins": [],
        "app_version": "0.1.0",
    }
    values.update(overrides)
    return ApiConfig(**values)


def build_test_db(tmp_path: Path, *, setup: bool = True, seed: bool = False) -> DatabaseClient:
    """Create a DatabaseClient over a fresh SQLite file inside `tmp_path`."""

    db = DatabaseClient(
        database_url=f"sqlite:///{tmp_path / 'library.db'}",
        busy_timeout_seconds=10.0,
    )
    if setup:
        apply_catalog_ddl(db)
    if seed:
        seed_sample_data(db)
    return db


def insert_book(db: DatabaseClient, *, isbn: str, title: str, copies: int = 1, **extra: Any) -> None:
    db.execute(
        """
        INSERT INTO books (isbn, title, author, publisher, publication_year, category,
                           total_copies, available_copies)
        VALUES (:isbn, :title, :author, :publisher, :publication_year, :category,
                :copies, :copies)
        """,
        {
            "isbn": isbn,
            "title": title,
            "author": extra.get("author", "Test Author"),
            "publisher": extra.get("publisher"),
            "publication_year": extra.get("publication_year"),
            "category": extra.get("category"),
            "copies": copies,
        },
    )


def insert_member(db: DatabaseClient, *, member_id: str, first_name: str = "Test", last_name: str = "Reader") -> None:
    db.execute(
        """
        INSERT INTO members (member_id, first_name, last_name, email)
        VALUES (:member_id, :first_name, :last_name, :email)
        """,
        {
            "member_id": member_id,
            "first_name": first_name,
            "last_name": last_name,
            "email": f"{member_id.lower()}@example.com",
        },
    )


def available_copies(db: DatabaseClient, isbn: str) -> int:
    return int(db.fetch_scalar("SELECT available_copies FROM books WHERE isbn = :isbn", {"isbn": isbn}))


@contextmanager
def api_test_client(
    *,
    db_client: DatabaseClient,
    config: ApiConfig | None = None,
) -> Iterator[TestClient]:
    """Yield a TestClient for an app bound to the given store."""

    app = create_app(config=config or build_test_config(), db=db_client)
    with TestClient(app) as client:
        yield client
