"""DDL helpers for the catalog tables."""

from __future__ import annotations

import logging

from library_catalog.api.db_access import DatabaseClient

logger = logging.getLogger(__name__)

CATALOG_TABLES = ("books", "members", "borrowings")

BOOKS_DDL = """
CREATE TABLE IF NOT EXISTS books (
    isbn TEXT PRIMARY KEY NOT NULL,
    title TEXT NOT NULL,
    author TEXT NOT NULL,
    publisher TEXT,
    publication_year INTEGER,
    category TEXT,
    total_copies INTEGER DEFAULT 1,
    available_copies INTEGER DEFAULT 1,
    CHECK (total_copies >= 0 AND available_copies >= 0 AND available_copies <= total_copies)
)
"""

MEMBERS_DDL = """
CREATE TABLE IF NOT EXISTS members (
    member_id TEXT PRIMARY KEY NOT NULL,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    email TEXT UNIQUE NOT NULL,
    phone TEXT,
    address TEXT,
    join_date TEXT DEFAULT CURRENT_DATE
)
"""

BORROWINGS_DDL_TEMPLATE = """
CREATE TABLE IF NOT EXISTS borrowings (
    borrow_id {id_column},
    member_id TEXT NOT NULL,
    isbn TEXT NOT NULL,
    borrow_date TEXT NOT NULL,
    due_date TEXT NOT NULL,
    return_date TEXT,
    status TEXT DEFAULT 'borrowed',
    FOREIGN KEY (member_id) REFERENCES members(member_id),
    FOREIGN KEY (isbn) REFERENCES books(isbn)
)
"""

# At most one open borrowing per (member, book).
OPEN_BORROWING_INDEX_DDL = """
CREATE UNIQUE INDEX IF NOT EXISTS ux_borrowings_open_member_book
ON borrowings (member_id, isbn)
WHERE return_date IS NULL
"""

BORROWINGS_DUE_DATE_INDEX_DDL = """
CREATE INDEX IF NOT EXISTS idx_borrowings_due_date ON borrowings (due_date)
"""

_ID_COLUMNS = {
    "sqlite": "INTEGER PRIMARY KEY AUTOINCREMENT",
    "postgresql": "SERIAL PRIMARY KEY",
}


def borrowings_ddl(dialect_name: str) -> str:
    id_column = _ID_COLUMNS.get(dialect_name)
    if id_column is None:
        raise ValueError(f"Unsupported database dialect for catalog schema: {dialect_name!r}")
    return BORROWINGS_DDL_TEMPLATE.format(id_column=id_column)


def apply_catalog_ddl(db: DatabaseClient) -> None:
    """Create the catalog tables and indexes if they do not exist yet."""

    statements = [
        BOOKS_DDL,
        MEMBERS_DDL,
        borrowings_ddl(db.dialect_name),
        OPEN_BORROWING_INDEX_DDL,
        BORROWINGS_DUE_DATE_INDEX_DDL,
    ]
    with db.transaction() as tx:
        for statement in statements:
            tx.execute(statement)
    logger.info("catalog schema ensured tables=%s", ",".join(CATALOG_TABLES))


def missing_catalog_tables(db: DatabaseClient) -> list[str]:
    return [table_name for table_name in CATALOG_TABLES if not db.table_exists(table_name)]
