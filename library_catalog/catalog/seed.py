"""Fixed sample rows for local development and demos."""

from __future__ import annotations

import logging
from typing import Any, Final

from library_catalog.api.db_access import DatabaseClient

logger = logging.getLogger(__name__)

SAMPLE_BOOKS: Final[tuple[dict[str, Any], ...]] = (
    {
        "isbn": "9780061122415",
        "title": "To Kill a Mockingbird",
        "author": "Harper Lee",
        "publisher": "HarperCollins",
        "publication_year": 1960,
        "category": "Fiction",
        "total_copies": 3,
        "available_copies": 3,
    },
    {
        "isbn": "9780451524935",
        "title": "1984",
        "author": "George Orwell",
        "publisher": "Signet Classics",
        "publication_year": 1949,
        "category": "Fiction",
        "total_copies": 2,
        "available_copies": 2,
    },
)

SAMPLE_MEMBERS: Final[tuple[dict[str, Any], ...]] = (
    {
        "member_id": "M001",
        "first_name": "John",
        "last_name": "Smith",
        "email": "john@example.com",
        "phone": "555-1234",
        "address": "123 Main St",
    },
    {
        "member_id": "M002",
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane@example.com",
        "phone": "555-5678",
        "address": "456 Oak Ave",
    },
)

_INSERT_BOOK_SQL = """
INSERT INTO books (
    isbn, title, author, publisher, publication_year, category, total_copies, available_copies
) VALUES (
    :isbn, :title, :author, :publisher, :publication_year, :category, :total_copies, :available_copies
)
ON CONFLICT DO NOTHING
"""

_INSERT_MEMBER_SQL = """
INSERT INTO members (member_id, first_name, last_name, email, phone, address)
VALUES (:member_id, :first_name, :last_name, :email, :phone, :address)
ON CONFLICT DO NOTHING
"""


def seed_sample_data(db: DatabaseClient) -> dict[str, int]:
    """Insert the sample rows that are not present yet and report how many were added."""

    inserted_books = 0
    inserted_members = 0
    with db.transaction() as tx:
        for book in SAMPLE_BOOKS:
            inserted_books += tx.execute(_INSERT_BOOK_SQL, book)
        for member in SAMPLE_MEMBERS:
            inserted_members += tx.execute(_INSERT_MEMBER_SQL, member)

    logger.info("sample data seeded books=%s members=%s", inserted_books, inserted_members)
    return {"books": inserted_books, "members": inserted_members}
