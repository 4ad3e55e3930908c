# This file implements catalog operations for books.
# Every statement is parameterized; search uses LIKE containment over title, author, and ISBN.
# Updates keep `available_copies` consistent with a changed `total_copies`.

from __future__ import annotations

from typing import Any

from library_catalog.api.api_config import ApiConfig
from library_catalog.api.db_access import DatabaseClient
from library_catalog.api.error_handlers import NotFound, OpenBorrowingsExist

BOOK_COLUMNS = (
    "isbn",
    "title",
    "author",
    "publisher",
    "publication_year",
    "category",
    "total_copies",
    "available_copies",
)

_SELECT_BOOK_SQL = "SELECT * FROM books WHERE isbn = :isbn"


def search_pattern(query: str | None) -> str:
    """Wrap a free-text query for LIKE containment; an empty query matches everything."""

    return f"%{query or ''}%"


class BookService:
    """Book CRUD and search queries."""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db

    def list_books(self) -> list[dict[str, Any]]:
        return self.db.fetch_all("SELECT * FROM books ORDER BY title")

    def search_books(self, query: str | None) -> list[dict[str, Any]]:
        return self.db.fetch_all(
            """
            SELECT * FROM books
            WHERE title LIKE :pattern OR author LIKE :pattern OR isbn LIKE :pattern
            ORDER BY title
            """,
            {"pattern": search_pattern(query)},
        )

    def get_book(self, isbn: str) -> dict[str, Any]:
        row = self.db.fetch_one(_SELECT_BOOK_SQL, {"isbn": isbn})
        if row is None:
            raise NotFound("Book not found")
        return row

    def create_book(self, payload: dict[str, Any]) -> dict[str, Any]:
        copies = payload.get("total_copies") or 1
        params = {column: payload.get(column) for column in BOOK_COLUMNS}
        params["total_copies"] = copies
        params["available_copies"] = copies

        with self.db.transaction() as tx:
            tx.execute(
                """
                INSERT INTO books (
                    isbn, title, author, publisher, publication_year, category,
                    total_copies, available_copies
                ) VALUES (
                    :isbn, :title, :author, :publisher, :publication_year, :category,
                    :total_copies, :available_copies
                )
                """,
                params,
            )
            created = tx.fetch_one(_SELECT_BOOK_SQL, {"isbn": params["isbn"]})
        return created or params

    def update_book(self, isbn: str, payload: dict[str, Any]) -> dict[str, Any]:
        params = {
            "isbn": isbn,
            "title": payload.get("title"),
            "author": payload.get("author"),
            "publisher": payload.get("publisher"),
            "publication_year": payload.get("publication_year"),
            "category": payload.get("category"),
            "total_copies": payload.get("total_copies"),
        }
        with self.db.transaction() as tx:
            # available_copies shifts by the same delta as total_copies, never below zero.
            changed = tx.execute(
                """
                UPDATE books SET
                    title = :title,
                    author = :author,
                    publisher = :publisher,
                    publication_year = :publication_year,
                    category = :category,
                    available_copies = CASE
                        WHEN :total_copies IS NULL THEN available_copies
                        WHEN available_copies + (:total_copies - total_copies) < 0 THEN 0
                        ELSE available_copies + (:total_copies - total_copies)
                    END,
                    total_copies = COALESCE(:total_copies, total_copies)
                WHERE isbn = :isbn
                """,
                params,
            )
            if changed == 0:
                raise NotFound("Book not found")
            updated = tx.fetch_one(_SELECT_BOOK_SQL, {"isbn": isbn})
        if updated is None:
            raise NotFound("Book not found")
        return updated

    def delete_book(self, isbn: str) -> None:
        with self.db.transaction() as tx:
            deleted = tx.execute(
                """
                DELETE FROM books
                WHERE isbn = :isbn
                  AND NOT EXISTS (
                      SELECT 1 FROM borrowings br
                      WHERE br.isbn = :isbn AND br.return_date IS NULL
                  )
                """,
                {"isbn": isbn},
            )
            if deleted == 0:
                exists = tx.fetch_one("SELECT isbn FROM books WHERE isbn = :isbn", {"isbn": isbn})
                if exists is None:
                    raise NotFound("Book not found")
                raise OpenBorrowingsExist("Book has active borrowings and cannot be deleted")
