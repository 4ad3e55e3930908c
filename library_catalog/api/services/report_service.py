# This file implements the read-only catalog reports.
# Aggregation happens in SQL; only the overdue day count is derived in Python so the
# query stays portable across SQLite and Postgres date functions.

from __future__ import annotations

from datetime import date
from typing import Any

from library_catalog.api.api_config import ApiConfig
from library_catalog.api.db_access import DatabaseClient


class ReportService:
    """Overdue, popularity, inventory, and member activity aggregates."""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db

    def overdue_report(self, *, today: date | None = None) -> list[dict[str, Any]]:
        as_of = today or date.today()
        rows = self.db.fetch_all(
            """
            SELECT br.borrow_id, br.member_id, br.isbn,
                   m.first_name, m.last_name, b.title, br.due_date
            FROM borrowings br
            JOIN members m ON br.member_id = m.member_id
            JOIN books b ON br.isbn = b.isbn
            WHERE br.due_date < :today AND br.return_date IS NULL
            ORDER BY br.due_date ASC, br.borrow_id ASC
            """,
            {"today": as_of.isoformat()},
        )
        for row in rows:
            row["days_overdue"] = (as_of - date.fromisoformat(str(row["due_date"])[:10])).days
        return rows

    def popular_report(self, *, limit: int | None = None) -> list[dict[str, Any]]:
        return self.db.fetch_all(
            """
            SELECT b.isbn, b.title, b.author, COUNT(*) AS borrow_count
            FROM borrowings br
            JOIN books b ON br.isbn = b.isbn
            GROUP BY b.isbn, b.title, b.author
            ORDER BY borrow_count DESC, b.title ASC
            LIMIT :limit
            """,
            {"limit": limit or self.config.popular_report_limit},
        )

    def inventory_report(self) -> list[dict[str, Any]]:
        return self.db.fetch_all(
            """
            SELECT category,
                   COUNT(*) AS total_books,
                   SUM(total_copies) AS total_copies,
                   SUM(total_copies - available_copies) AS borrowed
            FROM books
            GROUP BY category
            ORDER BY category
            """
        )

    def activity_report(self) -> list[dict[str, Any]]:
        return self.db.fetch_all(
            """
            SELECT m.member_id, m.first_name, m.last_name, COUNT(*) AS borrow_count
            FROM borrowings br
            JOIN members m ON br.member_id = m.member_id
            GROUP BY m.member_id, m.first_name, m.last_name
            ORDER BY borrow_count DESC, m.member_id ASC
            """
        )
