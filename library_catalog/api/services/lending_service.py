# This file coordinates the borrow and return workflows.
# Each workflow runs as one atomic unit so the book's available-copy count and the
# borrowings ledger never diverge; any failure inside the unit rolls both back.
# The availability decrement is a guarded UPDATE whose affected-row count is the
# check, so concurrent borrows of the last copy cannot drive the count below zero.

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any

from library_catalog.api.api_config import ApiConfig
from library_catalog.api.db_access import DatabaseClient, Transaction
from library_catalog.api.error_handlers import ActiveBorrowingExists, NoCopiesAvailable, NotFound, StoreError

logger = logging.getLogger(__name__)

STATUS_BORROWED = "borrowed"
STATUS_RETURNED = "returned"


def _iso(value: date | str | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, date):
        return value.isoformat()
    return value


class LendingService:
    """Borrow/return transactions and the open-borrowings listing."""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db

    def list_active_borrowings(self) -> list[dict[str, Any]]:
        return self.db.fetch_all(
            """
            SELECT b.borrow_id, b.member_id, b.isbn, b.borrow_date, b.due_date, b.status,
                   m.first_name, m.last_name, bk.title
            FROM borrowings b
            JOIN members m ON b.member_id = m.member_id
            JOIN books bk ON b.isbn = bk.isbn
            WHERE b.return_date IS NULL
            ORDER BY b.due_date, b.borrow_id
            """
        )

    def borrow(
        self,
        *,
        member_id: str,
        isbn: str,
        borrow_date: date | str | None = None,
        due_date: date | str | None = None,
    ) -> int:
        """Check a copy out to a member and return the new borrow_id."""

        borrowed_on = _iso(borrow_date) or date.today().isoformat()
        due_on = _iso(due_date) or (
            date.fromisoformat(borrowed_on) + timedelta(days=self.config.default_loan_days)
        ).isoformat()

        with self.db.transaction() as tx:
            taken = tx.execute(
                """
                UPDATE books
                SET available_copies = available_copies - 1
                WHERE isbn = :isbn AND available_copies > 0
                """,
                {"isbn": isbn},
            )
            if taken == 0:
                if tx.fetch_one("SELECT isbn FROM books WHERE isbn = :isbn", {"isbn": isbn}) is None:
                    raise NotFound("Book not found")
                raise NoCopiesAvailable()

            self._require_member(tx, member_id)
            if self._find_open_borrowing(tx, member_id=member_id, isbn=isbn) is not None:
                raise ActiveBorrowingExists("Member already has an active borrowing for this book")

            inserted = tx.fetch_one(
                """
                INSERT INTO borrowings (member_id, isbn, borrow_date, due_date, return_date, status)
                VALUES (:member_id, :isbn, :borrow_date, :due_date, NULL, :status)
                RETURNING borrow_id
                """,
                {
                    "member_id": member_id,
                    "isbn": isbn,
                    "borrow_date": borrowed_on,
                    "due_date": due_on,
                    "status": STATUS_BORROWED,
                },
            )
            if inserted is None:
                raise StoreError("Borrowing insert returned no borrow_id")
            borrow_id = int(inserted["borrow_id"])

        logger.info(
            "book borrowed borrow_id=%s member_id=%s isbn=%s due_date=%s",
            borrow_id,
            member_id,
            isbn,
            due_on,
        )
        return borrow_id

    def return_book(
        self,
        *,
        member_id: str,
        isbn: str,
        return_date: date | str | None = None,
    ) -> int:
        """Close the member's open borrowing of the book and return its borrow_id."""

        returned_on = _iso(return_date) or date.today().isoformat()

        with self.db.transaction() as tx:
            borrowing = self._find_open_borrowing(tx, member_id=member_id, isbn=isbn)
            if borrowing is None:
                raise NotFound("No active borrowing found for this member and book")
            borrow_id = int(borrowing["borrow_id"])

            closed = tx.execute(
                """
                UPDATE borrowings
                SET return_date = :return_date, status = :status
                WHERE borrow_id = :borrow_id AND return_date IS NULL
                """,
                {"return_date": returned_on, "status": STATUS_RETURNED, "borrow_id": borrow_id},
            )
            if closed == 0:
                raise NotFound("No active borrowing found for this member and book")

            tx.execute(
                """
                UPDATE books
                SET available_copies = CASE
                    WHEN available_copies < total_copies THEN available_copies + 1
                    ELSE available_copies
                END
                WHERE isbn = :isbn
                """,
                {"isbn": isbn},
            )

        logger.info("book returned borrow_id=%s member_id=%s isbn=%s", borrow_id, member_id, isbn)
        return borrow_id

    def _require_member(self, tx: Transaction, member_id: str) -> None:
        row = tx.fetch_one(
            "SELECT member_id FROM members WHERE member_id = :member_id",
            {"member_id": member_id},
        )
        if row is None:
            raise NotFound("Member not found")

    def _find_open_borrowing(
        self, tx: Transaction, *, member_id: str, isbn: str
    ) -> dict[str, Any] | None:
        # Earliest borrow wins should more than one open row ever exist.
        return tx.fetch_one(
            """
            SELECT borrow_id, borrow_date, due_date
            FROM borrowings
            WHERE member_id = :member_id AND isbn = :isbn AND return_date IS NULL
            ORDER BY borrow_date, borrow_id
            LIMIT 1
            """,
            {"member_id": member_id, "isbn": isbn},
        )
