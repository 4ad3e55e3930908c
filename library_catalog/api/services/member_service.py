# This file implements catalog operations for library members.
# List and search rows carry `books_borrowed`, the member's count of open borrowings.
# Deletion is refused while the member still has books checked out.

from __future__ import annotations

from typing import Any

from library_catalog.api.api_config import ApiConfig
from library_catalog.api.db_access import DatabaseClient
from library_catalog.api.error_handlers import NotFound, OpenBorrowingsExist
from library_catalog.api.services.book_service import search_pattern

MEMBER_COLUMNS = ("member_id", "first_name", "last_name", "email", "phone", "address")

_SELECT_MEMBER_SQL = "SELECT * FROM members WHERE member_id = :member_id"

_MEMBER_LISTING_SQL = """
SELECT m.*, COUNT(b.borrow_id) AS books_borrowed
FROM members m
LEFT JOIN borrowings b ON m.member_id = b.member_id AND b.return_date IS NULL
{where_sql}
GROUP BY m.member_id
ORDER BY m.last_name, m.first_name
"""


class MemberService:
    """Member CRUD and search queries."""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db

    def list_members(self) -> list[dict[str, Any]]:
        return self.db.fetch_all(_MEMBER_LISTING_SQL.format(where_sql=""))

    def search_members(self, query: str | None) -> list[dict[str, Any]]:
        where_sql = (
            "WHERE m.first_name LIKE :pattern OR m.last_name LIKE :pattern "
            "OR m.member_id LIKE :pattern OR m.email LIKE :pattern"
        )
        return self.db.fetch_all(
            _MEMBER_LISTING_SQL.format(where_sql=where_sql),
            {"pattern": search_pattern(query)},
        )

    def get_member(self, member_id: str) -> dict[str, Any]:
        row = self.db.fetch_one(_SELECT_MEMBER_SQL, {"member_id": member_id})
        if row is None:
            raise NotFound("Member not found")
        return row

    def create_member(self, payload: dict[str, Any]) -> dict[str, Any]:
        params = {column: payload.get(column) for column in MEMBER_COLUMNS}
        with self.db.transaction() as tx:
            tx.execute(
                """
                INSERT INTO members (member_id, first_name, last_name, email, phone, address)
                VALUES (:member_id, :first_name, :last_name, :email, :phone, :address)
                """,
                params,
            )
            created = tx.fetch_one(_SELECT_MEMBER_SQL, {"member_id": params["member_id"]})
        return created or params

    def update_member(self, member_id: str, payload: dict[str, Any]) -> dict[str, Any]:
        params = {column: payload.get(column) for column in MEMBER_COLUMNS}
        params["member_id"] = member_id
        with self.db.transaction() as tx:
            changed = tx.execute(
                """
                UPDATE members SET
                    first_name = :first_name,
                    last_name = :last_name,
                    email = :email,
                    phone = :phone,
                    address = :address
                WHERE member_id = :member_id
                """,
                params,
            )
            if changed == 0:
                raise NotFound("Member not found")
            updated = tx.fetch_one(_SELECT_MEMBER_SQL, {"member_id": member_id})
        if updated is None:
            raise NotFound("Member not found")
        return updated

    def delete_member(self, member_id: str) -> None:
        with self.db.transaction() as tx:
            deleted = tx.execute(
                """
                DELETE FROM members
                WHERE member_id = :member_id
                  AND NOT EXISTS (
                      SELECT 1 FROM borrowings br
                      WHERE br.member_id = :member_id AND br.return_date IS NULL
                  )
                """,
                {"member_id": member_id},
            )
            if deleted == 0:
                exists = tx.fetch_one(
                    "SELECT member_id FROM members WHERE member_id = :member_id",
                    {"member_id": member_id},
                )
                if exists is None:
                    raise NotFound("Member not found")
                raise OpenBorrowingsExist("Member has active borrowings and cannot be deleted")
