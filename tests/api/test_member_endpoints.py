# This file tests the member endpoints against a real SQLite store.
# Listing rows carry the open-borrowing count; single-member reads do not.

from __future__ import annotations

from pathlib import Path

from tests.api.support import (
    SEEDED_ISBN,
    SEEDED_MEMBER,
    api_test_client,
    build_test_db,
    insert_member,
)

NEW_MEMBER = {
    "member_id": "M100",
    "first_name": "Ada",
    "last_name": "Lovelace",
    "email": "ada@example.com",
    "phone": "555-0100",
    "address": "12 Analytical Row",
}


def test_list_members_includes_open_borrowing_count(tmp_path: Path) -> None:
    db = build_test_db(tmp_path, seed=True)
    with api_test_client(db_client=db) as client:
        client.post("/api/borrow", json={"member_id": SEEDED_MEMBER, "isbn": SEEDED_ISBN})
        client.post("/api/borrow", json={"member_id": SEEDED_MEMBER, "isbn": "9780451524935"})
        client.post("/api/return", json={"member_id": SEEDED_MEMBER, "isbn": "9780451524935"})
        response = client.get("/api/members")

    assert response.status_code == 200
    counts = {row["member_id"]: row["books_borrowed"] for row in response.json()}
    assert counts == {"M001": 1, "M002": 0}


def test_list_members_orders_by_last_then_first_name(tmp_path: Path) -> None:
    db = build_test_db(tmp_path)
    insert_member(db, member_id="A1", first_name="Zoe", last_name="Brown")
    insert_member(db, member_id="A2", first_name="Adam", last_name="Brown")
    insert_member(db, member_id="A3", first_name="Carl", last_name="Abbot")
    with api_test_client(db_client=db) as client:
        rows = client.get("/api/members").json()

    assert [row["member_id"] for row in rows] == ["A3", "A2", "A1"]


def test_create_member_returns_stored_row(tmp_path: Path) -> None:
    db = build_test_db(tmp_path)
    with api_test_client(db_client=db) as client:
        response = client.post("/api/members", json=NEW_MEMBER)
        fetched = client.get("/api/members/M100")

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["member"]["email"] == "ada@example.com"
    assert payload["member"]["join_date"]
    assert "books_borrowed" not in payload["member"]
    assert fetched.json()["address"] == "12 Analytical Row"
    assert "books_borrowed" not in fetched.json()


def test_create_member_with_duplicate_email_is_store_error(tmp_path: Path) -> None:
    db = build_test_db(tmp_path, seed=True)
    with api_test_client(db_client=db) as client:
        response = client.post("/api/members", json={**NEW_MEMBER, "email": "john@example.com"})

    assert response.status_code == 500
    assert response.json()["error_code"] == "STORE_ERROR"


def test_search_members_matches_names_id_and_email(tmp_path: Path) -> None:
    db = build_test_db(tmp_path, seed=True)
    with api_test_client(db_client=db) as client:
        by_first = client.get("/api/members/search", params={"q": "Jane"}).json()
        by_last = client.get("/api/members/search", params={"q": "Smith"}).json()
        by_id = client.get("/api/members/search", params={"q": "M00"}).json()
        by_email = client.get("/api/members/search", params={"q": "jane@"}).json()

    assert [row["member_id"] for row in by_first] == ["M002"]
    assert [row["member_id"] for row in by_last] == ["M001"]
    assert len(by_id) == 2
    assert [row["member_id"] for row in by_email] == ["M002"]
    assert all("books_borrowed" in row for row in by_id)


def test_update_member_replaces_fields(tmp_path: Path) -> None:
    db = build_test_db(tmp_path, seed=True)
    with api_test_client(db_client=db) as client:
        response = client.put(
            f"/api/members/{SEEDED_MEMBER}",
            json={"first_name": "Johnny", "last_name": "Smith", "email": "johnny@example.com"},
        )

    assert response.status_code == 200
    member = response.json()["member"]
    assert member["first_name"] == "Johnny"
    assert member["email"] == "johnny@example.com"
    assert member["phone"] is None


def test_member_not_found_paths(tmp_path: Path) -> None:
    with api_test_client(db_client=build_test_db(tmp_path)) as client:
        get_response = client.get("/api/members/NOPE")
        put_response = client.put(
            "/api/members/NOPE",
            json={"first_name": "A", "last_name": "B", "email": "a@b.c"},
        )
        delete_response = client.delete("/api/members/NOPE")

    for response in (get_response, put_response, delete_response):
        assert response.status_code == 404
        assert response.json()["error"] == "Member not found"


def test_delete_member_with_open_borrowing_is_refused(tmp_path: Path) -> None:
    db = build_test_db(tmp_path, seed=True)
    with api_test_client(db_client=db) as client:
        client.post("/api/borrow", json={"member_id": SEEDED_MEMBER, "isbn": SEEDED_ISBN})
        refused = client.delete(f"/api/members/{SEEDED_MEMBER}")
        allowed = client.delete("/api/members/M002")

    assert refused.status_code == 409
    assert refused.json()["success"] is False
    assert allowed.status_code == 200
    assert allowed.json()["message"] == "Member deleted successfully"


def test_empty_member_search_matches_listing_order(tmp_path: Path) -> None:
    db = build_test_db(tmp_path)
    insert_member(db, member_id="A1", first_name="Zoe", last_name="Brown")
    insert_member(db, member_id="A2", first_name="Adam", last_name="Brown")
    insert_member(db, member_id="A3", first_name="Carl", last_name="Abbot")
    with api_test_client(db_client=db) as client:
        searched = client.get("/api/members/search", params={"q": ""}).json()
        listing = client.get("/api/members").json()

    assert [row["member_id"] for row in searched] == ["A3", "A2", "A1"]
    assert searched == listing


def test_deleted_member_is_no_longer_found(tmp_path: Path) -> None:
    db = build_test_db(tmp_path)
    insert_member(db, member_id="GONE")
    with api_test_client(db_client=db) as client:
        before = client.get("/api/members/GONE")
        deleted = client.delete("/api/members/GONE")
        after = client.get("/api/members/GONE")

    assert before.status_code == 200
    assert deleted.status_code == 200
    assert after.status_code == 404
    assert after.json()["error"] == "Member not found"
