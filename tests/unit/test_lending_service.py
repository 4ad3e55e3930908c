"""Lending and report services against a real SQLite file, including a threaded last-copy race."""

from __future__ import annotations

import threading
from datetime import date

import pytest

from library_catalog.api.db_access import DatabaseClient, Transaction
from library_catalog.api.error_handlers import LibraryError, NoCopiesAvailable, NotFound, StoreError
from library_catalog.api.services.lending_service import LendingService
from library_catalog.api.services.report_service import ReportService
from tests.api.support import available_copies, build_test_config, insert_book, insert_member


def _service(db: DatabaseClient, **overrides: object) -> LendingService:
    return LendingService(config=build_test_config(**overrides), db=db)


def test_borrow_without_returned_id_fails_and_rolls_back(
    catalog_db: DatabaseClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    insert_book(catalog_db, isbn="1", title="One")
    insert_member(catalog_db, member_id="R1")
    fetch_one = Transaction.fetch_one

    def drop_returning_row(self: Transaction, query: str, params: object = None) -> object:
        row = fetch_one(self, query, params)
        return None if "RETURNING" in query else row

    monkeypatch.setattr(Transaction, "fetch_one", drop_returning_row)

    with pytest.raises(StoreError, match="no borrow_id"):
        _service(catalog_db).borrow(member_id="R1", isbn="1")

    assert available_copies(catalog_db, "1") == 1
    assert catalog_db.fetch_scalar("SELECT COUNT(*) FROM borrowings") == 0


def test_borrow_uses_configured_loan_period(catalog_db: DatabaseClient) -> None:
    insert_book(catalog_db, isbn="1", title="One")
    insert_member(catalog_db, member_id="R1")

    borrow_id = _service(catalog_db, default_loan_days=7).borrow(
        member_id="R1", isbn="1", borrow_date=date(2024, 3, 1)
    )

    row = catalog_db.fetch_one("SELECT * FROM borrowings WHERE borrow_id = :borrow_id", {"borrow_id": borrow_id})
    assert row is not None
    assert row["borrow_date"] == "2024-03-01"
    assert row["due_date"] == "2024-03-08"
    assert row["return_date"] is None


def test_return_closes_earliest_open_borrowing(catalog_db: DatabaseClient) -> None:
    insert_book(catalog_db, isbn="1", title="One", copies=2)
    insert_member(catalog_db, member_id="R1")
    # Legacy rows written before the one-open-borrowing index existed.
    catalog_db.execute("DROP INDEX ux_borrowings_open_member_book")
    for borrow_date in ("2024-02-01", "2024-01-01"):
        catalog_db.execute(
            """
            INSERT INTO borrowings (member_id, isbn, borrow_date, due_date, status)
            VALUES ('R1', '1', :borrow_date, '2024-12-31', 'borrowed')
            """,
            {"borrow_date": borrow_date},
        )
    catalog_db.execute("UPDATE books SET available_copies = 0 WHERE isbn = '1'")

    returned_id = _service(catalog_db).return_book(member_id="R1", isbn="1", return_date="2024-03-01")

    closed = catalog_db.fetch_one("SELECT borrow_date FROM borrowings WHERE borrow_id = :id", {"id": returned_id})
    assert closed == {"borrow_date": "2024-01-01"}
    assert available_copies(catalog_db, "1") == 1


def test_return_never_raises_available_above_total(catalog_db: DatabaseClient) -> None:
    insert_book(catalog_db, isbn="1", title="One")
    insert_member(catalog_db, member_id="R1")
    service = _service(catalog_db)
    service.borrow(member_id="R1", isbn="1")
    catalog_db.execute("UPDATE books SET available_copies = total_copies WHERE isbn = '1'")

    service.return_book(member_id="R1", isbn="1")

    assert available_copies(catalog_db, "1") == 1


def test_concurrent_borrows_of_last_copy_admit_exactly_one(catalog_db: DatabaseClient) -> None:
    insert_book(catalog_db, isbn="LAST", title="Last Copy", copies=1)
    member_ids = [f"R{index}" for index in range(8)]
    for member_id in member_ids:
        insert_member(catalog_db, member_id=member_id)

    service = _service(catalog_db)
    barrier = threading.Barrier(len(member_ids))
    outcomes: list[object] = []
    lock = threading.Lock()

    def attempt(member_id: str) -> None:
        barrier.wait()
        try:
            result: object = service.borrow(member_id=member_id, isbn="LAST")
        except LibraryError as exc:
            result = exc
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=attempt, args=(member_id,)) for member_id in member_ids]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)

    successes = [item for item in outcomes if isinstance(item, int)]
    refusals = [item for item in outcomes if isinstance(item, NoCopiesAvailable)]
    assert len(outcomes) == len(member_ids)
    assert len(successes) == 1
    assert len(refusals) == len(member_ids) - 1
    assert available_copies(catalog_db, "LAST") == 0
    assert catalog_db.fetch_scalar("SELECT COUNT(*) FROM borrowings WHERE isbn = 'LAST'") == 1


def test_borrow_unknown_member_leaves_counts_unchanged(catalog_db: DatabaseClient) -> None:
    insert_book(catalog_db, isbn="1", title="One", copies=2)

    with pytest.raises(NotFound, match="Member not found"):
        _service(catalog_db).borrow(member_id="GHOST", isbn="1")

    assert available_copies(catalog_db, "1") == 2


def test_overdue_report_computes_days_from_reference_date(catalog_db: DatabaseClient) -> None:
    insert_book(catalog_db, isbn="1", title="One")
    insert_book(catalog_db, isbn="2", title="Two")
    insert_member(catalog_db, member_id="R1", first_name="Rita", last_name="Reed")
    service = _service(catalog_db)
    service.borrow(member_id="R1", isbn="2", borrow_date="2024-01-01", due_date="2024-01-20")
    service.borrow(member_id="R1", isbn="1", borrow_date="2024-01-01", due_date="2024-01-10")

    report = ReportService(config=build_test_config(), db=catalog_db)
    rows = report.overdue_report(today=date(2024, 1, 15))

    assert [(row["isbn"], row["days_overdue"]) for row in rows] == [("1", 5)]
    assert rows[0]["first_name"] == "Rita"
