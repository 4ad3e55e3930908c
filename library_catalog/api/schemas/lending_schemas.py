# This file defines borrow/return request bodies and the open-borrowing row.
# Dates travel as ISO `YYYY-MM-DD` strings; omitted dates default to today
# and the due date to today plus the configured loan period.

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict

from library_catalog.api.schemas.common import SuccessMessageResponse


class BorrowRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    member_id: str
    isbn: str
    borrow_date: date | None = None
    due_date: date | None = None


class ReturnRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    member_id: str
    isbn: str
    return_date: date | None = None


class LendingResponse(SuccessMessageResponse):
    borrow_id: int


class ActiveBorrowingRowV1(BaseModel):
    borrow_id: int
    member_id: str
    isbn: str
    borrow_date: str
    due_date: str
    status: str | None = None
    first_name: str
    last_name: str
    title: str
