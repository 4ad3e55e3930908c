# This file defines the row shapes returned by the report endpoints.

from __future__ import annotations

from pydantic import BaseModel


class OverdueRowV1(BaseModel):
    borrow_id: int
    member_id: str
    isbn: str
    first_name: str
    last_name: str
    title: str
    due_date: str
    days_overdue: int


class PopularBookRowV1(BaseModel):
    isbn: str
    title: str
    author: str
    borrow_count: int


class InventoryRowV1(BaseModel):
    category: str | None = None
    total_books: int
    total_copies: int | None = None
    borrowed: int | None = None


class MemberActivityRowV1(BaseModel):
    member_id: str
    first_name: str
    last_name: str
    borrow_count: int
