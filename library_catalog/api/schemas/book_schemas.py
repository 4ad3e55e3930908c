# This file defines book request bodies and response rows.
# Request fields are optional on purpose: missing required columns are rejected by the store.

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class BookRowV1(BaseModel):
    isbn: str
    title: str
    author: str
    publisher: str | None = None
    publication_year: int | None = None
    category: str | None = None
    total_copies: int | None = None
    available_copies: int | None = None


class BookCreateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    isbn: str | None = None
    title: str | None = None
    author: str | None = None
    publisher: str | None = None
    publication_year: int | None = None
    category: str | None = None
    total_copies: int | None = Field(default=None, ge=0)


class BookUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    author: str | None = None
    publisher: str | None = None
    publication_year: int | None = None
    category: str | None = None
    total_copies: int | None = Field(default=None, ge=0)


class BookMutationResponse(BaseModel):
    success: bool = True
    book: BookRowV1
