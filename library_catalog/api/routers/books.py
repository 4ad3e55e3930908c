# This file defines the book catalog endpoints.
# Reads return raw rows; create, update, and delete return a success envelope.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from library_catalog.api.dependencies import get_book_service
from library_catalog.api.response_envelope import build_success_envelope
from library_catalog.api.schemas.book_schemas import (
    BookCreateRequest,
    BookMutationResponse,
    BookRowV1,
    BookUpdateRequest,
)
from library_catalog.api.schemas.common import ERROR_RESPONSES, SuccessMessageResponse
from library_catalog.api.services.book_service import BookService

router = APIRouter(prefix="/books", tags=["books"], responses=ERROR_RESPONSES)
BookServiceDep = Annotated[BookService, Depends(get_book_service)]


@router.get("", response_model=list[BookRowV1])
def list_books(service: BookServiceDep) -> list[dict[str, object]]:
    return service.list_books()


@router.get("/search", response_model=list[BookRowV1])
def search_books(
    service: BookServiceDep,
    q: str = Query(default=""),
) -> list[dict[str, object]]:
    return service.search_books(q)


@router.get("/{isbn}", response_model=BookRowV1)
def get_book(isbn: str, service: BookServiceDep) -> dict[str, object]:
    return service.get_book(isbn)


@router.post("", response_model=BookMutationResponse)
def create_book(body: BookCreateRequest, service: BookServiceDep) -> dict[str, object]:
    book = service.create_book(body.model_dump())
    return build_success_envelope(book=book)


@router.put("/{isbn}", response_model=BookMutationResponse)
def update_book(isbn: str, body: BookUpdateRequest, service: BookServiceDep) -> dict[str, object]:
    book = service.update_book(isbn, body.model_dump())
    return build_success_envelope(book=book)


@router.delete("/{isbn}", response_model=SuccessMessageResponse)
def delete_book(isbn: str, service: BookServiceDep) -> dict[str, object]:
    service.delete_book(isbn)
    return build_success_envelope(message="Book deleted successfully")
