# This file defines the borrowing endpoints: open-borrowing listing, borrow, and return.
# Failures map to HTTP through the domain errors raised by LendingService.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from library_catalog.api.dependencies import get_lending_service
from library_catalog.api.response_envelope import build_success_envelope
from library_catalog.api.schemas.common import ERROR_RESPONSES, ErrorResponse
from library_catalog.api.schemas.lending_schemas import (
    ActiveBorrowingRowV1,
    BorrowRequest,
    LendingResponse,
    ReturnRequest,
)
from library_catalog.api.services.lending_service import LendingService

router = APIRouter(
    tags=["lending"],
    responses={400: {"model": ErrorResponse, "description": "No copies available."}, **ERROR_RESPONSES},
)
LendingServiceDep = Annotated[LendingService, Depends(get_lending_service)]


@router.get("/borrowings", response_model=list[ActiveBorrowingRowV1])
def list_active_borrowings(service: LendingServiceDep) -> list[dict[str, object]]:
    return service.list_active_borrowings()


@router.post("/borrow", response_model=LendingResponse)
def borrow_book(body: BorrowRequest, service: LendingServiceDep) -> dict[str, object]:
    borrow_id = service.borrow(
        member_id=body.member_id,
        isbn=body.isbn,
        borrow_date=body.borrow_date,
        due_date=body.due_date,
    )
    return build_success_envelope(message="Book borrowed successfully", borrow_id=borrow_id)


@router.post("/return", response_model=LendingResponse)
def return_book(body: ReturnRequest, service: LendingServiceDep) -> dict[str, object]:
    borrow_id = service.return_book(
        member_id=body.member_id,
        isbn=body.isbn,
        return_date=body.return_date,
    )
    return build_success_envelope(message="Book returned successfully", borrow_id=borrow_id)
