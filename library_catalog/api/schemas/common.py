# This file defines shared schema pieces reused by multiple API endpoints.
# Mutating endpoints answer with a `success` flag; failures share the ErrorResponse shape.

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class SuccessMessageResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    error_code: str
    request_id: str
    details: Any | None = None


class ConnectionTestResponse(BaseModel):
    success: bool = True
    time: str


class SeedResponse(SuccessMessageResponse):
    books_inserted: int = 0
    members_inserted: int = 0


# Documented on every catalog router so the OpenAPI contract shows the failure shape.
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    404: {"model": ErrorResponse, "description": "Row not found."},
    409: {"model": ErrorResponse, "description": "Conflicts with an open borrowing."},
    500: {"model": ErrorResponse, "description": "Store failure."},
}
