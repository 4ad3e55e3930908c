# This file defines the catalog's domain errors and the handlers that render them.
# Every failure leaves the API as `{"success": false, "error": ...}` with an HTTP status
# taken from the exception, plus an error code and the request id for tracing.
# Unexpected exceptions are logged and answered with a generic 500 body.

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class LibraryError(Exception):
    """Base domain error with the HTTP status it maps to."""

    status_code = 500
    error_code = "LIBRARY_ERROR"

    def __init__(self, message: str, *, details: Any | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


class StoreError(LibraryError):
    """Any failure raised by the underlying database."""

    status_code = 500
    error_code = "STORE_ERROR"


class NotFound(LibraryError):
    status_code = 404
    error_code = "NOT_FOUND"


class NoCopiesAvailable(LibraryError):
    status_code = 400
    error_code = "NO_COPIES_AVAILABLE"

    def __init__(self, message: str = "No copies available for borrowing", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class ActiveBorrowingExists(LibraryError):
    status_code = 409
    error_code = "ACTIVE_BORROWING_EXISTS"


class OpenBorrowingsExist(LibraryError):
    status_code = 409
    error_code = "OPEN_BORROWINGS_EXIST"


def _request_id(request: Request) -> str:
    return str(getattr(request.state, "request_id", "unknown"))


def error_response(
    request: Request,
    *,
    status_code: int,
    error_code: str,
    message: str,
    details: Any | None = None,
) -> JSONResponse:
    """Render a failure as `{"success": false, "error": ..., "error_code": ..., "request_id": ...}`."""

    body: dict[str, Any] = {
        "success": False,
        "error": message,
        "error_code": error_code,
        "request_id": _request_id(request),
    }
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


async def _library_error(request: Request, exc: LibraryError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "request failed path=%s request_id=%s error_code=%s error=%s",
            request.url.path,
            _request_id(request),
            exc.error_code,
            exc.message,
        )
    return error_response(
        request,
        status_code=exc.status_code,
        error_code=exc.error_code,
        message=exc.message,
        details=exc.details,
    )


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(
        request,
        status_code=422,
        error_code="VALIDATION_ERROR",
        message="Invalid request parameters.",
        details=jsonable_encoder(exc.errors()),
    )


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(request, status_code=exc.status_code, error_code="HTTP_ERROR", message=str(exc.detail))


async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error path=%s request_id=%s", request.url.path, _request_id(request))
    return error_response(
        request,
        status_code=500,
        error_code="INTERNAL_SERVER_ERROR",
        message="The server encountered an unexpected error.",
    )


def register_error_handlers(app: FastAPI) -> None:
    """Route every failure through `error_response`."""

    app.add_exception_handler(LibraryError, _library_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unexpected_error)
