# This file owns the Prometheus instruments for the HTTP layer and the middleware that feeds them.
# Paths are labelled by route template (`/api/books/{isbn}`), never by the concrete URL.

from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import RequestResponseEndpoint

logger = logging.getLogger(__name__)

UNMATCHED_ROUTE = "__unmatched__"

REQUESTS_TOTAL = Counter(
    "library_api_http_requests_total",
    "HTTP requests handled by the catalog API.",
    ["method", "path", "status_code"],
)
REQUEST_SECONDS = Histogram(
    "library_api_http_request_duration_seconds",
    "Catalog API request latency in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
INFLIGHT_REQUESTS = Gauge(
    "library_api_http_inflight_requests",
    "Catalog API requests currently in progress.",
    ["method"],
)


def route_label(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


def metrics_response() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


def install_request_context(app: FastAPI, *, log_requests: bool) -> None:
    """Attach request ids, timing headers, and request metrics to every response."""

    @app.middleware("http")
    async def request_context(request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        request.state.request_id = request_id
        method = request.method
        status_code = 500
        started = time.perf_counter()
        INFLIGHT_REQUESTS.labels(method=method).inc()
        try:
            response = await call_next(request)
            status_code = response.status_code
            elapsed_ms = (time.perf_counter() - started) * 1000.0
            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{elapsed_ms:.2f}"
            if log_requests:
                logger.info(
                    "request method=%s path=%s status=%s duration_ms=%.2f request_id=%s",
                    method,
                    request.url.path,
                    status_code,
                    elapsed_ms,
                    request_id,
                )
            return response
        finally:
            path = route_label(request)
            REQUESTS_TOTAL.labels(method=method, path=path, status_code=str(status_code)).inc()
            REQUEST_SECONDS.labels(method=method, path=path).observe(time.perf_counter() - started)
            INFLIGHT_REQUESTS.labels(method=method).dec()
