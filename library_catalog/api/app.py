# This file builds the FastAPI application and registers all API routers.
# The lifespan handler owns the store client: it is opened at startup, exposed on
# `app.state`, and disposed at shutdown unless the caller supplied it.

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from library_catalog.api.api_config import ApiConfig, get_api_config
from library_catalog.api.db_access import DatabaseClient
from library_catalog.api.error_handlers import register_error_handlers
from library_catalog.api.metrics import install_request_context, metrics_response
from library_catalog.api.routers.books import router as books_router
from library_catalog.api.routers.health import router as health_router
from library_catalog.api.routers.lending import router as lending_router
from library_catalog.api.routers.members import router as members_router
from library_catalog.api.routers.reports import router as reports_router
from library_catalog.api.routers.system import router as system_router
from library_catalog.common.logging import configure_logging

logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {"name": "health", "description": "Liveness, readiness, and version metadata."},
    {"name": "system", "description": "Store connectivity probe, schema setup, and sample data."},
    {"name": "books", "description": "Book catalog CRUD and search."},
    {"name": "members", "description": "Member CRUD and search."},
    {"name": "lending", "description": "Borrow and return transactions."},
    {"name": "reports", "description": "Read-only circulation reports."},
]

CATALOG_ROUTERS = (system_router, books_router, members_router, lending_router, reports_router)


def _lifespan(config: ApiConfig, owns_db: bool):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if app.state.db is None:
            app.state.db = DatabaseClient(
                database_url=config.database_url,
                busy_timeout_seconds=config.sqlite_busy_timeout_seconds,
            )
        logger.info(
            "catalog api started environment=%s dialect=%s db_connected=%s",
            config.environment,
            app.state.db.dialect_name,
            app.state.db.can_connect(),
        )
        try:
            yield
        finally:
            if owns_db:
                app.state.db.dispose()
                app.state.db = None
            logger.info("catalog api stopped")

    return lifespan


def create_app(*, config: ApiConfig | None = None, db: DatabaseClient | None = None) -> FastAPI:
    """Build the catalog API; pass `db` to share an existing store client (tests do)."""

    configure_logging()
    config = config or get_api_config()

    app = FastAPI(
        title=config.api_name,
        description="Library catalog API for books, members, borrowing transactions, and circulation reports.",
        version=config.app_version,
        lifespan=_lifespan(config, owns_db=db is None),
        openapi_tags=OPENAPI_TAGS,
    )
    app.state.config = config
    app.state.db = db

    if config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    install_request_context(app, log_requests=config.enable_request_logging)
    register_error_handlers(app)

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return metrics_response()

    app.include_router(health_router)
    for router in CATALOG_ROUTERS:
        app.include_router(router, prefix=config.api_prefix)
    return app


app = create_app()
