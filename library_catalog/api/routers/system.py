# This file defines store housekeeping endpoints: connectivity probe, schema setup, and sample data.
# Setup and seed are idempotent, so calling them repeatedly leaves the store unchanged.

from __future__ import annotations

from fastapi import APIRouter

from library_catalog.api.dependencies import DBDep
from library_catalog.api.response_envelope import build_success_envelope
from library_catalog.api.schemas.common import (
    ConnectionTestResponse,
    SeedResponse,
    SuccessMessageResponse,
)
from library_catalog.catalog.ddl import apply_catalog_ddl
from library_catalog.catalog.seed import seed_sample_data

router = APIRouter(tags=["system"])


@router.get("/test", response_model=ConnectionTestResponse)
def connection_test(db: DBDep) -> dict[str, object]:
    store_time = db.fetch_scalar("SELECT CURRENT_TIMESTAMP AS time")
    return build_success_envelope(time=str(store_time))


@router.get("/setup", response_model=SuccessMessageResponse)
def setup_schema(db: DBDep) -> dict[str, object]:
    apply_catalog_ddl(db)
    return build_success_envelope(message="Database tables created successfully")


@router.get("/seed", response_model=SeedResponse)
def seed_data(db: DBDep) -> dict[str, object]:
    counts = seed_sample_data(db)
    return build_success_envelope(
        message="Sample data added successfully",
        books_inserted=counts["books"],
        members_inserted=counts["members"],
    )
