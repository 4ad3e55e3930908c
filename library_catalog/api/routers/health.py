# This file defines liveness, readiness, and version endpoints for API operations.
# Readiness means the store answers and all catalog tables exist; `/api/setup`
# (or the bootstrap command) is what turns a reachable store into a ready one.

from __future__ import annotations

import subprocess
from datetime import UTC, datetime
from functools import lru_cache

from fastapi import APIRouter, Request

from library_catalog.api.api_config import ApiConfig
from library_catalog.api.dependencies import ConfigDep, DBDep
from library_catalog.api.schema_versions import build_version_fields
from library_catalog.api.schemas.health_schemas import (
    HealthResponse,
    ReadinessResponse,
    VersionResponse,
)
from library_catalog.catalog.ddl import missing_catalog_tables

router = APIRouter(tags=["health"])


@lru_cache(maxsize=1)
def _git_commit() -> str | None:
    try:
        completed = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            check=True,
            capture_output=True,
            text=True,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    return completed.stdout.strip() or None


def _base_fields(request: Request, config: ApiConfig) -> dict[str, object]:
    return {
        **build_version_fields(schema_version=config.schema_version, app_version=config.app_version),
        "request_id": request.state.request_id,
        "timestamp": datetime.now(tz=UTC),
    }


@router.get("/health", response_model=HealthResponse)
def health(request: Request, config: ConfigDep) -> dict[str, object]:
    return {
        **_base_fields(request, config),
        "status": "ok",
        "environment": config.environment,
        "service_name": config.api_name,
    }


@router.get("/ready", response_model=ReadinessResponse)
def ready(request: Request, config: ConfigDep, db: DBDep) -> dict[str, object]:
    db_connected = db.can_connect()
    missing = missing_catalog_tables(db) if db_connected else []
    schema_ready = db_connected and not missing
    return {
        **_base_fields(request, config),
        "db_connected": db_connected,
        "catalog_schema_ready": schema_ready,
        "missing_tables": missing,
        "ready": schema_ready,
        "database": "reachable" if db_connected else "unreachable",
    }


@router.get("/version", response_model=VersionResponse)
def version(request: Request, config: ConfigDep) -> dict[str, object]:
    return {
        **_base_fields(request, config),
        "api_prefix": config.api_prefix,
        "git_commit": _git_commit(),
        "project": config.api_name,
        "version": config.app_version,
    }
