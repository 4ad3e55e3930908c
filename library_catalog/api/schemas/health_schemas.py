# This file defines the bodies of the operational endpoints.
# All three share the version and tracing block produced by `routers/health.py`.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class OperationalResponse(BaseModel):
    schema_version: str
    app_version: str
    request_id: str
    timestamp: datetime


class HealthResponse(OperationalResponse):
    status: str
    environment: str
    service_name: str


class ReadinessResponse(OperationalResponse):
    db_connected: bool
    catalog_schema_ready: bool
    missing_tables: list[str] = Field(default_factory=list)
    ready: bool
    database: str


class VersionResponse(OperationalResponse):
    api_prefix: str
    git_commit: str | None = None
    project: str
    version: str
