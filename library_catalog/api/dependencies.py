# This file provides dependency factories for FastAPI routes.
# The store client lives on `app.state` for the lifetime of the application and is
# handed to services per request, so nothing reaches for a module-level connection.
# Tests override `get_config` or build the app with their own DatabaseClient.

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from library_catalog.api.api_config import ApiConfig
from library_catalog.api.db_access import DatabaseClient
from library_catalog.api.services.book_service import BookService
from library_catalog.api.services.lending_service import LendingService
from library_catalog.api.services.member_service import MemberService
from library_catalog.api.services.report_service import ReportService


def get_config(request: Request) -> ApiConfig:
    return request.app.state.config


def get_database_client(request: Request) -> DatabaseClient:
    return request.app.state.db


ConfigDep = Annotated[ApiConfig, Depends(get_config)]
DBDep = Annotated[DatabaseClient, Depends(get_database_client)]


def get_book_service(config: ConfigDep, db: DBDep) -> BookService:
    return BookService(config=config, db=db)


def get_member_service(config: ConfigDep, db: DBDep) -> MemberService:
    return MemberService(config=config, db=db)


def get_lending_service(config: ConfigDep, db: DBDep) -> LendingService:
    return LendingService(config=config, db=db)


def get_report_service(config: ConfigDep, db: DBDep) -> ReportService:
    return ReportService(config=config, db=db)
