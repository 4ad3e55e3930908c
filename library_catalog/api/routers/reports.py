# This file defines the read-only report endpoints.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from library_catalog.api.dependencies import get_report_service
from library_catalog.api.schemas.report_schemas import (
    InventoryRowV1,
    MemberActivityRowV1,
    OverdueRowV1,
    PopularBookRowV1,
)
from library_catalog.api.services.report_service import ReportService

router = APIRouter(prefix="/reports", tags=["reports"])
ReportServiceDep = Annotated[ReportService, Depends(get_report_service)]


@router.get("/overdue", response_model=list[OverdueRowV1])
def overdue_report(service: ReportServiceDep) -> list[dict[str, object]]:
    return service.overdue_report()


@router.get("/popular", response_model=list[PopularBookRowV1])
def popular_report(service: ReportServiceDep) -> list[dict[str, object]]:
    return service.popular_report()


@router.get("/inventory", response_model=list[InventoryRowV1])
def inventory_report(service: ReportServiceDep) -> list[dict[str, object]]:
    return service.inventory_report()


@router.get("/activity", response_model=list[MemberActivityRowV1])
def activity_report(service: ReportServiceDep) -> list[dict[str, object]]:
    return service.activity_report()
