# This file defines the member endpoints.
# List and search rows include the member's current open-borrowing count.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from library_catalog.api.dependencies import get_member_service
from library_catalog.api.response_envelope import build_success_envelope
from library_catalog.api.schemas.common import ERROR_RESPONSES, SuccessMessageResponse
from library_catalog.api.schemas.member_schemas import (
    MemberCreateRequest,
    MemberMutationResponse,
    MemberRowV1,
    MemberUpdateRequest,
)
from library_catalog.api.services.member_service import MemberService

router = APIRouter(prefix="/members", tags=["members"], responses=ERROR_RESPONSES)
MemberServiceDep = Annotated[MemberService, Depends(get_member_service)]


@router.get("", response_model=list[MemberRowV1])
def list_members(service: MemberServiceDep) -> list[dict[str, object]]:
    return service.list_members()


@router.get("/search", response_model=list[MemberRowV1])
def search_members(
    service: MemberServiceDep,
    q: str = Query(default=""),
) -> list[dict[str, object]]:
    return service.search_members(q)


@router.get("/{member_id}", response_model=MemberRowV1, response_model_exclude_unset=True)
def get_member(member_id: str, service: MemberServiceDep) -> dict[str, object]:
    return service.get_member(member_id)


@router.post("", response_model=MemberMutationResponse, response_model_exclude_unset=True)
def create_member(body: MemberCreateRequest, service: MemberServiceDep) -> dict[str, object]:
    member = service.create_member(body.model_dump())
    return build_success_envelope(member=member)


@router.put("/{member_id}", response_model=MemberMutationResponse, response_model_exclude_unset=True)
def update_member(
    member_id: str,
    body: MemberUpdateRequest,
    service: MemberServiceDep,
) -> dict[str, object]:
    member = service.update_member(member_id, body.model_dump())
    return build_success_envelope(member=member)


@router.delete("/{member_id}", response_model=SuccessMessageResponse)
def delete_member(member_id: str, service: MemberServiceDep) -> dict[str, object]:
    service.delete_member(member_id)
    return build_success_envelope(message="Member deleted successfully")
