# This file defines member request bodies and response rows.

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class MemberRowV1(BaseModel):
    member_id: str
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    address: str | None = None
    join_date: str | None = None
    # Present on list and search rows only.
    books_borrowed: int | None = None


class MemberCreateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    member_id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None


class MemberUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None


class MemberMutationResponse(BaseModel):
    success: bool = True
    member: MemberRowV1
