"""Member routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from mess_ledger.api.dependencies import get_member_service
from mess_ledger.api.schemas.members import (
    CreateMemberRequest,
    MemberResponse,
    MembersListResponse,
)
from mess_ledger.services.member_service import MemberService

router = APIRouter(prefix="/messes/{mess_id}/members", tags=["Members"])


@router.get("", response_model=MembersListResponse)
def list_members(
    mess_id: str,
    service: Annotated[MemberService, Depends(get_member_service)],
    active_only: Annotated[bool, Query()] = False,
) -> MembersListResponse:
    """List members of a mess ordered by name."""

    members = service.list_members(mess_id, active_only=active_only)
    return MembersListResponse.from_models(members)


@router.post(
    "",
    response_model=MemberResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"description": "Mess not found"}},
)
def create_member(
    mess_id: str,
    payload: CreateMemberRequest,
    service: Annotated[MemberService, Depends(get_member_service)],
) -> MemberResponse:
    member = service.create_member(
        mess_id, name=payload.name, room_number=payload.room_number
    )
    return MemberResponse.from_model(member)


@router.post(
    "/{member_id}/deactivate",
    response_model=MemberResponse,
    responses={404: {"description": "Mess or member not found"}},
)
def deactivate_member(
    mess_id: str,
    member_id: str,
    service: Annotated[MemberService, Depends(get_member_service)],
) -> MemberResponse:
    """Deactivate a member; their records stay in the ledger."""

    member = service.deactivate_member(mess_id, member_id)
    return MemberResponse.from_model(member)
