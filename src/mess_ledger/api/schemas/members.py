"""Pydantic schemas for member endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from mess_ledger.db.models.member import Member


class CreateMemberRequest(BaseModel):
    """Payload for adding a member to a mess."""

    name: str = Field(min_length=1, max_length=120)
    room_number: str | None = Field(default=None, max_length=32)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("Name cannot be blank.")
        return trimmed


class MemberResponse(BaseModel):
    """Public member representation."""

    id: str
    name: str
    room_number: str | None
    is_active: bool

    @classmethod
    def from_model(cls, member: Member) -> MemberResponse:
        return cls(
            id=member.id,
            name=member.name,
            room_number=member.room_number,
            is_active=member.is_active,
        )


class MembersListResponse(BaseModel):
    """Members list payload."""

    members: list[MemberResponse]

    @classmethod
    def from_models(cls, members: list[Member]) -> MembersListResponse:
        return cls(members=[MemberResponse.from_model(item) for item in members])
