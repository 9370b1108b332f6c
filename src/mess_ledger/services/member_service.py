"""Business service for mess membership."""

from __future__ import annotations

import logging
from typing import Protocol

from mess_ledger.db.models.member import Member
from mess_ledger.db.models.mess import Mess
from mess_ledger.domain.errors import (
    InvalidRequestError,
    MemberNotFoundError,
    MessNotFoundError,
    compose_error_message,
)

logger = logging.getLogger(__name__)


class SessionProtocol(Protocol):
    def commit(self) -> None: ...
    def rollback(self) -> None: ...


class MessRepositoryProtocol(Protocol):
    def get(self, mess_id: str) -> Mess | None: ...


class MemberRepositoryProtocol(Protocol):
    def list_by_mess(
        self, mess_id: str, *, active_only: bool = False
    ) -> list[Member]: ...

    def get(self, mess_id: str, member_id: str) -> Member | None: ...

    def add(self, member: Member) -> Member: ...


class MemberService:
    """Creates, lists and deactivates members. Members are never deleted."""

    def __init__(
        self,
        *,
        mess_repository: MessRepositoryProtocol,
        member_repository: MemberRepositoryProtocol,
        session: SessionProtocol,
    ) -> None:
        self._mess_repository = mess_repository
        self._member_repository = member_repository
        self._session = session

    def list_members(self, mess_id: str, *, active_only: bool = False) -> list[Member]:
        self._require_mess(mess_id)
        return self._member_repository.list_by_mess(mess_id, active_only=active_only)

    def create_member(
        self, mess_id: str, *, name: str, room_number: str | None = None
    ) -> Member:
        mess = self._require_mess(mess_id)
        trimmed = name.strip()
        if not trimmed:
            raise InvalidRequestError(
                message=compose_error_message(
                    cause="Member name cannot be blank.",
                    action="Provide the member's name and retry.",
                )
            )
        try:
            member = self._member_repository.add(
                Member(
                    mess_id=mess.id,
                    name=trimmed,
                    room_number=room_number.strip() if room_number else None,
                    is_active=True,
                )
            )
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info(
            "member_created", extra={"mess_id": mess.id, "member_id": member.id}
        )
        return member

    def deactivate_member(self, mess_id: str, member_id: str) -> Member:
        self._require_mess(mess_id)
        member = self._member_repository.get(mess_id, member_id)
        if member is None:
            raise MemberNotFoundError(details={"member_id": member_id})
        if not member.is_active:
            return member
        try:
            member.is_active = False
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info(
            "member_deactivated", extra={"mess_id": mess_id, "member_id": member_id}
        )
        return member

    def _require_mess(self, mess_id: str) -> Mess:
        mess = self._mess_repository.get(mess_id)
        if mess is None:
            raise MessNotFoundError(details={"mess_id": mess_id})
        return mess
