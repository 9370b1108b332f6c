"""Member persistence operations."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from mess_ledger.db.models.member import Member


class MemberRepository:
    """Repository for members of a mess."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_by_mess(self, mess_id: str, *, active_only: bool = False) -> list[Member]:
        statement = select(Member).where(Member.mess_id == mess_id)
        if active_only:
            statement = statement.where(Member.is_active.is_(True))
        statement = statement.order_by(Member.name.asc(), Member.id.asc())
        return list(self._session.scalars(statement).all())

    def get(self, mess_id: str, member_id: str) -> Member | None:
        statement = select(Member).where(
            Member.mess_id == mess_id,
            Member.id == member_id,
        )
        return self._session.scalar(statement)

    def add(self, member: Member) -> Member:
        self._session.add(member)
        self._session.flush()
        return member
