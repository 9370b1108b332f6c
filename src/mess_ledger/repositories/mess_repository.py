"""Mess persistence operations."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from mess_ledger.db.models.mess import Mess


class MessRepository:
    """Repository for mess lookup and month advancement."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, mess_id: str) -> Mess | None:
        return self._session.get(Mess, mess_id)

    def list_ids(self) -> list[str]:
        statement = select(Mess.id).order_by(Mess.created_at.asc(), Mess.id.asc())
        return list(self._session.scalars(statement).all())

    def advance_month(self, mess_id: str, *, from_month: str, to_month: str) -> bool:
        """Move current_month forward only if it still equals from_month."""
        statement = (
            update(Mess)
            .where(Mess.id == mess_id, Mess.current_month == from_month)
            .values(current_month=to_month)
            .execution_options(synchronize_session="fetch")
        )
        result = self._session.execute(statement)
        return bool(result.rowcount)

    def read_current_month(self, mess_id: str) -> str | None:
        """Read current_month from the database, bypassing the identity map."""
        statement = select(Mess.current_month).where(Mess.id == mess_id)
        return self._session.scalar(statement)
