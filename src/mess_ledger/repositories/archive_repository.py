"""Repository adapter for monthly archive persistence."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from mess_ledger.db.models.monthly_archive import MonthlyArchive


class ArchiveRepository:
    """SQLAlchemy repository for monthly archive snapshots."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, mess_id: str, month: str) -> MonthlyArchive | None:
        statement = select(MonthlyArchive).where(
            MonthlyArchive.mess_id == mess_id,
            MonthlyArchive.month == month,
        )
        return self._session.scalar(statement)

    def list_by_mess(self, mess_id: str) -> list[MonthlyArchive]:
        statement = (
            select(MonthlyArchive)
            .where(MonthlyArchive.mess_id == mess_id)
            .order_by(MonthlyArchive.month.desc())
        )
        return list(self._session.scalars(statement).all())

    def latest_month(self, mess_id: str) -> str | None:
        """Return the newest archived month key, if any."""
        statement = select(func.max(MonthlyArchive.month)).where(
            MonthlyArchive.mess_id == mess_id
        )
        return self._session.scalar(statement)

    def create(self, archive: MonthlyArchive) -> MonthlyArchive:
        """Insert an archive row; a duplicate (mess, month) raises IntegrityError."""
        self._session.add(archive)
        self._session.flush()
        return archive
