"""Subscription lookup."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from mess_ledger.db.models.subscription import Subscription
from mess_ledger.domain.subscription import SubscriptionWindow


class SubscriptionRepository:
    """Read access to the subscription collaborator."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_current(self, mess_id: str) -> SubscriptionWindow | None:
        """Return the most recently purchased window of a mess."""
        statement = (
            select(Subscription)
            .where(Subscription.mess_id == mess_id)
            .order_by(
                Subscription.end_date.desc(),
                Subscription.created_at.desc(),
            )
            .limit(1)
        )
        row = self._session.scalar(statement)
        if row is None:
            return None
        return SubscriptionWindow(
            start_date=row.start_date,
            end_date=row.end_date,
            status=row.status,
            plan_type=row.plan_type,
        )
