"""Subscription ORM model."""

from __future__ import annotations

from datetime import date, datetime
from uuid import uuid4

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    String,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from mess_ledger.db.base import Base
from mess_ledger.domain.subscription import PlanType, SubscriptionStatusValue


class Subscription(Base):
    """Purchased access period of a mess."""

    __tablename__ = "subscriptions"
    __table_args__ = (
        CheckConstraint(
            "end_date >= start_date", name="ck_subscriptions_end_after_start"
        ),
        Index("ix_subscriptions_mess_id", "mess_id"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    mess_id: Mapped[str] = mapped_column(ForeignKey("messes.id"), nullable=False)
    plan_type: Mapped[PlanType] = mapped_column(
        Enum(
            PlanType,
            name="subscription_type",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            validate_strings=True,
        ),
        nullable=False,
        default=PlanType.MONTHLY,
    )
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[SubscriptionStatusValue] = mapped_column(
        Enum(
            SubscriptionStatusValue,
            name="subscription_status",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            validate_strings=True,
        ),
        nullable=False,
        default=SubscriptionStatusValue.ACTIVE,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )
