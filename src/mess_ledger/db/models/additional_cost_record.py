"""Shared additional cost ORM model."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Numeric,
    String,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from mess_ledger.db.base import Base


class AdditionalCostRecord(Base):
    """Miscellaneous cost split equally among active members."""

    __tablename__ = "additional_costs"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_additional_costs_amount_positive"),
        Index("ix_additional_costs_mess_date", "mess_id", "cost_date"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    mess_id: Mapped[str] = mapped_column(ForeignKey("messes.id"), nullable=False)
    cost_date: Mapped[date] = mapped_column(Date, nullable=False)
    description: Mapped[str] = mapped_column(String(280), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )
