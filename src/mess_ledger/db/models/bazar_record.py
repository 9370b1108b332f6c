"""Grocery purchase ORM model."""

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


class BazarRecord(Base):
    """Immutable grocery purchase of a mess."""

    __tablename__ = "bazars"
    __table_args__ = (
        CheckConstraint("cost > 0", name="ck_bazars_cost_positive"),
        Index("ix_bazars_mess_date", "mess_id", "purchase_date"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    mess_id: Mapped[str] = mapped_column(ForeignKey("messes.id"), nullable=False)
    member_id: Mapped[str | None] = mapped_column(
        ForeignKey("members.id"), nullable=True
    )
    purchase_date: Mapped[date] = mapped_column(Date, nullable=False)
    cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    person_name: Mapped[str] = mapped_column(String(120), nullable=False)
    items: Mapped[str | None] = mapped_column(String(500), nullable=True)
    note: Mapped[str | None] = mapped_column(String(280), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )
