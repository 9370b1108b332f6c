"""Daily meal count ORM model."""

from __future__ import annotations

import enum
from datetime import date, datetime
from uuid import uuid4

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from mess_ledger.db.base import Base


class MealType(enum.StrEnum):
    """Meal counters kept per member and day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class MealRecord(Base):
    """One member's meal counts for one calendar day."""

    __tablename__ = "meals"
    __table_args__ = (
        UniqueConstraint("member_id", "meal_date", name="uq_meals_member_date"),
        CheckConstraint(
            "breakfast >= 0 AND lunch >= 0 AND dinner >= 0",
            name="ck_meals_counts_non_negative",
        ),
        Index("ix_meals_mess_date", "mess_id", "meal_date"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    mess_id: Mapped[str] = mapped_column(ForeignKey("messes.id"), nullable=False)
    member_id: Mapped[str] = mapped_column(ForeignKey("members.id"), nullable=False)
    meal_date: Mapped[date] = mapped_column(Date, nullable=False)
    breakfast: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    lunch: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    dinner: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
