"""Monthly archive ORM model."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import uuid4

from sqlalchemy import (
    JSON,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from mess_ledger.db.base import Base
from mess_ledger.db.column_types import ExactDecimal


class MonthlyArchive(Base):
    """Immutable snapshot of one mess's billing month."""

    __tablename__ = "monthly_archives"
    __table_args__ = (
        UniqueConstraint("mess_id", "month", name="uq_monthly_archives_mess_month"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    mess_id: Mapped[str] = mapped_column(ForeignKey("messes.id"), nullable=False)
    month: Mapped[str] = mapped_column(String(7), nullable=False)
    meal_rate: Mapped[Decimal] = mapped_column(ExactDecimal, nullable=False)
    total_bazar: Mapped[Decimal] = mapped_column(ExactDecimal, nullable=False)
    total_meals: Mapped[int] = mapped_column(Integer, nullable=False)
    total_deposits: Mapped[Decimal] = mapped_column(ExactDecimal, nullable=False)
    total_additional_costs: Mapped[Decimal] = mapped_column(
        ExactDecimal, nullable=False
    )
    per_head_additional_cost: Mapped[Decimal] = mapped_column(
        ExactDecimal, nullable=False
    )
    members_data: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )
