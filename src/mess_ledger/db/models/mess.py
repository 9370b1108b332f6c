"""Mess ORM model."""

from __future__ import annotations

import enum
from datetime import datetime
from uuid import uuid4

from sqlalchemy import CheckConstraint, DateTime, Enum, String, text
from sqlalchemy.orm import Mapped, mapped_column

from mess_ledger.db.base import Base


class MessStatus(enum.StrEnum):
    """Administrative status of a mess."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class Mess(Base):
    """A billing household whose members pool grocery costs."""

    __tablename__ = "messes"
    __table_args__ = (
        CheckConstraint(
            "length(current_month) = 7",
            name="ck_messes_current_month_format",
        ),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    code: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    current_month: Mapped[str] = mapped_column(String(7), nullable=False)
    status: Mapped[MessStatus] = mapped_column(
        Enum(
            MessStatus,
            name="mess_status",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
            validate_strings=True,
        ),
        nullable=False,
        default=MessStatus.ACTIVE,
    )
    suspend_reason: Mapped[str | None] = mapped_column(String(280), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )
