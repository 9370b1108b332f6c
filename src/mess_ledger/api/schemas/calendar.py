"""Schemas for the calendar window endpoint."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from mess_ledger.domain.subscription import PlanType
from mess_ledger.services.calendar_service import CalendarWindow

MONTH_PATTERN = r"^[0-9]{4}-(0[1-9]|1[0-2])$"


class EditableRangeResponse(BaseModel):
    min_date: date | None
    max_date: date
    read_only: bool
    archived_through: str | None = Field(default=None, pattern=MONTH_PATTERN)


class SubscriptionStatusResponse(BaseModel):
    is_active: bool
    is_expired: bool
    is_read_only: bool
    can_access_data: bool
    days_remaining: int
    expired_days_ago: int
    read_only_days: int
    plan_type: PlanType | None


class CalendarWindowResponse(BaseModel):
    """Browsable months, newest first, and the writable date range."""

    current_month: str = Field(pattern=MONTH_PATTERN)
    editable_range: EditableRangeResponse
    subscription: SubscriptionStatusResponse
    months: list[str]

    @classmethod
    def from_window(cls, window: CalendarWindow) -> CalendarWindowResponse:
        status = window.subscription
        return cls(
            current_month=window.current_month.to_key(),
            editable_range=EditableRangeResponse(
                min_date=window.editable_range.min_date,
                max_date=window.editable_range.max_date,
                read_only=window.editable_range.read_only,
                archived_through=(
                    window.editable_range.archived_through.to_key()
                    if window.editable_range.archived_through
                    else None
                ),
            ),
            subscription=SubscriptionStatusResponse(
                is_active=status.is_active,
                is_expired=status.is_expired,
                is_read_only=status.is_read_only,
                can_access_data=status.can_access_data,
                days_remaining=status.days_remaining,
                expired_days_ago=status.expired_days_ago,
                read_only_days=status.read_only_days,
                plan_type=status.plan_type,
            ),
            months=[month.to_key() for month in window.months],
        )
