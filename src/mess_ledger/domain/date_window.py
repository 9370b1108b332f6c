"""Subscription-bound window of dates a mess may still edit.

The window is recomputed from ``(now, subscription)`` on every call; nothing
here reads or writes stored state. Writers are expected to call
:func:`validate_date` before persisting a record and to surface the returned
``code``/``error`` to the user.

Months up to and including ``archived_through`` are frozen: their snapshot has
been taken, so the window starts on the first day of the following month.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime

from mess_ledger.domain.billing_month import BillingMonth, local_today, resolve_now
from mess_ledger.domain.subscription import SubscriptionWindow
from mess_ledger.domain.validation import ValidationCode, ValidationResult


@dataclass(frozen=True, slots=True)
class EditableRange:
    """Inclusive range of writable dates."""

    min_date: date | None
    max_date: date
    read_only: bool
    archived_through: BillingMonth | None = None


def compute_editable_range(
    subscription: SubscriptionWindow | None,
    now: datetime,
    *,
    floor: date | None = None,
    archived_through: BillingMonth | None = None,
) -> EditableRange:
    """Return the writable range for a mess.

    Without a subscription, or with one that is not active or already past its
    end date, the mess is read-only and ``max_date`` is clamped to the end
    date (or to today when no subscription ever existed).
    """
    today = local_today(now)
    min_date = _lift_floor(floor, archived_through)
    if subscription is None:
        max_date, read_only = today, True
    elif subscription.is_active_on(today):
        max_date, read_only = today, False
    else:
        max_date, read_only = min(subscription.end_date, today), True
    return EditableRange(
        min_date=min_date,
        max_date=max_date,
        read_only=read_only,
        archived_through=archived_through,
    )


def validate_date(
    candidate: date | str,
    subscription: SubscriptionWindow | None,
    now: datetime,
    *,
    floor: date | None = None,
    archived_through: BillingMonth | None = None,
) -> ValidationResult:
    """Check whether an entry may be created or edited on ``candidate``."""
    entry_date = _coerce_date(candidate)
    if entry_date is None:
        return ValidationResult.reject(
            ValidationCode.INVALID_DATE_FORMAT,
            "Date must be an ISO calendar date (YYYY-MM-DD).",
        )

    if entry_date > local_today(now):
        return ValidationResult.reject(
            ValidationCode.DATE_IN_FUTURE,
            "Cannot enter data for future dates.",
        )

    window = compute_editable_range(
        subscription, now, floor=floor, archived_through=archived_through
    )
    if entry_date > window.max_date:
        return ValidationResult.reject(
            ValidationCode.DATE_AFTER_SUBSCRIPTION_END,
            "Cannot enter data after subscription end date "
            f"({window.max_date:%d/%m/%Y}).",
        )
    if archived_through is not None and entry_date <= archived_through.last_day:
        return ValidationResult.reject(
            ValidationCode.MONTH_ARCHIVED,
            f"Month {BillingMonth.from_date(entry_date)} is closed; "
            f"entries must be dated {window.min_date:%d/%m/%Y} or later.",
        )
    if window.min_date is not None and entry_date < window.min_date:
        return ValidationResult.reject(
            ValidationCode.DATE_BEFORE_MESS_START,
            f"Cannot enter data before {window.min_date:%d/%m/%Y}.",
        )
    return ValidationResult.ok()


def filter_editable_months(
    months: Iterable[BillingMonth],
    subscription: SubscriptionWindow | None,
    now: datetime,
    *,
    floor: date | None = None,
    archived_through: BillingMonth | None = None,
) -> list[BillingMonth]:
    """Drop months lying wholly outside the window, keeping the current month.

    Closed months are dropped even when they are the current month.
    """
    window = compute_editable_range(
        subscription, now, floor=floor, archived_through=archived_through
    )
    current = BillingMonth.current(now)
    return [
        month
        for month in months
        if (archived_through is None or month > archived_through)
        and (month == current or _overlaps(month, window))
    ]


def _lift_floor(
    floor: date | None, archived_through: BillingMonth | None
) -> date | None:
    if archived_through is None:
        return floor
    reopened = archived_through.next().first_day
    return reopened if floor is None else max(floor, reopened)


def _overlaps(month: BillingMonth, window: EditableRange) -> bool:
    if month.first_day > window.max_date:
        return False
    return window.min_date is None or month.last_day >= window.min_date


def _coerce_date(candidate: date | str) -> date | None:
    if isinstance(candidate, datetime):
        return resolve_now(candidate).date()
    if isinstance(candidate, date):
        return candidate
    try:
        return date.fromisoformat(candidate.strip())
    except (AttributeError, ValueError):
        return None
