"""Subscription window and derived access status."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date, datetime

from mess_ledger.domain.billing_month import local_today

DEFAULT_READ_ONLY_DAYS_PER_PLAN_MONTH = 30


class SubscriptionStatusValue(enum.StrEnum):
    """Subscription lifecycle states."""

    ACTIVE = "active"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class PlanType(enum.StrEnum):
    """Purchasable plan lengths."""

    MONTHLY = "monthly"
    YEARLY = "yearly"

    @property
    def months(self) -> int:
        return 12 if self is PlanType.YEARLY else 1


@dataclass(frozen=True, slots=True)
class SubscriptionWindow:
    """Currently purchased access period of a mess."""

    start_date: date
    end_date: date
    status: SubscriptionStatusValue = SubscriptionStatusValue.ACTIVE
    plan_type: PlanType = PlanType.MONTHLY

    def is_active_on(self, today: date) -> bool:
        """Return whether writes are allowed on the given local day."""
        return self.status == SubscriptionStatusValue.ACTIVE and today <= self.end_date


@dataclass(frozen=True, slots=True)
class SubscriptionStatus:
    """Access state shown to managers and members."""

    is_active: bool
    is_expired: bool
    is_read_only: bool
    can_access_data: bool
    days_remaining: int
    expired_days_ago: int
    read_only_days: int
    plan_type: PlanType | None


def compute_subscription_status(
    subscription: SubscriptionWindow | None,
    now: datetime,
    *,
    read_only_days_per_plan_month: int = DEFAULT_READ_ONLY_DAYS_PER_PLAN_MONTH,
) -> SubscriptionStatus:
    """Derive access flags from a subscription at a given instant.

    An expired (not cancelled) subscription keeps read access for as many days
    as the plan lasted, approximated as ``read_only_days_per_plan_month`` per
    purchased month.
    """
    if subscription is None:
        return SubscriptionStatus(
            is_active=False,
            is_expired=False,
            is_read_only=False,
            can_access_data=False,
            days_remaining=0,
            expired_days_ago=0,
            read_only_days=0,
            plan_type=None,
        )

    today = local_today(now)
    is_active = subscription.is_active_on(today)
    is_expired = (
        not is_active and subscription.status != SubscriptionStatusValue.CANCELLED
    )
    diff_days = (subscription.end_date - today).days
    read_only_days = subscription.plan_type.months * read_only_days_per_plan_month
    expired_days_ago = max(-diff_days, 0) if is_expired else 0
    can_access_data = is_active or (is_expired and expired_days_ago <= read_only_days)

    return SubscriptionStatus(
        is_active=is_active,
        is_expired=is_expired,
        is_read_only=not is_active and can_access_data,
        can_access_data=can_access_data,
        days_remaining=max(diff_days, 0) if is_active else 0,
        expired_days_ago=expired_days_ago,
        read_only_days=read_only_days,
        plan_type=subscription.plan_type,
    )
