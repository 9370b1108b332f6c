"""Business service for the browsable and editable calendar of a mess."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from mess_ledger.db.models.mess import Mess
from mess_ledger.domain.billing_month import BillingMonth, local_today, resolve_now
from mess_ledger.domain.date_window import (
    EditableRange,
    compute_editable_range,
    filter_editable_months,
)
from mess_ledger.domain.errors import MessNotFoundError
from mess_ledger.domain.subscription import (
    DEFAULT_READ_ONLY_DAYS_PER_PLAN_MONTH,
    SubscriptionStatus,
    SubscriptionWindow,
    compute_subscription_status,
)


class MessRepositoryProtocol(Protocol):
    def get(self, mess_id: str) -> Mess | None: ...


class SubscriptionRepositoryProtocol(Protocol):
    def get_current(self, mess_id: str) -> SubscriptionWindow | None: ...


class ArchiveRepositoryProtocol(Protocol):
    def latest_month(self, mess_id: str) -> str | None: ...


class LedgerQueryRepositoryProtocol(Protocol):
    def list_record_months(self, mess_id: str) -> set[BillingMonth]: ...


@dataclass(frozen=True, slots=True)
class CalendarWindow:
    """What a client may show and what it may write to."""

    current_month: BillingMonth
    editable_range: EditableRange
    subscription: SubscriptionStatus
    months: tuple[BillingMonth, ...]


class CalendarService:
    """Combines the subscription window with the months that hold records."""

    def __init__(
        self,
        *,
        mess_repository: MessRepositoryProtocol,
        subscription_repository: SubscriptionRepositoryProtocol,
        ledger_query_repository: LedgerQueryRepositoryProtocol,
        archive_repository: ArchiveRepositoryProtocol,
        read_only_days_per_plan_month: int = DEFAULT_READ_ONLY_DAYS_PER_PLAN_MONTH,
        now_provider: Callable[[], datetime] | None = None,
    ) -> None:
        self._mess_repository = mess_repository
        self._subscription_repository = subscription_repository
        self._ledger_query_repository = ledger_query_repository
        self._archive_repository = archive_repository
        self._read_only_days_per_plan_month = read_only_days_per_plan_month
        self._now_provider = now_provider or (lambda: resolve_now(None))

    def get_window(self, mess_id: str, now: datetime | None = None) -> CalendarWindow:
        mess = self._mess_repository.get(mess_id)
        if mess is None:
            raise MessNotFoundError(details={"mess_id": mess_id})

        instant = resolve_now(now or self._now_provider())
        subscription = self._subscription_repository.get_current(mess_id)
        floor = local_today(mess.created_at) if mess.created_at else None
        current = BillingMonth.current(instant)
        latest = self._archive_repository.latest_month(mess_id)
        archived_through = BillingMonth.from_key(latest) if latest else None

        candidates = self._ledger_query_repository.list_record_months(mess_id)
        candidates.add(current)
        months = filter_editable_months(
            sorted(candidates, reverse=True),
            subscription,
            instant,
            floor=floor,
            archived_through=archived_through,
        )
        return CalendarWindow(
            current_month=current,
            editable_range=compute_editable_range(
                subscription,
                instant,
                floor=floor,
                archived_through=archived_through,
            ),
            subscription=compute_subscription_status(
                subscription,
                instant,
                read_only_days_per_plan_month=self._read_only_days_per_plan_month,
            ),
            months=tuple(months),
        )
