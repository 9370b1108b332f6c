"""Business service for monthly balance summaries."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Protocol

from mess_ledger.db.models.mess import Mess
from mess_ledger.domain.billing_month import BillingMonth, resolve_now
from mess_ledger.domain.errors import MemberNotFoundError, MessNotFoundError
from mess_ledger.domain.meal_rate import compute_meal_rate
from mess_ledger.domain.reconciliation import (
    LedgerSummary,
    MemberBalance,
    reconcile,
    summarize,
)
from mess_ledger.domain.records import PeriodLedger


class MessRepositoryProtocol(Protocol):
    def get(self, mess_id: str) -> Mess | None: ...


class LedgerQueryRepositoryProtocol(Protocol):
    def load_period_ledger(
        self, mess_id: str, month: BillingMonth
    ) -> PeriodLedger: ...


@dataclass(frozen=True, slots=True)
class MemberBalanceProjection:
    """One member's balance together with the period meal rate."""

    month: BillingMonth
    meal_rate: Decimal
    balance: MemberBalance


class BalanceService:
    """Loads a month's raw records and runs the reconciler over them."""

    def __init__(
        self,
        *,
        mess_repository: MessRepositoryProtocol,
        ledger_query_repository: LedgerQueryRepositoryProtocol,
        now_provider: Callable[[], datetime] | None = None,
    ) -> None:
        self._mess_repository = mess_repository
        self._ledger_query_repository = ledger_query_repository
        self._now_provider = now_provider or (lambda: resolve_now(None))

    def get_month_balances(
        self, mess_id: str, month: BillingMonth | None = None
    ) -> LedgerSummary:
        ledger = self._load(mess_id, month)
        return summarize(ledger)

    def get_member_balance(
        self, mess_id: str, member_id: str, month: BillingMonth | None = None
    ) -> MemberBalanceProjection:
        ledger = self._load(mess_id, month)
        if ledger.member(member_id) is None:
            raise MemberNotFoundError(details={"member_id": member_id})
        rate = compute_meal_rate(ledger.bazars, ledger.meals)
        return MemberBalanceProjection(
            month=ledger.month,
            meal_rate=rate,
            balance=reconcile(member_id, ledger, meal_rate=rate),
        )

    def _load(self, mess_id: str, month: BillingMonth | None) -> PeriodLedger:
        if self._mess_repository.get(mess_id) is None:
            raise MessNotFoundError(details={"mess_id": mess_id})
        period = month or BillingMonth.current(self._now_provider())
        return self._ledger_query_repository.load_period_ledger(mess_id, period)
