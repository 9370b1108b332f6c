"""Per-member balance reconciliation for one billing period."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from decimal import Decimal

from mess_ledger.domain.additional_cost import aggregate_per_head
from mess_ledger.domain.billing_month import BillingMonth
from mess_ledger.domain.meal_rate import (
    compute_meal_rate,
    total_bazar_cost,
    total_meal_count,
)
from mess_ledger.domain.money import (
    LEDGER_CONTEXT,
    ZERO,
    quantize_ledger,
    sum_money,
)
from mess_ledger.domain.records import MemberRef, PeriodLedger


class BalanceStanding(enum.StrEnum):
    """Sign of a balance expressed as a label."""

    SURPLUS = "surplus"
    DUE = "due"
    SETTLED = "settled"


@dataclass(frozen=True, slots=True)
class MemberBalance:
    """Computed balance line for one member.

    ``balance + meal_cost + per_head_additional_cost == deposit_total`` holds
    exactly.
    """

    member_id: str
    name: str
    is_active: bool
    total_meals: int
    meal_cost: Decimal
    deposit_total: Decimal
    bazar_contribution: Decimal
    per_head_additional_cost: Decimal
    balance: Decimal

    @property
    def standing(self) -> BalanceStanding:
        if self.balance > 0:
            return BalanceStanding.SURPLUS
        if self.balance < 0:
            return BalanceStanding.DUE
        return BalanceStanding.SETTLED


@dataclass(frozen=True, slots=True)
class LedgerSummary:
    """Period-level figures plus every reconciled member line."""

    month: BillingMonth
    meal_rate: Decimal
    total_bazar: Decimal
    total_meals: int
    total_deposits: Decimal
    total_additional_costs: Decimal
    per_head_additional_cost: Decimal
    active_member_count: int
    members: tuple[MemberBalance, ...]


def reconcile(
    member_id: str,
    ledger: PeriodLedger,
    *,
    meal_rate: Decimal | None = None,
) -> MemberBalance:
    """Combine one member's deposits, meal cost and shared-cost share.

    Inactive members are not charged a per-head share of additional costs,
    since the share is computed over active members only.
    """
    member = ledger.member(member_id) or MemberRef(id=member_id)
    rate = (
        meal_rate
        if meal_rate is not None
        else compute_meal_rate(ledger.bazars, ledger.meals)
    )

    member_meals = total_meal_count(
        meal for meal in ledger.meals if meal.member_id == member_id
    )
    meal_cost = quantize_ledger(LEDGER_CONTEXT.multiply(Decimal(member_meals), rate))
    deposit_total = sum_money(
        deposit.amount for deposit in ledger.deposits if deposit.member_id == member_id
    )
    bazar_contribution = sum_money(
        bazar.cost for bazar in ledger.bazars if bazar.member_id == member_id
    )
    per_head = _per_head_additional_cost(ledger) if member.is_active else ZERO
    balance = LEDGER_CONTEXT.subtract(
        LEDGER_CONTEXT.subtract(deposit_total, meal_cost), per_head
    )

    return MemberBalance(
        member_id=member.id,
        name=member.name,
        is_active=member.is_active,
        total_meals=member_meals,
        meal_cost=meal_cost,
        deposit_total=deposit_total,
        bazar_contribution=bazar_contribution,
        per_head_additional_cost=per_head,
        balance=balance,
    )


def reconcile_all(
    ledger: PeriodLedger, *, include_inactive: bool = False
) -> list[MemberBalance]:
    """Reconcile every member of the ledger in member order."""
    rate = compute_meal_rate(ledger.bazars, ledger.meals)
    return [
        reconcile(member.id, ledger, meal_rate=rate)
        for member in ledger.members
        if include_inactive or member.is_active
    ]


def summarize(ledger: PeriodLedger, *, include_inactive: bool = False) -> LedgerSummary:
    """Return period totals and member balances computed from the same rate."""
    return LedgerSummary(
        month=ledger.month,
        meal_rate=compute_meal_rate(ledger.bazars, ledger.meals),
        total_bazar=total_bazar_cost(ledger.bazars),
        total_meals=total_meal_count(ledger.meals),
        total_deposits=sum_money(deposit.amount for deposit in ledger.deposits),
        total_additional_costs=sum_money(
            cost.amount for cost in ledger.additional_costs
        ),
        per_head_additional_cost=_per_head_additional_cost(ledger),
        active_member_count=ledger.active_member_count,
        members=tuple(reconcile_all(ledger, include_inactive=include_inactive)),
    )


def _per_head_additional_cost(ledger: PeriodLedger) -> Decimal:
    return aggregate_per_head(
        (cost.amount for cost in ledger.additional_costs),
        ledger.active_member_count,
    )
