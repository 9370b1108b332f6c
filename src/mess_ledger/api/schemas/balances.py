"""Schemas for monthly balance responses."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from mess_ledger.domain.money import format_exact, format_money
from mess_ledger.domain.reconciliation import (
    BalanceStanding,
    LedgerSummary,
    MemberBalance,
)

if TYPE_CHECKING:
    from mess_ledger.services.balance_service import MemberBalanceProjection

MONEY_PATTERN = r"^-?[0-9]+\.[0-9]{2}$"
MONTH_PATTERN = r"^[0-9]{4}-(0[1-9]|1[0-2])$"


class MemberBalanceResponse(BaseModel):
    """Reconciled line of one member for a month."""

    member_id: str
    name: str
    is_active: bool
    total_meals: int
    meal_cost: str = Field(pattern=MONEY_PATTERN)
    deposit_total: str = Field(pattern=MONEY_PATTERN)
    bazar_contribution: str = Field(pattern=MONEY_PATTERN)
    per_head_additional_cost: str = Field(pattern=MONEY_PATTERN)
    balance: str = Field(pattern=MONEY_PATTERN)
    standing: BalanceStanding

    @classmethod
    def from_balance(cls, line: MemberBalance) -> MemberBalanceResponse:
        return cls(
            member_id=line.member_id,
            name=line.name,
            is_active=line.is_active,
            total_meals=line.total_meals,
            meal_cost=format_money(line.meal_cost),
            deposit_total=format_money(line.deposit_total),
            bazar_contribution=format_money(line.bazar_contribution),
            per_head_additional_cost=format_money(line.per_head_additional_cost),
            balance=format_money(line.balance),
            standing=line.standing,
        )


class MonthBalancesResponse(BaseModel):
    """Meal rate, period totals and every active member's balance."""

    month: str = Field(pattern=MONTH_PATTERN)
    meal_rate: str = Field(pattern=MONEY_PATTERN)
    meal_rate_exact: str
    total_bazar: str = Field(pattern=MONEY_PATTERN)
    total_meals: int
    total_deposits: str = Field(pattern=MONEY_PATTERN)
    total_additional_costs: str = Field(pattern=MONEY_PATTERN)
    per_head_additional_cost: str = Field(pattern=MONEY_PATTERN)
    active_member_count: int
    members: list[MemberBalanceResponse]

    @classmethod
    def from_summary(cls, summary: LedgerSummary) -> MonthBalancesResponse:
        return cls(
            month=summary.month.to_key(),
            meal_rate=format_money(summary.meal_rate),
            meal_rate_exact=format_exact(summary.meal_rate),
            total_bazar=format_money(summary.total_bazar),
            total_meals=summary.total_meals,
            total_deposits=format_money(summary.total_deposits),
            total_additional_costs=format_money(summary.total_additional_costs),
            per_head_additional_cost=format_money(summary.per_head_additional_cost),
            active_member_count=summary.active_member_count,
            members=[MemberBalanceResponse.from_balance(m) for m in summary.members],
        )


class MemberMonthBalanceResponse(BaseModel):
    month: str = Field(pattern=MONTH_PATTERN)
    meal_rate: str = Field(pattern=MONEY_PATTERN)
    meal_rate_exact: str
    balance: MemberBalanceResponse

    @classmethod
    def from_projection(
        cls, projection: MemberBalanceProjection
    ) -> MemberMonthBalanceResponse:
        return cls(
            month=projection.month.to_key(),
            meal_rate=format_money(projection.meal_rate),
            meal_rate_exact=format_exact(projection.meal_rate),
            balance=MemberBalanceResponse.from_balance(projection.balance),
        )
