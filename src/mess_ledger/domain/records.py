"""Immutable ledger records consumed by the reconciliation core."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from mess_ledger.domain.billing_month import BillingMonth


@dataclass(frozen=True, slots=True)
class MemberRef:
    """Member identity and activity flag."""

    id: str
    name: str = ""
    is_active: bool = True


@dataclass(frozen=True, slots=True)
class MealEntry:
    """One member's meal counts for one calendar day."""

    member_id: str
    meal_date: date
    breakfast: int = 0
    lunch: int = 0
    dinner: int = 0

    @property
    def total(self) -> int:
        return self.breakfast + self.lunch + self.dinner


@dataclass(frozen=True, slots=True)
class BazarEntry:
    """One grocery purchase."""

    purchase_date: date
    cost: Decimal
    member_id: str | None = None


@dataclass(frozen=True, slots=True)
class DepositEntry:
    """One payment made by a member into the mess."""

    member_id: str
    deposit_date: date
    amount: Decimal


@dataclass(frozen=True, slots=True)
class AdditionalCostEntry:
    """A miscellaneous shared cost such as utilities."""

    cost_date: date
    amount: Decimal
    description: str = ""


@dataclass(frozen=True, slots=True)
class PeriodLedger:
    """All raw records of one mess for one billing month."""

    month: BillingMonth
    members: tuple[MemberRef, ...] = ()
    meals: tuple[MealEntry, ...] = ()
    bazars: tuple[BazarEntry, ...] = ()
    deposits: tuple[DepositEntry, ...] = ()
    additional_costs: tuple[AdditionalCostEntry, ...] = ()

    @property
    def active_member_count(self) -> int:
        return sum(1 for member in self.members if member.is_active)

    def member(self, member_id: str) -> MemberRef | None:
        return next(
            (member for member in self.members if member.id == member_id), None
        )
