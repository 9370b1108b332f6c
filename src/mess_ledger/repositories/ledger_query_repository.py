"""Read-oriented queries that feed the reconciliation core."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from mess_ledger.db.models.additional_cost_record import AdditionalCostRecord
from mess_ledger.db.models.bazar_record import BazarRecord
from mess_ledger.db.models.deposit_record import DepositRecord
from mess_ledger.db.models.meal_record import MealRecord
from mess_ledger.db.models.member import Member
from mess_ledger.domain.billing_month import BillingMonth
from mess_ledger.domain.records import (
    AdditionalCostEntry,
    BazarEntry,
    DepositEntry,
    MealEntry,
    MemberRef,
    PeriodLedger,
)


class LedgerQueryRepository:
    """Loads raw records of one mess for one billing month."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def load_period_ledger(self, mess_id: str, month: BillingMonth) -> PeriodLedger:
        first_day, last_day = month.first_day, month.last_day

        members = self._session.scalars(
            select(Member)
            .where(Member.mess_id == mess_id)
            .order_by(Member.name.asc(), Member.id.asc())
        ).all()
        meals = self._session.scalars(
            select(MealRecord)
            .where(
                MealRecord.mess_id == mess_id,
                MealRecord.meal_date.between(first_day, last_day),
            )
            .order_by(MealRecord.meal_date.asc(), MealRecord.id.asc())
        ).all()
        bazars = self._session.scalars(
            select(BazarRecord)
            .where(
                BazarRecord.mess_id == mess_id,
                BazarRecord.purchase_date.between(first_day, last_day),
            )
            .order_by(BazarRecord.purchase_date.asc(), BazarRecord.id.asc())
        ).all()
        deposits = self._session.scalars(
            select(DepositRecord)
            .where(
                DepositRecord.mess_id == mess_id,
                DepositRecord.deposit_date.between(first_day, last_day),
            )
            .order_by(DepositRecord.deposit_date.asc(), DepositRecord.id.asc())
        ).all()
        costs = self._session.scalars(
            select(AdditionalCostRecord)
            .where(
                AdditionalCostRecord.mess_id == mess_id,
                AdditionalCostRecord.cost_date.between(first_day, last_day),
            )
            .order_by(
                AdditionalCostRecord.cost_date.asc(), AdditionalCostRecord.id.asc()
            )
        ).all()

        return PeriodLedger(
            month=month,
            members=tuple(
                MemberRef(id=row.id, name=row.name, is_active=row.is_active)
                for row in members
            ),
            meals=tuple(
                MealEntry(
                    member_id=row.member_id,
                    meal_date=row.meal_date,
                    breakfast=row.breakfast,
                    lunch=row.lunch,
                    dinner=row.dinner,
                )
                for row in meals
            ),
            bazars=tuple(
                BazarEntry(
                    purchase_date=row.purchase_date,
                    cost=Decimal(row.cost),
                    member_id=row.member_id,
                )
                for row in bazars
            ),
            deposits=tuple(
                DepositEntry(
                    member_id=row.member_id,
                    deposit_date=row.deposit_date,
                    amount=Decimal(row.amount),
                )
                for row in deposits
            ),
            additional_costs=tuple(
                AdditionalCostEntry(
                    cost_date=row.cost_date,
                    amount=Decimal(row.amount),
                    description=row.description,
                )
                for row in costs
            ),
        )

    def list_record_months(self, mess_id: str) -> set[BillingMonth]:
        """Return every month holding at least one ledger record."""
        dates: list[date] = []
        for column, mess_column in (
            (MealRecord.meal_date, MealRecord.mess_id),
            (BazarRecord.purchase_date, BazarRecord.mess_id),
            (DepositRecord.deposit_date, DepositRecord.mess_id),
            (AdditionalCostRecord.cost_date, AdditionalCostRecord.mess_id),
        ):
            dates.extend(
                self._session.scalars(
                    select(column).where(mess_column == mess_id).distinct()
                ).all()
            )
        return {BillingMonth.from_date(value) for value in dates}
