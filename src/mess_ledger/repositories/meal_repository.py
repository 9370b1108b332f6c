"""Meal counter persistence with store-side atomic updates."""

from __future__ import annotations

from datetime import date
from typing import Any
from uuid import uuid4

from sqlalchemy import case, func
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from mess_ledger.db.models.meal_record import MealRecord, MealType


class MealRepository:
    """Repository for per-day meal counters."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def adjust_counter(
        self,
        *,
        mess_id: str,
        member_id: str,
        meal_date: date,
        meal_type: MealType,
        delta: int,
    ) -> MealRecord:
        """Apply ``delta`` to one counter in a single upsert statement.

        The new value is computed by the database as ``max(value + delta, 0)``,
        so concurrent adjustments never overwrite each other.
        """
        counters = {kind.value: 0 for kind in MealType}
        counters[meal_type.value] = max(delta, 0)

        column = MealRecord.__table__.c[meal_type.value]
        adjusted = column + delta
        statement = (
            self._insert()
            .values(
                id=str(uuid4()),
                mess_id=mess_id,
                member_id=member_id,
                meal_date=meal_date,
                **counters,
            )
            .on_conflict_do_update(
                index_elements=["member_id", "meal_date"],
                set_={
                    meal_type.value: case((adjusted < 0, 0), else_=adjusted),
                    "updated_at": func.now(),
                },
            )
            .returning(MealRecord)
        )
        return self._session.scalars(
            statement, execution_options={"populate_existing": True}
        ).one()

    def _insert(self) -> Any:
        dialect_name = self._session.get_bind().dialect.name
        if dialect_name == "postgresql":
            return postgresql_insert(MealRecord)
        if dialect_name == "sqlite":
            return sqlite_insert(MealRecord)
        raise NotImplementedError(
            f"Atomic meal upsert is not available for dialect {dialect_name!r}"
        )
