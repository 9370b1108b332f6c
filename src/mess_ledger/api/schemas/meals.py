"""Schemas for the meal counter endpoint."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from mess_ledger.db.models.meal_record import MealRecord, MealType


class AdjustMealRequest(BaseModel):
    """One increment or decrement of a single meal counter."""

    member_id: str = Field(min_length=1, max_length=36)
    meal_date: str = Field(min_length=1, max_length=32)
    meal_type: MealType
    delta: int = Field(ge=-10, le=10)


class MealCountResponse(BaseModel):
    """Counters of one member for one day after the adjustment."""

    member_id: str
    meal_date: date
    breakfast: int
    lunch: int
    dinner: int
    total: int

    @classmethod
    def from_model(cls, meal: MealRecord) -> MealCountResponse:
        return cls(
            member_id=meal.member_id,
            meal_date=meal.meal_date,
            breakfast=meal.breakfast,
            lunch=meal.lunch,
            dinner=meal.dinner,
            total=meal.breakfast + meal.lunch + meal.dinner,
        )
