"""Meal rate derivation for one billing period."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from mess_ledger.domain.money import LEDGER_CONTEXT, ZERO, sum_money
from mess_ledger.domain.records import BazarEntry, MealEntry


def total_bazar_cost(bazars: Iterable[BazarEntry]) -> Decimal:
    """Sum grocery costs of the period."""
    return sum_money(bazar.cost for bazar in bazars)


def total_meal_count(meals: Iterable[MealEntry]) -> int:
    """Sum breakfast, lunch and dinner counts of the period."""
    return sum(meal.total for meal in meals)


def compute_meal_rate(
    bazars: Iterable[BazarEntry], meals: Iterable[MealEntry]
) -> Decimal:
    """Return cost per meal, or zero when no meal was recorded.

    The result is not rounded; display rounding belongs to the caller.
    """
    total_meals = total_meal_count(meals)
    if total_meals <= 0:
        return ZERO
    return LEDGER_CONTEXT.divide(total_bazar_cost(bazars), Decimal(total_meals))
