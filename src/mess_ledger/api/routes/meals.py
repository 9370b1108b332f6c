"""Meal counter routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from mess_ledger.api.dependencies import get_entry_service
from mess_ledger.api.schemas.meals import AdjustMealRequest, MealCountResponse
from mess_ledger.services.entry_service import AdjustMealInput, EntryService

router = APIRouter(prefix="/messes/{mess_id}/meals", tags=["Meals"])


@router.post(
    "/adjust",
    response_model=MealCountResponse,
    responses={
        400: {"description": "Invalid payload"},
        403: {"description": "Mess suspended"},
        404: {"description": "Mess or member not found"},
        422: {"description": "Date outside the editable window"},
    },
)
def adjust_meal(
    mess_id: str,
    payload: AdjustMealRequest,
    service: Annotated[EntryService, Depends(get_entry_service)],
) -> MealCountResponse:
    """Increment or decrement one meal counter; counts never go below zero."""

    meal = service.adjust_meal(
        AdjustMealInput(
            mess_id=mess_id,
            member_id=payload.member_id,
            meal_date=payload.meal_date,
            meal_type=payload.meal_type,
            delta=payload.delta,
        )
    )
    return MealCountResponse.from_model(meal)
