"""Bazar, deposit and additional cost routes."""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, status

from mess_ledger.api.dependencies import get_entry_service
from mess_ledger.api.schemas.entries import (
    AdditionalCostResponse,
    BazarResponse,
    CreateAdditionalCostRequest,
    CreateBazarRequest,
    CreateDepositRequest,
    DepositResponse,
)
from mess_ledger.services.entry_service import (
    CreateAdditionalCostInput,
    CreateBazarInput,
    CreateDepositInput,
    EntryService,
)

router = APIRouter(prefix="/messes/{mess_id}", tags=["Entries"])

ENTRY_RESPONSES: dict[int | str, dict[str, str]] = {
    400: {"description": "Invalid payload"},
    403: {"description": "Mess suspended"},
    404: {"description": "Mess or member not found"},
    422: {"description": "Invalid date or non-positive amount"},
}


@router.post(
    "/bazars",
    response_model=BazarResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ENTRY_RESPONSES,
)
def create_bazar(
    mess_id: str,
    payload: CreateBazarRequest,
    service: Annotated[EntryService, Depends(get_entry_service)],
) -> BazarResponse:
    """Record a grocery purchase feeding the meal rate."""

    bazar = service.add_bazar(
        CreateBazarInput(
            mess_id=mess_id,
            purchase_date=payload.purchase_date,
            cost=Decimal(payload.cost),
            person_name=payload.person_name,
            member_id=payload.member_id,
            items=payload.items,
            note=payload.note,
        )
    )
    return BazarResponse.from_model(bazar)


@router.post(
    "/deposits",
    response_model=DepositResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ENTRY_RESPONSES,
)
def create_deposit(
    mess_id: str,
    payload: CreateDepositRequest,
    service: Annotated[EntryService, Depends(get_entry_service)],
) -> DepositResponse:
    deposit = service.add_deposit(
        CreateDepositInput(
            mess_id=mess_id,
            member_id=payload.member_id,
            deposit_date=payload.deposit_date,
            amount=Decimal(payload.amount),
            note=payload.note,
        )
    )
    return DepositResponse.from_model(deposit)


@router.post(
    "/additional-costs",
    response_model=AdditionalCostResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ENTRY_RESPONSES,
)
def create_additional_cost(
    mess_id: str,
    payload: CreateAdditionalCostRequest,
    service: Annotated[EntryService, Depends(get_entry_service)],
) -> AdditionalCostResponse:
    cost = service.add_additional_cost(
        CreateAdditionalCostInput(
            mess_id=mess_id,
            cost_date=payload.cost_date,
            description=payload.description,
            amount=Decimal(payload.amount),
        )
    )
    return AdditionalCostResponse.from_model(cost)
