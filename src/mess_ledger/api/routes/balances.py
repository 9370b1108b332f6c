"""Monthly balance routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from mess_ledger.api.dependencies import get_balance_service
from mess_ledger.api.schemas.balances import (
    MemberMonthBalanceResponse,
    MonthBalancesResponse,
)
from mess_ledger.domain.billing_month import BillingMonth
from mess_ledger.services.balance_service import BalanceService

router = APIRouter(prefix="/messes/{mess_id}", tags=["Balances"])


@router.get("/balances", response_model=MonthBalancesResponse)
def get_current_balances(
    mess_id: str,
    service: Annotated[BalanceService, Depends(get_balance_service)],
) -> MonthBalancesResponse:
    """Return balances of the ongoing calendar month."""

    return MonthBalancesResponse.from_summary(service.get_month_balances(mess_id))


@router.get(
    "/months/{year}/{month}/balances",
    response_model=MonthBalancesResponse,
)
def get_month_balances(
    mess_id: str,
    year: Annotated[int, Path(ge=2000, le=2100)],
    month: Annotated[int, Path(ge=1, le=12)],
    service: Annotated[BalanceService, Depends(get_balance_service)],
) -> MonthBalancesResponse:
    """Return meal rate, totals and every active member's balance."""

    summary = service.get_month_balances(mess_id, BillingMonth(year, month))
    return MonthBalancesResponse.from_summary(summary)


@router.get(
    "/months/{year}/{month}/members/{member_id}/balance",
    response_model=MemberMonthBalanceResponse,
)
def get_member_balance(
    mess_id: str,
    year: Annotated[int, Path(ge=2000, le=2100)],
    month: Annotated[int, Path(ge=1, le=12)],
    member_id: str,
    service: Annotated[BalanceService, Depends(get_balance_service)],
) -> MemberMonthBalanceResponse:
    projection = service.get_member_balance(
        mess_id, member_id, BillingMonth(year, month)
    )
    return MemberMonthBalanceResponse.from_projection(projection)
