"""API request and response schemas."""

from mess_ledger.api.schemas.archives import ArchiveResponse, RolloverResponse
from mess_ledger.api.schemas.balances import MonthBalancesResponse
from mess_ledger.api.schemas.calendar import CalendarWindowResponse
from mess_ledger.api.schemas.entries import (
    CreateAdditionalCostRequest,
    CreateBazarRequest,
    CreateDepositRequest,
)
from mess_ledger.api.schemas.meals import AdjustMealRequest
from mess_ledger.api.schemas.members import CreateMemberRequest, MemberResponse

__all__ = [
    "AdjustMealRequest",
    "ArchiveResponse",
    "CalendarWindowResponse",
    "CreateAdditionalCostRequest",
    "CreateBazarRequest",
    "CreateDepositRequest",
    "CreateMemberRequest",
    "MemberResponse",
    "MonthBalancesResponse",
    "RolloverResponse",
]
