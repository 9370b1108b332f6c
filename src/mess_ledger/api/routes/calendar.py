"""Calendar window routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from mess_ledger.api.dependencies import get_calendar_service
from mess_ledger.api.schemas.calendar import CalendarWindowResponse
from mess_ledger.services.calendar_service import CalendarService

router = APIRouter(prefix="/messes/{mess_id}/calendar", tags=["Calendar"])


@router.get("", response_model=CalendarWindowResponse)
def get_calendar(
    mess_id: str,
    service: Annotated[CalendarService, Depends(get_calendar_service)],
) -> CalendarWindowResponse:
    """Return browsable months and the writable date range of a mess."""

    return CalendarWindowResponse.from_window(service.get_window(mess_id))
