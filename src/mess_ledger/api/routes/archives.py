"""Monthly archive and rollover routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from mess_ledger.api.dependencies import get_monthly_archive_service
from mess_ledger.api.schemas.archives import (
    ArchiveResponse,
    ArchivesListResponse,
    RolloverResponse,
)
from mess_ledger.domain.billing_month import BillingMonth
from mess_ledger.services.monthly_archive_service import MonthlyArchiveService

router = APIRouter(prefix="/messes/{mess_id}", tags=["Archives"])


@router.get("/archives", response_model=ArchivesListResponse)
def list_archives(
    mess_id: str,
    service: Annotated[MonthlyArchiveService, Depends(get_monthly_archive_service)],
) -> ArchivesListResponse:
    """List archived months, newest first."""

    return ArchivesListResponse.from_models(service.list_archives(mess_id))


@router.get(
    "/archives/{year}/{month}",
    response_model=ArchiveResponse,
    responses={404: {"description": "Archive not found"}},
)
def get_archive(
    mess_id: str,
    year: Annotated[int, Path(ge=2000, le=2100)],
    month: Annotated[int, Path(ge=1, le=12)],
    service: Annotated[MonthlyArchiveService, Depends(get_monthly_archive_service)],
) -> ArchiveResponse:
    archive = service.get_archive(mess_id, BillingMonth(year, month))
    return ArchiveResponse.from_model(archive)


@router.post("/rollover", response_model=RolloverResponse)
def roll_over(
    mess_id: str,
    service: Annotated[MonthlyArchiveService, Depends(get_monthly_archive_service)],
) -> RolloverResponse:
    """Archive every finished month and advance the mess to the current one."""

    return RolloverResponse.from_result(service.roll_over(mess_id))
