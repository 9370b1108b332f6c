"""Schemas for monthly archive and rollover endpoints."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from mess_ledger.db.models.monthly_archive import MonthlyArchive
from mess_ledger.domain.money import format_exact, format_money
from mess_ledger.services.monthly_archive_service import RolloverResult

MONEY_PATTERN = r"^-?[0-9]+\.[0-9]{2}$"
MONTH_PATTERN = r"^[0-9]{4}-(0[1-9]|1[0-2])$"


class ArchivedMemberResponse(BaseModel):
    """Frozen member line; money fields keep the stored exact value."""

    member_id: str
    name: str
    is_active: bool
    total_meals: int
    meal_cost: str = Field(pattern=MONEY_PATTERN)
    deposit_total: str = Field(pattern=MONEY_PATTERN)
    bazar_contribution: str = Field(pattern=MONEY_PATTERN)
    per_head_additional_cost: str = Field(pattern=MONEY_PATTERN)
    balance: str = Field(pattern=MONEY_PATTERN)
    balance_exact: str

    @classmethod
    def from_snapshot(cls, data: dict[str, Any]) -> ArchivedMemberResponse:
        return cls(
            member_id=data["member_id"],
            name=data["name"],
            is_active=data["is_active"],
            total_meals=data["total_meals"],
            meal_cost=format_money(Decimal(data["meal_cost"])),
            deposit_total=format_money(Decimal(data["deposit_total"])),
            bazar_contribution=format_money(Decimal(data["bazar_contribution"])),
            per_head_additional_cost=format_money(
                Decimal(data["per_head_additional_cost"])
            ),
            balance=format_money(Decimal(data["balance"])),
            balance_exact=data["balance"],
        )


class ArchiveResponse(BaseModel):
    id: str
    month: str = Field(pattern=MONTH_PATTERN)
    meal_rate: str = Field(pattern=MONEY_PATTERN)
    meal_rate_exact: str
    total_bazar: str = Field(pattern=MONEY_PATTERN)
    total_meals: int
    total_deposits: str = Field(pattern=MONEY_PATTERN)
    total_additional_costs: str = Field(pattern=MONEY_PATTERN)
    per_head_additional_cost: str = Field(pattern=MONEY_PATTERN)
    members: list[ArchivedMemberResponse]
    created_at: datetime | None

    @classmethod
    def from_model(cls, archive: MonthlyArchive) -> ArchiveResponse:
        return cls(
            id=archive.id,
            month=archive.month,
            meal_rate=format_money(archive.meal_rate),
            meal_rate_exact=format_exact(archive.meal_rate),
            total_bazar=format_money(archive.total_bazar),
            total_meals=archive.total_meals,
            total_deposits=format_money(archive.total_deposits),
            total_additional_costs=format_money(archive.total_additional_costs),
            per_head_additional_cost=format_money(archive.per_head_additional_cost),
            members=[
                ArchivedMemberResponse.from_snapshot(item)
                for item in archive.members_data
            ],
            created_at=archive.created_at,
        )


class ArchivesListResponse(BaseModel):
    archives: list[ArchiveResponse]

    @classmethod
    def from_models(cls, archives: list[MonthlyArchive]) -> ArchivesListResponse:
        return cls(archives=[ArchiveResponse.from_model(item) for item in archives])


class RolloverResponse(BaseModel):
    mess_id: str
    archived_months: list[str]
    current_month: str = Field(pattern=MONTH_PATTERN)

    @classmethod
    def from_result(cls, result: RolloverResult) -> RolloverResponse:
        return cls(
            mess_id=result.mess_id,
            archived_months=list(result.archived_months),
            current_month=result.current_month,
        )
