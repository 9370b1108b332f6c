"""Schemas for bazar, deposit and additional cost endpoints.

Amounts and dates are accepted as strings so that non-positive amounts and
dates outside the editable window reach the service, which reports them with
their own error codes.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from mess_ledger.db.models.additional_cost_record import AdditionalCostRecord
from mess_ledger.db.models.bazar_record import BazarRecord
from mess_ledger.db.models.deposit_record import DepositRecord
from mess_ledger.domain.money import format_money

AMOUNT_INPUT_PATTERN = r"^-?[0-9]{1,10}(\.[0-9]{1,2})?$"
MONEY_PATTERN = r"^-?[0-9]+\.[0-9]{2}$"


def _strip_required(value: str) -> str:
    trimmed = value.strip()
    if not trimmed:
        raise ValueError("Value cannot be blank.")
    return trimmed


class CreateBazarRequest(BaseModel):
    """Payload for recording a grocery purchase."""

    purchase_date: str = Field(min_length=1, max_length=32)
    cost: str = Field(pattern=AMOUNT_INPUT_PATTERN)
    person_name: str = Field(min_length=1, max_length=120)
    member_id: str | None = Field(default=None, max_length=36)
    items: str | None = Field(default=None, max_length=500)
    note: str | None = Field(default=None, max_length=280)

    @field_validator("person_name")
    @classmethod
    def validate_person_name(cls, value: str) -> str:
        return _strip_required(value)


class CreateDepositRequest(BaseModel):
    """Payload for recording a member deposit."""

    member_id: str = Field(min_length=1, max_length=36)
    deposit_date: str = Field(min_length=1, max_length=32)
    amount: str = Field(pattern=AMOUNT_INPUT_PATTERN)
    note: str | None = Field(default=None, max_length=280)


class CreateAdditionalCostRequest(BaseModel):
    """Payload for recording a shared cost split per head."""

    cost_date: str = Field(min_length=1, max_length=32)
    description: str = Field(min_length=1, max_length=280)
    amount: str = Field(pattern=AMOUNT_INPUT_PATTERN)

    @field_validator("description")
    @classmethod
    def validate_description(cls, value: str) -> str:
        return _strip_required(value)


class BazarResponse(BaseModel):
    id: str
    member_id: str | None
    purchase_date: date
    cost: str = Field(pattern=MONEY_PATTERN)
    person_name: str
    items: str | None
    note: str | None

    @classmethod
    def from_model(cls, bazar: BazarRecord) -> BazarResponse:
        return cls(
            id=bazar.id,
            member_id=bazar.member_id,
            purchase_date=bazar.purchase_date,
            cost=format_money(Decimal(bazar.cost)),
            person_name=bazar.person_name,
            items=bazar.items,
            note=bazar.note,
        )


class DepositResponse(BaseModel):
    id: str
    member_id: str
    deposit_date: date
    amount: str = Field(pattern=MONEY_PATTERN)
    note: str | None

    @classmethod
    def from_model(cls, deposit: DepositRecord) -> DepositResponse:
        return cls(
            id=deposit.id,
            member_id=deposit.member_id,
            deposit_date=deposit.deposit_date,
            amount=format_money(Decimal(deposit.amount)),
            note=deposit.note,
        )


class AdditionalCostResponse(BaseModel):
    id: str
    cost_date: date
    description: str
    amount: str = Field(pattern=MONEY_PATTERN)

    @classmethod
    def from_model(cls, cost: AdditionalCostRecord) -> AdditionalCostResponse:
        return cls(
            id=cost.id,
            cost_date=cost.cost_date,
            description=cost.description,
            amount=format_money(Decimal(cost.amount)),
        )
