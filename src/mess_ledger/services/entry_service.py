"""Business service for ledger entry registration."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Protocol, TypeVar

from mess_ledger.db.models.additional_cost_record import AdditionalCostRecord
from mess_ledger.db.models.bazar_record import BazarRecord
from mess_ledger.db.models.deposit_record import DepositRecord
from mess_ledger.db.models.meal_record import MealRecord, MealType
from mess_ledger.db.models.member import Member
from mess_ledger.db.models.mess import Mess, MessStatus
from mess_ledger.domain.billing_month import BillingMonth, local_today, resolve_now
from mess_ledger.domain.date_window import validate_date
from mess_ledger.domain.errors import (
    InvalidDateError,
    InvalidRequestError,
    MemberNotFoundError,
    MessNotFoundError,
    MessSuspendedError,
    NonPositiveAmountError,
    compose_error_message,
)
from mess_ledger.domain.money import quantize_money
from mess_ledger.domain.subscription import SubscriptionWindow
from mess_ledger.domain.validation import validate_amount

logger = logging.getLogger(__name__)

EntryT = TypeVar("EntryT")


class SessionProtocol(Protocol):
    """Subset of SQLAlchemy session APIs used by this service."""

    def commit(self) -> None: ...
    def rollback(self) -> None: ...


class MessRepositoryProtocol(Protocol):
    def get(self, mess_id: str) -> Mess | None: ...


class MemberRepositoryProtocol(Protocol):
    def get(self, mess_id: str, member_id: str) -> Member | None: ...


class SubscriptionRepositoryProtocol(Protocol):
    def get_current(self, mess_id: str) -> SubscriptionWindow | None: ...


class ArchiveRepositoryProtocol(Protocol):
    def latest_month(self, mess_id: str) -> str | None: ...


class EntryRepositoryProtocol(Protocol):
    def add(self, entry: EntryT) -> EntryT: ...


class MealRepositoryProtocol(Protocol):
    def adjust_counter(
        self,
        *,
        mess_id: str,
        member_id: str,
        meal_date: date,
        meal_type: MealType,
        delta: int,
    ) -> MealRecord: ...


@dataclass(slots=True, frozen=True)
class CreateBazarInput:
    """Input model for a grocery purchase."""

    mess_id: str
    purchase_date: date | str
    cost: Decimal
    person_name: str
    member_id: str | None = None
    items: str | None = None
    note: str | None = None


@dataclass(slots=True, frozen=True)
class CreateDepositInput:
    """Input model for a member deposit."""

    mess_id: str
    member_id: str
    deposit_date: date | str
    amount: Decimal
    note: str | None = None


@dataclass(slots=True, frozen=True)
class CreateAdditionalCostInput:
    """Input model for a shared additional cost."""

    mess_id: str
    cost_date: date | str
    description: str
    amount: Decimal


@dataclass(slots=True, frozen=True)
class AdjustMealInput:
    """Input model for a single meal counter step."""

    mess_id: str
    member_id: str
    meal_date: date | str
    meal_type: MealType
    delta: int


class EntryService:
    """Validates and persists meals, bazars, deposits and additional costs."""

    def __init__(
        self,
        *,
        mess_repository: MessRepositoryProtocol,
        member_repository: MemberRepositoryProtocol,
        subscription_repository: SubscriptionRepositoryProtocol,
        entry_repository: EntryRepositoryProtocol,
        meal_repository: MealRepositoryProtocol,
        archive_repository: ArchiveRepositoryProtocol,
        session: SessionProtocol,
        now_provider: Callable[[], datetime] | None = None,
    ) -> None:
        self._mess_repository = mess_repository
        self._member_repository = member_repository
        self._subscription_repository = subscription_repository
        self._entry_repository = entry_repository
        self._meal_repository = meal_repository
        self._archive_repository = archive_repository
        self._session = session
        self._now_provider = now_provider or (lambda: resolve_now(None))

    def add_bazar(self, payload: CreateBazarInput) -> BazarRecord:
        mess = self._require_writable_mess(payload.mess_id)
        purchase_date = self._require_editable_date(mess, payload.purchase_date)
        cost = self._require_positive_amount(payload.cost)
        if payload.member_id is not None:
            self._require_member(mess.id, payload.member_id)
        person_name = payload.person_name.strip()
        if not person_name:
            raise InvalidRequestError(
                message=compose_error_message(
                    cause="person_name cannot be blank.",
                    action="Provide the name of the person who bought the items.",
                )
            )

        record = BazarRecord(
            mess_id=mess.id,
            member_id=payload.member_id,
            purchase_date=purchase_date,
            cost=cost,
            person_name=person_name,
            items=payload.items.strip() if payload.items else None,
            note=payload.note.strip() if payload.note else None,
        )
        return self._persist(record, kind="bazar", occurred_on=purchase_date)

    def add_deposit(self, payload: CreateDepositInput) -> DepositRecord:
        mess = self._require_writable_mess(payload.mess_id)
        deposit_date = self._require_editable_date(mess, payload.deposit_date)
        amount = self._require_positive_amount(payload.amount)
        member = self._require_member(mess.id, payload.member_id)

        record = DepositRecord(
            mess_id=mess.id,
            member_id=member.id,
            deposit_date=deposit_date,
            amount=amount,
            note=payload.note.strip() if payload.note else None,
        )
        return self._persist(record, kind="deposit", occurred_on=deposit_date)

    def add_additional_cost(
        self, payload: CreateAdditionalCostInput
    ) -> AdditionalCostRecord:
        mess = self._require_writable_mess(payload.mess_id)
        cost_date = self._require_editable_date(mess, payload.cost_date)
        amount = self._require_positive_amount(payload.amount)
        description = payload.description.strip()
        if not description:
            raise InvalidRequestError(
                message=compose_error_message(
                    cause="Description cannot be blank.",
                    action="Describe what the shared cost was for.",
                )
            )

        record = AdditionalCostRecord(
            mess_id=mess.id,
            cost_date=cost_date,
            description=description,
            amount=amount,
        )
        return self._persist(record, kind="additional_cost", occurred_on=cost_date)

    def adjust_meal(self, payload: AdjustMealInput) -> MealRecord:
        if payload.delta == 0:
            raise InvalidRequestError(
                message=compose_error_message(
                    cause="delta must be different from zero.",
                    action="Send 1 to add a meal or -1 to remove one.",
                )
            )
        mess = self._require_writable_mess(payload.mess_id)
        meal_date = self._require_editable_date(mess, payload.meal_date)
        member = self._require_member(mess.id, payload.member_id)
        if not member.is_active:
            raise MemberNotFoundError(
                message=compose_error_message(
                    cause="Meals can only be recorded for active members.",
                    action="Reactivate the member or pick another member.",
                ),
                details={"member_id": member.id},
            )

        try:
            record = self._meal_repository.adjust_counter(
                mess_id=mess.id,
                member_id=member.id,
                meal_date=meal_date,
                meal_type=payload.meal_type,
                delta=payload.delta,
            )
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "meal_adjusted",
            extra={
                "mess_id": mess.id,
                "member_id": member.id,
                "meal_date": meal_date.isoformat(),
                "meal_type": payload.meal_type.value,
                "delta": payload.delta,
            },
        )
        return record

    def _persist(self, record: EntryT, *, kind: str, occurred_on: date) -> EntryT:
        try:
            created = self._entry_repository.add(record)
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise
        logger.info(
            "entry_created",
            extra={
                "entry_id": str(getattr(created, "id", "")),
                "kind": kind,
                "occurred_on": occurred_on.isoformat(),
            },
        )
        return created

    def _require_writable_mess(self, mess_id: str) -> Mess:
        mess = self._mess_repository.get(mess_id)
        if mess is None:
            raise MessNotFoundError(details={"mess_id": mess_id})
        if mess.status == MessStatus.SUSPENDED:
            raise MessSuspendedError(details={"mess_id": mess_id})
        return mess

    def _require_member(self, mess_id: str, member_id: str) -> Member:
        member = self._member_repository.get(mess_id, member_id)
        if member is None:
            raise MemberNotFoundError(details={"member_id": member_id})
        return member

    def _require_editable_date(self, mess: Mess, candidate: date | str) -> date:
        subscription = self._subscription_repository.get_current(mess.id)
        floor = local_today(mess.created_at) if mess.created_at else None
        latest = self._archive_repository.latest_month(mess.id)
        result = validate_date(
            candidate,
            subscription,
            self._now_provider(),
            floor=floor,
            archived_through=BillingMonth.from_key(latest) if latest else None,
        )
        if not result.is_valid:
            logger.warning(
                "entry_date_rejected",
                extra={
                    "mess_id": mess.id,
                    "candidate": str(candidate),
                    "reason": result.code.value if result.code else None,
                },
            )
            raise InvalidDateError.from_result(result)
        if isinstance(candidate, date):
            return candidate
        return date.fromisoformat(candidate.strip())

    @staticmethod
    def _require_positive_amount(amount: Decimal) -> Decimal:
        result = validate_amount(amount)
        if result.is_valid:
            amount = quantize_money(amount)
            result = validate_amount(amount)
        if not result.is_valid:
            raise NonPositiveAmountError(details={"amount": str(amount)})
        return amount
