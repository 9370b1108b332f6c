from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any

import pytest

from mess_ledger.db.models.meal_record import MealRecord, MealType
from mess_ledger.db.models.member import Member
from mess_ledger.db.models.mess import Mess, MessStatus
from mess_ledger.domain.billing_month import APP_TIMEZONE
from mess_ledger.domain.errors import (
    InvalidDateError,
    InvalidRequestError,
    MemberNotFoundError,
    MessNotFoundError,
    MessSuspendedError,
    NonPositiveAmountError,
)
from mess_ledger.domain.subscription import SubscriptionStatusValue, SubscriptionWindow
from mess_ledger.services.entry_service import (
    AdjustMealInput,
    CreateAdditionalCostInput,
    CreateBazarInput,
    CreateDepositInput,
    EntryService,
)

NOW = datetime(2025, 2, 10, 12, 0, tzinfo=APP_TIMEZONE)


class FakeSession:
    def __init__(self) -> None:
        self.committed = False
        self.rolled_back = False

    def commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        self.rolled_back = True


class FakeMessRepository:
    def __init__(self, mess: Mess | None) -> None:
        self._mess = mess

    def get(self, mess_id: str) -> Mess | None:
        if self._mess is not None and self._mess.id == mess_id:
            return self._mess
        return None


class FakeMemberRepository:
    def __init__(self, members: list[Member]) -> None:
        self._members = {member.id: member for member in members}

    def get(self, mess_id: str, member_id: str) -> Member | None:
        member = self._members.get(member_id)
        if member is None or member.mess_id != mess_id:
            return None
        return member


class FakeSubscriptionRepository:
    def __init__(self, subscription: SubscriptionWindow | None) -> None:
        self._subscription = subscription

    def get_current(self, mess_id: str) -> SubscriptionWindow | None:
        return self._subscription


class FakeArchiveRepository:
    def __init__(self, latest: str | None) -> None:
        self._latest = latest

    def latest_month(self, mess_id: str) -> str | None:
        return self._latest


@dataclass
class FakeEntryRepository:
    entries: list[Any] = field(default_factory=list)
    fail_with: Exception | None = None

    def add(self, entry: Any) -> Any:
        if self.fail_with is not None:
            raise self.fail_with
        self.entries.append(entry)
        return entry


@dataclass
class FakeMealRepository:
    calls: list[dict[str, Any]] = field(default_factory=list)

    def adjust_counter(self, **kwargs: Any) -> MealRecord:
        self.calls.append(kwargs)
        counters = {kind.value: 0 for kind in MealType}
        counters[kwargs["meal_type"].value] = max(kwargs["delta"], 0)
        return MealRecord(
            mess_id=kwargs["mess_id"],
            member_id=kwargs["member_id"],
            meal_date=kwargs["meal_date"],
            **counters,
        )


@dataclass
class Harness:
    service: EntryService
    session: FakeSession
    entries: FakeEntryRepository
    meals: FakeMealRepository


def _build(
    *,
    status: MessStatus = MessStatus.ACTIVE,
    subscription: SubscriptionWindow | None = None,
    carol_active: bool = True,
    archived_through: str | None = None,
) -> Harness:
    mess = Mess(
        id="mess-1",
        code="GREEN-01",
        current_month="2025-02",
        status=status,
        created_at=datetime(2024, 6, 1, tzinfo=APP_TIMEZONE),
    )
    members = [
        Member(id="alice", mess_id="mess-1", name="Alice", is_active=True),
        Member(id="carol", mess_id="mess-1", name="Carol", is_active=carol_active),
    ]
    session = FakeSession()
    entries = FakeEntryRepository()
    meals = FakeMealRepository()
    service = EntryService(
        mess_repository=FakeMessRepository(mess),
        member_repository=FakeMemberRepository(members),
        subscription_repository=FakeSubscriptionRepository(
            subscription
            or SubscriptionWindow(
                start_date=date(2024, 6, 1), end_date=date(2025, 12, 31)
            )
        ),
        entry_repository=entries,
        meal_repository=meals,
        archive_repository=FakeArchiveRepository(archived_through),
        session=session,
        now_provider=lambda: NOW,
    )
    return Harness(service=service, session=session, entries=entries, meals=meals)


def test_add_deposit_persists_rounded_amount_and_commits() -> None:
    harness = _build()

    deposit = harness.service.add_deposit(
        CreateDepositInput(
            mess_id="mess-1",
            member_id="alice",
            deposit_date="2025-02-03",
            amount=Decimal("100.005"),
            note="  cash ",
        )
    )

    assert deposit.amount == Decimal("100.01")
    assert deposit.deposit_date == date(2025, 2, 3)
    assert deposit.note == "cash"
    assert harness.entries.entries == [deposit]
    assert harness.session.committed is True


@pytest.mark.parametrize("amount", ["0", "-5.00", "0.004"])
def test_add_deposit_rejects_non_positive_amount(amount: str) -> None:
    harness = _build()

    with pytest.raises(NonPositiveAmountError) as error_info:
        harness.service.add_deposit(
            CreateDepositInput(
                mess_id="mess-1",
                member_id="alice",
                deposit_date=date(2025, 2, 3),
                amount=Decimal(amount),
            )
        )

    assert error_info.value.status_code == 422
    assert harness.entries.entries == []
    assert harness.session.committed is False


def test_deposit_for_inactive_member_is_allowed() -> None:
    harness = _build(carol_active=False)

    deposit = harness.service.add_deposit(
        CreateDepositInput(
            mess_id="mess-1",
            member_id="carol",
            deposit_date=date(2025, 2, 3),
            amount=Decimal("50"),
        )
    )

    assert deposit.member_id == "carol"


def test_add_bazar_after_subscription_end_raises_invalid_date() -> None:
    harness = _build(
        subscription=SubscriptionWindow(
            start_date=date(2024, 6, 1),
            end_date=date(2025, 1, 31),
            status=SubscriptionStatusValue.EXPIRED,
        )
    )

    with pytest.raises(InvalidDateError) as error_info:
        harness.service.add_bazar(
            CreateBazarInput(
                mess_id="mess-1",
                purchase_date="2025-02-01",
                cost=Decimal("300.00"),
                person_name="Alice",
            )
        )

    assert error_info.value.details == {"reason": "DATE_AFTER_SUBSCRIPTION_END"}
    assert harness.entries.entries == []


def test_add_bazar_before_mess_creation_raises_invalid_date() -> None:
    harness = _build()

    with pytest.raises(InvalidDateError) as error_info:
        harness.service.add_bazar(
            CreateBazarInput(
                mess_id="mess-1",
                purchase_date=date(2024, 5, 31),
                cost=Decimal("300.00"),
                person_name="Alice",
            )
        )

    assert error_info.value.details == {"reason": "DATE_BEFORE_MESS_START"}


def test_add_deposit_into_archived_month_is_rejected() -> None:
    harness = _build(archived_through="2025-01")

    with pytest.raises(InvalidDateError) as error_info:
        harness.service.add_deposit(
            CreateDepositInput(
                mess_id="mess-1",
                member_id="alice",
                deposit_date="2025-01-06",
                amount=Decimal("500.00"),
            )
        )

    assert error_info.value.details == {"reason": "MONTH_ARCHIVED"}
    assert harness.entries.entries == []
    assert harness.session.committed is False


def test_adjust_meal_into_archived_month_is_rejected() -> None:
    harness = _build(archived_through="2025-01")

    with pytest.raises(InvalidDateError):
        harness.service.adjust_meal(
            AdjustMealInput(
                mess_id="mess-1",
                member_id="alice",
                meal_date=date(2025, 1, 31),
                meal_type=MealType.LUNCH,
                delta=1,
            )
        )

    assert harness.meals.calls == []


def test_first_day_after_archived_month_is_writable() -> None:
    harness = _build(archived_through="2025-01")

    record = harness.service.add_deposit(
        CreateDepositInput(
            mess_id="mess-1",
            member_id="alice",
            deposit_date=date(2025, 2, 1),
            amount=Decimal("500.00"),
        )
    )

    assert record.deposit_date == date(2025, 2, 1)
    assert harness.session.committed is True


def test_add_bazar_with_unknown_member_raises_not_found() -> None:
    harness = _build()

    with pytest.raises(MemberNotFoundError):
        harness.service.add_bazar(
            CreateBazarInput(
                mess_id="mess-1",
                purchase_date=date(2025, 2, 1),
                cost=Decimal("300.00"),
                person_name="Dave",
                member_id="dave",
            )
        )


def test_add_additional_cost_rejects_blank_description() -> None:
    harness = _build()

    with pytest.raises(InvalidRequestError):
        harness.service.add_additional_cost(
            CreateAdditionalCostInput(
                mess_id="mess-1",
                cost_date=date(2025, 2, 1),
                description="   ",
                amount=Decimal("90.00"),
            )
        )


def test_suspended_mess_cannot_write() -> None:
    harness = _build(status=MessStatus.SUSPENDED)

    with pytest.raises(MessSuspendedError) as error_info:
        harness.service.add_additional_cost(
            CreateAdditionalCostInput(
                mess_id="mess-1",
                cost_date=date(2025, 2, 1),
                description="Internet",
                amount=Decimal("90.00"),
            )
        )

    assert error_info.value.status_code == 403


def test_unknown_mess_raises_not_found() -> None:
    harness = _build()

    with pytest.raises(MessNotFoundError):
        harness.service.add_deposit(
            CreateDepositInput(
                mess_id="other",
                member_id="alice",
                deposit_date=date(2025, 2, 3),
                amount=Decimal("10"),
            )
        )


def test_repository_failure_rolls_back_and_propagates() -> None:
    harness = _build()
    harness.entries.fail_with = RuntimeError("disk full")

    with pytest.raises(RuntimeError, match="disk full"):
        harness.service.add_deposit(
            CreateDepositInput(
                mess_id="mess-1",
                member_id="alice",
                deposit_date=date(2025, 2, 3),
                amount=Decimal("10"),
            )
        )

    assert harness.session.rolled_back is True
    assert harness.session.committed is False


def test_adjust_meal_delegates_delta_to_atomic_counter() -> None:
    harness = _build()

    meal = harness.service.adjust_meal(
        AdjustMealInput(
            mess_id="mess-1",
            member_id="alice",
            meal_date="2025-02-09",
            meal_type=MealType.LUNCH,
            delta=1,
        )
    )

    assert meal.lunch == 1
    assert harness.meals.calls == [
        {
            "mess_id": "mess-1",
            "member_id": "alice",
            "meal_date": date(2025, 2, 9),
            "meal_type": MealType.LUNCH,
            "delta": 1,
        }
    ]
    assert harness.session.committed is True


def test_adjust_meal_rejects_zero_delta() -> None:
    harness = _build()

    with pytest.raises(InvalidRequestError):
        harness.service.adjust_meal(
            AdjustMealInput(
                mess_id="mess-1",
                member_id="alice",
                meal_date=date(2025, 2, 9),
                meal_type=MealType.DINNER,
                delta=0,
            )
        )

    assert harness.meals.calls == []


def test_adjust_meal_for_inactive_member_is_rejected() -> None:
    harness = _build(carol_active=False)

    with pytest.raises(MemberNotFoundError):
        harness.service.adjust_meal(
            AdjustMealInput(
                mess_id="mess-1",
                member_id="carol",
                meal_date=date(2025, 2, 9),
                meal_type=MealType.BREAKFAST,
                delta=1,
            )
        )


def test_adjust_meal_for_future_date_is_rejected() -> None:
    harness = _build()

    with pytest.raises(InvalidDateError) as error_info:
        harness.service.adjust_meal(
            AdjustMealInput(
                mess_id="mess-1",
                member_id="alice",
                meal_date=date(2025, 2, 11),
                meal_type=MealType.BREAKFAST,
                delta=1,
            )
        )

    assert error_info.value.details == {"reason": "DATE_IN_FUTURE"}
