from __future__ import annotations

from datetime import timedelta
from typing import Any

from fastapi.testclient import TestClient

from mess_ledger.db.models.mess import MessStatus
from mess_ledger.domain.billing_month import local_today, resolve_now


def _today() -> str:
    return local_today(resolve_now(None)).isoformat()


def test_create_deposit_returns_201_with_money_string(
    client: TestClient, seeded_mess: Any
) -> None:
    response = client.post(
        f"/v1/messes/{seeded_mess.mess_id}/deposits",
        json={
            "member_id": seeded_mess.alice_id,
            "deposit_date": _today(),
            "amount": "500",
        },
    )

    assert response.status_code == 201
    body = response.json()
    assert body["amount"] == "500.00"
    assert body["member_id"] == seeded_mess.alice_id


def test_create_bazar_returns_201(client: TestClient, seeded_mess: Any) -> None:
    response = client.post(
        f"/v1/messes/{seeded_mess.mess_id}/bazars",
        json={
            "purchase_date": _today(),
            "cost": "1234.5",
            "person_name": "Bob",
            "member_id": seeded_mess.bob_id,
            "items": "rice, lentils",
        },
    )

    assert response.status_code == 201
    assert response.json()["cost"] == "1234.50"
    assert response.json()["items"] == "rice, lentils"


def test_create_additional_cost_returns_201(
    client: TestClient, seeded_mess: Any
) -> None:
    response = client.post(
        f"/v1/messes/{seeded_mess.mess_id}/additional-costs",
        json={"cost_date": _today(), "description": "Internet", "amount": "90.00"},
    )

    assert response.status_code == 201
    assert response.json()["description"] == "Internet"


def test_zero_amount_returns_non_positive_amount(
    client: TestClient, seeded_mess: Any
) -> None:
    response = client.post(
        f"/v1/messes/{seeded_mess.mess_id}/deposits",
        json={
            "member_id": seeded_mess.alice_id,
            "deposit_date": _today(),
            "amount": "0.00",
        },
    )

    assert response.status_code == 422
    assert response.json()["code"] == "NON_POSITIVE_AMOUNT"


def test_negative_amount_returns_non_positive_amount(
    client: TestClient, seeded_mess: Any
) -> None:
    response = client.post(
        f"/v1/messes/{seeded_mess.mess_id}/additional-costs",
        json={"cost_date": _today(), "description": "Gas", "amount": "-10"},
    )

    assert response.status_code == 422
    assert response.json()["code"] == "NON_POSITIVE_AMOUNT"


def test_malformed_amount_returns_400(client: TestClient, seeded_mess: Any) -> None:
    response = client.post(
        f"/v1/messes/{seeded_mess.mess_id}/deposits",
        json={
            "member_id": seeded_mess.alice_id,
            "deposit_date": _today(),
            "amount": "ten",
        },
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_REQUEST"


def test_amount_wider_than_the_money_column_returns_400(
    client: TestClient, seeded_mess: Any
) -> None:
    base = f"/v1/messes/{seeded_mess.mess_id}/deposits"
    payload = {"member_id": seeded_mess.alice_id, "deposit_date": _today()}

    too_wide = client.post(base, json={**payload, "amount": "12345678901.00"})
    widest = client.post(base, json={**payload, "amount": "9999999999.99"})

    assert too_wide.status_code == 400
    assert too_wide.json()["code"] == "INVALID_REQUEST"
    assert widest.status_code == 201
    assert widest.json()["amount"] == "9999999999.99"


def test_future_date_returns_invalid_date(
    client: TestClient, seeded_mess: Any
) -> None:
    tomorrow = (local_today(resolve_now(None)) + timedelta(days=1)).isoformat()

    response = client.post(
        f"/v1/messes/{seeded_mess.mess_id}/bazars",
        json={"purchase_date": tomorrow, "cost": "10.00", "person_name": "Alice"},
    )

    assert response.status_code == 422
    assert response.json()["code"] == "INVALID_DATE"
    assert response.json()["details"] == {"reason": "DATE_IN_FUTURE"}


def test_malformed_date_returns_invalid_date_format(
    client: TestClient, seeded_mess: Any
) -> None:
    response = client.post(
        f"/v1/messes/{seeded_mess.mess_id}/deposits",
        json={
            "member_id": seeded_mess.alice_id,
            "deposit_date": "31/01/2025",
            "amount": "10.00",
        },
    )

    assert response.status_code == 422
    assert response.json()["details"] == {"reason": "INVALID_DATE_FORMAT"}


def test_expired_subscription_rejects_dates_after_end(
    client: TestClient, mess_seeder: Any
) -> None:
    end = local_today(resolve_now(None)) - timedelta(days=5)
    seeded = mess_seeder(subscription_end=end, code="EXPIRED-01")

    rejected = client.post(
        f"/v1/messes/{seeded.mess_id}/deposits",
        json={
            "member_id": seeded.alice_id,
            "deposit_date": (end + timedelta(days=1)).isoformat(),
            "amount": "10.00",
        },
    )
    accepted = client.post(
        f"/v1/messes/{seeded.mess_id}/deposits",
        json={
            "member_id": seeded.alice_id,
            "deposit_date": end.isoformat(),
            "amount": "10.00",
        },
    )

    assert rejected.status_code == 422
    assert rejected.json()["details"] == {"reason": "DATE_AFTER_SUBSCRIPTION_END"}
    assert accepted.status_code == 201


def test_suspended_mess_returns_403(client: TestClient, mess_seeder: Any) -> None:
    seeded = mess_seeder(status=MessStatus.SUSPENDED, code="SUSP-01")

    response = client.post(
        f"/v1/messes/{seeded.mess_id}/additional-costs",
        json={"cost_date": _today(), "description": "Water", "amount": "5.00"},
    )

    assert response.status_code == 403
    assert response.json()["code"] == "MESS_SUSPENDED"
