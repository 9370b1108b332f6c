import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError

from mess_ledger.api.error_handlers import register_error_handlers
from mess_ledger.domain.errors import (
    InvalidDateError,
    MessSuspendedError,
    compose_error_message,
)
from mess_ledger.domain.validation import ValidationCode, ValidationResult


def _client() -> TestClient:
    app = FastAPI()
    register_error_handlers(app)

    class Payload(BaseModel):
        amount: int

    @app.get("/suspended")
    def suspended() -> None:
        raise MessSuspendedError(message="Mess is suspended")

    @app.get("/invalid-date")
    def invalid_date() -> None:
        raise InvalidDateError.from_result(
            ValidationResult.reject(ValidationCode.DATE_IN_FUTURE, "Too late.")
        )

    @app.get("/archived")
    def archived() -> None:
        raise InvalidDateError.from_result(
            ValidationResult.reject(ValidationCode.MONTH_ARCHIVED, "Month is closed.")
        )

    @app.post("/validated")
    def validated(payload: Payload) -> dict[str, int]:
        return {"amount": payload.amount}

    @app.get("/integrity")
    def integrity() -> None:
        raise IntegrityError("INSERT", {}, Exception("duplicate key"))

    @app.get("/boom")
    def boom() -> None:
        raise RuntimeError("boom")

    return TestClient(app, raise_server_exceptions=False)


def test_domain_error_handler_returns_code_and_message() -> None:
    response = _client().get("/suspended")

    assert response.status_code == 403
    assert response.json() == {
        "code": "MESS_SUSPENDED",
        "message": "Mess is suspended",
    }


def test_invalid_date_error_carries_validator_reason() -> None:
    response = _client().get("/invalid-date")

    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "INVALID_DATE"
    assert body["details"] == {"reason": "DATE_IN_FUTURE"}
    assert body["message"] == compose_error_message(
        cause="Too late.",
        action="Pick a date inside the current subscription period.",
    )


def test_request_validation_error_maps_to_invalid_request() -> None:
    response = _client().post("/validated", json={"amount": "many"})

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_REQUEST"
    assert response.json()["details"]["errors"]


def test_integrity_error_maps_to_persistence_error() -> None:
    response = _client().get("/integrity")

    assert response.status_code == 422
    assert response.json()["code"] == "PERSISTENCE_ERROR"


def test_unexpected_error_maps_to_internal_server_error() -> None:
    response = _client().get("/boom")

    assert response.status_code == 500
    assert response.json()["code"] == "INTERNAL_SERVER_ERROR"
    assert response.json()["details"] == {"error_type": "RuntimeError"}


def test_archived_month_error_is_logged_with_its_code(
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.INFO, logger="mess_ledger.api.error_handlers"):
        response = _client().get("/archived")

    assert response.status_code == 422
    assert response.json()["details"] == {"reason": "MONTH_ARCHIVED"}
    records = [record for record in caplog.records if record.msg == "domain_error"]
    assert [(record.code, record.status_code) for record in records] == [
        ("INVALID_DATE", 422)
    ]
