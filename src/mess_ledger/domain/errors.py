"""Domain exceptions used across API and services."""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any

from mess_ledger.domain.validation import ValidationResult


def compose_error_message(*, cause: str, action: str) -> str:
    """Build a user-facing error message with cause and corrective action."""

    return f"Cause: {cause} Action: {action}"


@dataclass(slots=True)
class DomainError(Exception):
    """Base exception for predictable domain failures."""

    code: str
    message: str
    status_code: int
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


class InvalidRequestError(DomainError):
    """Raised when user sends semantically invalid input."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="INVALID_REQUEST",
            message=message
            or compose_error_message(
                cause="Request data violates business rules.",
                action="Adjust the input fields and try again.",
            ),
            status_code=HTTPStatus.BAD_REQUEST,
            details=details or {},
        )


class InvalidDateError(DomainError):
    """Raised when an entry date falls outside the editable window."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="INVALID_DATE",
            message=message
            or compose_error_message(
                cause="The entry date is outside the editable window.",
                action="Pick a date inside the current subscription period.",
            ),
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            details=details or {},
        )

    @classmethod
    def from_result(cls, result: ValidationResult) -> InvalidDateError:
        return cls(
            message=compose_error_message(
                cause=result.error or "The entry date was rejected.",
                action="Pick a date inside the current subscription period.",
            ),
            details={"reason": result.code.value if result.code else None},
        )


class NonPositiveAmountError(DomainError):
    """Raised when a deposit, bazar or cost amount is zero or negative."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="NON_POSITIVE_AMOUNT",
            message=message
            or compose_error_message(
                cause="Amount must be greater than zero.",
                action="Provide a positive decimal amount with two digits.",
            ),
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            details=details or {},
        )


class MessNotFoundError(DomainError):
    """Raised when a mess id cannot be resolved."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="MESS_NOT_FOUND",
            message=message
            or compose_error_message(
                cause="Mess was not found.",
                action="Check the mess identifier and retry.",
            ),
            status_code=HTTPStatus.NOT_FOUND,
            details=details or {},
        )


class MemberNotFoundError(DomainError):
    """Raised when a member does not belong to the mess."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="MEMBER_NOT_FOUND",
            message=message
            or compose_error_message(
                cause="Member was not found in this mess.",
                action="Use the id of an active member of the mess.",
            ),
            status_code=HTTPStatus.NOT_FOUND,
            details=details or {},
        )


class ArchiveNotFoundError(DomainError):
    """Raised when no archive exists for the requested month."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="ARCHIVE_NOT_FOUND",
            message=message
            or compose_error_message(
                cause="No archive exists for this month.",
                action="Request a month that has already been rolled over.",
            ),
            status_code=HTTPStatus.NOT_FOUND,
            details=details or {},
        )


class MessSuspendedError(DomainError):
    """Raised when a suspended mess tries to write new entries."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="MESS_SUSPENDED",
            message=message
            or compose_error_message(
                cause="This mess is suspended by an administrator.",
                action="Contact support to restore access.",
            ),
            status_code=HTTPStatus.FORBIDDEN,
            details=details or {},
        )


class DomainInvariantError(DomainError):
    """Raised when fixed domain assumptions are violated."""

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="DOMAIN_INVARIANT_VIOLATION",
            message=message
            or compose_error_message(
                cause="A required domain invariant is not satisfied.",
                action="Verify base data setup and retry the operation.",
            ),
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            details=details or {},
        )
