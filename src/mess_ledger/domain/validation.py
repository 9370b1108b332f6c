"""Write-boundary checks returned as values instead of exceptions."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from decimal import Decimal


class ValidationCode(enum.StrEnum):
    """Stable machine-checkable reasons for a rejected write."""

    INVALID_DATE_FORMAT = "INVALID_DATE_FORMAT"
    DATE_IN_FUTURE = "DATE_IN_FUTURE"
    DATE_AFTER_SUBSCRIPTION_END = "DATE_AFTER_SUBSCRIPTION_END"
    DATE_BEFORE_MESS_START = "DATE_BEFORE_MESS_START"
    MONTH_ARCHIVED = "MONTH_ARCHIVED"
    NON_POSITIVE_AMOUNT = "NON_POSITIVE_AMOUNT"


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of a boundary check."""

    is_valid: bool
    code: ValidationCode | None = None
    error: str | None = None

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(is_valid=True)

    @classmethod
    def reject(cls, code: ValidationCode, error: str) -> ValidationResult:
        return cls(is_valid=False, code=code, error=error)


def validate_amount(amount: Decimal) -> ValidationResult:
    """Accept only strictly positive finite amounts."""
    if not amount.is_finite() or amount <= Decimal("0"):
        return ValidationResult.reject(
            ValidationCode.NON_POSITIVE_AMOUNT, "Amount must be greater than zero."
        )
    return ValidationResult.ok()
