"""Money helpers using Decimal with BDT precision rules."""

from collections.abc import Iterable
from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Context, Decimal

MONEY_PRECISION = Decimal("0.01")
LEDGER_PRECISION = Decimal("0.0000000001")
LEDGER_CONTEXT = Context(prec=60, rounding=ROUND_HALF_EVEN)
ZERO = Decimal("0")


def quantize_money(value: Decimal) -> Decimal:
    """Return value rounded to two decimal places with HALF_UP strategy."""

    return value.quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def quantize_ledger(value: Decimal) -> Decimal:
    """Return value held at the ledger fixed-point scale."""

    return value.quantize(LEDGER_PRECISION, context=LEDGER_CONTEXT)


def parse_money(value: str) -> Decimal:
    """Parse and normalize input money string into Decimal."""

    return quantize_money(Decimal(value))


def format_money(value: Decimal) -> str:
    """Render money as string with exactly two decimal places."""

    return f"{quantize_money(value):.2f}"


def format_exact(value: Decimal) -> str:
    """Render a ledger decimal without exponent notation or trailing zeros."""

    normalized = value.normalize(LEDGER_CONTEXT)
    if normalized == ZERO:
        return "0"
    return f"{normalized:f}"


def sum_money(values: Iterable[Decimal]) -> Decimal:
    """Sum decimals in the wide ledger context so no digit is dropped."""

    total = ZERO
    for value in values:
        total = LEDGER_CONTEXT.add(total, value)
    return total
