from decimal import Decimal

from mess_ledger.domain.money import (
    format_exact,
    format_money,
    parse_money,
    quantize_ledger,
    quantize_money,
    sum_money,
)


def test_quantize_money_uses_round_half_up() -> None:
    assert quantize_money(Decimal("10.005")) == Decimal("10.01")
    assert quantize_money(Decimal("10.004")) == Decimal("10.00")


def test_parse_money_returns_quantized_decimal() -> None:
    assert parse_money("2.675") == Decimal("2.68")


def test_format_money_has_two_decimal_places() -> None:
    assert format_money(Decimal("5")) == "5.00"
    assert format_money(Decimal("-12.345")) == "-12.35"


def test_quantize_ledger_keeps_ten_decimal_places() -> None:
    assert quantize_ledger(Decimal(100) / Decimal(3)) == Decimal("33.3333333333")


def test_format_exact_drops_trailing_zeros_without_exponent() -> None:
    assert format_exact(Decimal("20.0000000000")) == "20"
    assert format_exact(Decimal("1E+3")) == "1000"
    assert format_exact(Decimal("0.000")) == "0"
    assert format_exact(Decimal("16.6666666667")) == "16.6666666667"


def test_sum_money_does_not_lose_digits() -> None:
    values = [Decimal("0.0000000001")] * 3 + [Decimal("1000000000000")]

    assert sum_money(values) == Decimal("1000000000000.0000000003")
    assert sum_money([]) == Decimal("0")
