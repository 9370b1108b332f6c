"""Equal per-head allocation of miscellaneous shared costs."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from mess_ledger.domain.money import LEDGER_CONTEXT, quantize_ledger, sum_money


def per_head_share(cost: Decimal, member_count: int) -> Decimal:
    """Return one member's share of ``cost``.

    A member count of zero leaves the cost undivided.
    """
    divisor = member_count if member_count > 0 else 1
    return quantize_ledger(LEDGER_CONTEXT.divide(cost, Decimal(divisor)))


def aggregate_per_head(costs: Iterable[Decimal], member_count: int) -> Decimal:
    """Sum per-head shares of every cost; input order never changes the result."""
    return sum_money(per_head_share(cost, member_count) for cost in costs)
