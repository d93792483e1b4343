"""Position sizing helpers."""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal

SHARE_SCALE = Decimal("0.00000001")


def affordable_shares(cash: Decimal, price: Decimal) -> Decimal:
    """Whole-cash share count truncated to 8 decimal places, 0 for a non-positive price."""
    if price <= 0:
        return Decimal("0")
    return (cash / price).quantize(SHARE_SCALE, rounding=ROUND_DOWN)
