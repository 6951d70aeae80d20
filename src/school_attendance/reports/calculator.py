from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

_TWO_PLACES = Decimal("0.01")


def attendance_percentage(present: int, total: int) -> float:
    """present / total * 100, rounded half-up to 2 decimals; exactly 0 when nothing was marked."""
    if not total:
        return 0.0
    value = Decimal(int(present)) * 100 / Decimal(int(total))
    return float(value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))
