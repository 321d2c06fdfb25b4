"""Price rounding helpers."""

from decimal import ROUND_HALF_UP, Decimal


def precise_value(value: float, precision: int = 5) -> float:
    """Round a price to `precision` decimals, half-up."""
    if precision < 0:
        raise ValueError("precision must be >= 0")
    quantum = Decimal(1).scaleb(-precision)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))
