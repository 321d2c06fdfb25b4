"""EMA containment filter over synthesized tick bars."""

from typing import Sequence

import numpy as np

from core.models import Bar, Direction


def ema_series(closes: Sequence[float], period: int) -> np.ndarray:
    """
    EMA seeded with the first close.

    Unlike a windowed EMA this produces a value from the first element on, so
    short bar series still yield an average.
    """
    if period <= 0:
        raise ValueError("EMA period must be > 0")
    values = np.asarray(closes, dtype=float)
    if values.size == 0:
        raise ValueError("EMA needs at least one close")

    multiplier = 2.0 / (period + 1)
    ema = np.empty_like(values)
    ema[0] = values[0]
    for i in range(1, values.size):
        ema[i] = values[i] * multiplier + ema[i - 1] * (1 - multiplier)
    return ema


def current_ema(bars: Sequence[Bar], period: int) -> float:
    """Final EMA value over the bars' closes."""
    return float(ema_series([b.close for b in bars], period)[-1])


def is_contained(bar: Bar, ema_value: float, direction: Direction) -> bool:
    """Bar crossed the average in `direction` within its own open/close."""
    if direction == Direction.UPWARD:
        return bar.open < ema_value and bar.close > ema_value
    if direction == Direction.DOWNWARD:
        return bar.open > ema_value and bar.close < ema_value
    return False


def passes_ema_filter(bars: Sequence[Bar], period: int, direction: Direction) -> bool:
    """Check the newest bar against the EMA of the whole series."""
    if not bars:
        return False
    return is_contained(bars[-1], current_ema(bars, period), direction)
