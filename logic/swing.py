"""
Swing-point scanner for stop placement.

Walks bars from newest to oldest through a zig-zag state machine:

    ScanningDown  -- lows keep falling (or repeat) -> extend running_min
                  -- first higher low             -> swing low confirmed
    ScanningUp    -- highs keep rising (or repeat) -> extend running_max
                  -- first lower high              -> swing high confirmed

A long position anchors its stop under the nearest swing low, a short under
the nearest swing high. The scan keeps no state between calls.
"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from core.models import Bar


@dataclass(frozen=True)
class ScanningDown:
    running_min: float = math.inf


@dataclass(frozen=True)
class ScanningUp:
    running_max: float = -math.inf


ScanState = Union[ScanningDown, ScanningUp]


def scan_swing_point(
    bars: Sequence[Bar],
    is_long: bool,
    first_swing_only: bool = True,
) -> Optional[float]:
    """
    Nearest confirmed swing low (long) or swing high (short).

    `bars` are chronological (oldest first). With `first_swing_only` the scan
    stops at the first confirmed reversal of the sought extremum; otherwise it
    runs to the oldest bar and returns the extreme of every confirmed swing.
    Returns None when no reversal is confirmed inside the slice.
    """
    state: ScanState = ScanningDown() if is_long else ScanningUp()
    lowest_low = math.inf
    highest_high = -math.inf

    for bar in reversed(bars):
        if isinstance(state, ScanningDown):
            if bar.low <= state.running_min:
                state = ScanningDown(bar.low)
                continue
            lowest_low = min(lowest_low, state.running_min)
            state = ScanningUp(bar.high)
            if is_long and first_swing_only:
                break
        else:
            if bar.high >= state.running_max:
                state = ScanningUp(bar.high)
                continue
            highest_high = max(highest_high, state.running_max)
            state = ScanningDown(bar.low)
            if not is_long and first_swing_only:
                break

    extremum = lowest_low if is_long else highest_high
    if math.isinf(extremum):
        return None
    return extremum


def swing_stop_price(extremum: float, is_long: bool, buffer_pips: float, pip_value: float) -> float:
    """Push the stop `buffer_pips` beyond the swing extremum."""
    buffer = buffer_pips * pip_value
    if is_long:
        return extremum - buffer
    return extremum + buffer
