"""
Tick bar synthesis.

Bars are built on demand from the window's bid prices and never cached, so a
bar is always consistent with the window snapshot it was computed from.
"""

from typing import Sequence

import numpy as np

from core.errors import EmptySliceError, InsufficientDataError
from core.models import Bar, Tick
from core.tick_window import TickWindow


def bar_from_slice(ticks: Sequence[Tick]) -> Bar:
    """Build one OHLCV bar from a contiguous run of ticks."""
    if len(ticks) == 0:
        raise EmptySliceError("cannot build a bar from zero ticks")

    bids = np.fromiter((t.bid for t in ticks), dtype=float, count=len(ticks))
    volume = sum(int(t.bid_volume) for t in ticks)

    return Bar(
        open=ticks[0].bid,
        high=float(bids.max()),
        low=float(bids.min()),
        close=ticks[-1].bid,
        volume=volume,
        start_time=ticks[0].timestamp,
        end_time=ticks[-1].timestamp,
        formed_count=len(ticks),
    )


def last_bar(window: TickWindow, size: int) -> Bar:
    """Bar over the newest `size` ticks."""
    if size <= 0:
        raise ValueError("bar size must be > 0")
    available = len(window)
    if available < size:
        raise InsufficientDataError(size, available)
    return bar_from_slice(window.slice(available - size, available))


def last_n_bars(window: TickWindow, size: int, count: int) -> list[Bar]:
    """
    `count` consecutive, non-overlapping bars of exactly `size` ticks ending
    at the tail of the window, oldest first.

    Bar i counted from the back covers [len - (i+1)*size, len - i*size).
    """
    if size <= 0 or count <= 0:
        raise ValueError("bar size and count must be > 0")
    available = len(window)
    required = size * count
    if available < required:
        raise InsufficientDataError(required, available)

    # One copy of the tail, then cut it into bars
    tail = window.slice(available - required, available)
    return [bar_from_slice(tail[i * size:(i + 1) * size]) for i in range(count)]


def format_bar_duration(bar: Bar) -> str:
    """Wall time a bar took to form, as minutes:seconds."""
    delta = bar.duration_ms
    mins = delta // 60000
    secs = (delta % 60000) / 1000.0
    return f"{mins}:{secs:06.3f}"
