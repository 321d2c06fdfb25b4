"""Tests for the bounded tick window."""

import pytest

from core.errors import OutOfRangeError
from core.models import Tick
from core.tick_window import TickWindow


@pytest.mark.parametrize("capacity", [1, 3, 7, 50])
def test_window_keeps_last_capacity_ticks_in_order(capacity, make_ticks):
    ticks = make_ticks([1.0 + i * 0.0001 for i in range(capacity + 13)])
    window = TickWindow(capacity)
    for tick in ticks:
        window.push(tick)

    assert len(window) == capacity
    assert window.is_full()
    assert list(window) == ticks[-capacity:]


def test_push_returns_evicted_tick(make_ticks):
    ticks = make_ticks([1.1, 1.2, 1.3])
    window = TickWindow(2)

    assert window.push(ticks[0]) is None
    assert window.push(ticks[1]) is None
    assert window.push(ticks[2]) == ticks[0]
    assert window.last_tick == ticks[2]


def test_not_full_until_capacity_reached(make_ticks):
    window = TickWindow(3)
    for tick in make_ticks([1.0, 1.0]):
        window.push(tick)
    assert not window.is_full()
    assert len(window) == 2


def test_same_timestamp_ticks_are_kept():
    window = TickWindow(5)
    window.push(Tick(timestamp=1000, bid=1.1, ask=1.1002))
    window.push(Tick(timestamp=1000, bid=1.1, ask=1.1002))
    assert len(window) == 2


def test_slice_is_half_open_copy(make_window):
    window = make_window([1.0, 1.1, 1.2, 1.3])
    part = window.slice(1, 3)

    assert [t.bid for t in part] == [1.1, 1.2]
    part.clear()
    assert len(window) == 4


@pytest.mark.parametrize("start,end", [(0, 5), (3, 2), (-1, 2)])
def test_slice_out_of_range(start, end, make_window):
    window = make_window([1.0, 1.1, 1.2, 1.3])
    with pytest.raises(OutOfRangeError):
        window.slice(start, end)


def test_empty_slice_at_end_is_allowed(make_window):
    window = make_window([1.0, 1.1])
    assert window.slice(2, 2) == []


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        TickWindow(0)
