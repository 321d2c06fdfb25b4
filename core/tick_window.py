"""Bounded FIFO tick window, one per tracked instrument."""

from collections import deque
from itertools import islice
from typing import Iterator, Optional

from core.errors import OutOfRangeError
from core.logging_utils import get_logger
from core.models.tick import Tick

logger = get_logger(__name__)


class TickWindow:
    """
    Fixed-capacity tick buffer.

    Pushing onto a full window drops the oldest tick first, so the window
    always holds the most recent `capacity` ticks in arrival order. Ticks with
    equal timestamps are all kept.
    """

    def __init__(self, capacity: int, instrument: str = ""):
        if capacity <= 0:
            raise ValueError("TickWindow capacity must be > 0")
        self.capacity = capacity
        self.instrument = instrument
        self._ticks: deque[Tick] = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._ticks)

    def __iter__(self) -> Iterator[Tick]:
        return iter(self._ticks)

    def push(self, tick: Tick) -> Optional[Tick]:
        """Append a tick. Returns the evicted tick when the window was full."""
        evicted = None
        if len(self._ticks) == self.capacity:
            evicted = self._ticks.popleft()
        self._ticks.append(tick)
        if evicted is None and len(self._ticks) == self.capacity:
            logger.info("[WINDOW] %s warmed up with %d ticks", self.instrument or "?", self.capacity)
        return evicted

    def is_full(self) -> bool:
        return len(self._ticks) == self.capacity

    def slice(self, start: int, end: int) -> list[Tick]:
        """Copy of ticks in the half-open range [start, end)."""
        size = len(self._ticks)
        if start < 0 or end > size or start > end:
            raise OutOfRangeError(start, end, size)
        return list(islice(self._ticks, start, end))

    @property
    def last_tick(self) -> Optional[Tick]:
        if self._ticks:
            return self._ticks[-1]
        return None

    def __repr__(self) -> str:
        return f"TickWindow({self.instrument or '?'}, {len(self)}/{self.capacity})"
