"""Tick bar primitives."""

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    UPWARD = "upward"
    DOWNWARD = "downward"
    SIDEWAYS = "sideways"


@dataclass(frozen=True)
class Bar:
    """OHLCV bar built from a fixed number of bid ticks."""
    open: float
    high: float
    low: float
    close: float
    volume: int
    start_time: int
    end_time: int
    formed_count: int

    @property
    def direction(self) -> Direction:
        if self.open == self.close:
            return Direction.SIDEWAYS
        if self.open < self.close:
            return Direction.UPWARD
        return Direction.DOWNWARD

    @property
    def duration_ms(self) -> int:
        return self.end_time - self.start_time
