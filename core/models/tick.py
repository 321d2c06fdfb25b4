"""Raw market tick."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Tick:
    """One market update for a single instrument."""
    timestamp: int  # epoch millis, non-decreasing per feed
    bid: float
    ask: float
    bid_volume: int = 0

    @property
    def spread(self) -> float:
        return self.ask - self.bid

    @property
    def mid(self) -> float:
        return (self.bid + self.ask) / 2
