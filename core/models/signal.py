"""Signal and no-signal result values."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from core.helpers.reasons import NoSignalReason
from core.models.bar import Direction


class SignalDirection(Enum):
    LONG = "long"
    SHORT = "short"

    @classmethod
    def from_bar_direction(cls, direction: Direction) -> "SignalDirection":
        if direction == Direction.UPWARD:
            return cls.LONG
        if direction == Direction.DOWNWARD:
            return cls.SHORT
        raise ValueError("sideways bars carry no trade direction")

    @property
    def is_long(self) -> bool:
        return self is SignalDirection.LONG


@dataclass(frozen=True)
class Signal:
    """
    Trade proposal for one evaluation cycle.

    Prices are already rounded to the instrument precision. `raw_stop_price`
    is the swing extremum, `buffered_stop_price` is where the stop goes.
    """
    direction: SignalDirection
    entry_price: float
    raw_stop_price: float
    buffered_stop_price: float
    take_profit_price: float

    @property
    def stop_distance(self) -> float:
        return abs(self.entry_price - self.buffered_stop_price)

    @property
    def rr_ratio(self) -> float:
        if self.stop_distance == 0:
            return 0.0
        return abs(self.take_profit_price - self.entry_price) / self.stop_distance

    def validate(self) -> tuple[bool, str]:
        """
        Check stop/TP geometry against the direction.
        Returns (is_valid, error_message).
        """
        errors = []

        if self.direction == SignalDirection.LONG:
            if self.buffered_stop_price >= self.entry_price:
                errors.append(f'LONG stop ({self.buffered_stop_price}) >= entry ({self.entry_price})')
            if self.take_profit_price <= self.entry_price:
                errors.append(f'LONG tp ({self.take_profit_price}) <= entry ({self.entry_price})')
        else:
            if self.buffered_stop_price <= self.entry_price:
                errors.append(f'SHORT stop ({self.buffered_stop_price}) <= entry ({self.entry_price})')
            if self.take_profit_price >= self.entry_price:
                errors.append(f'SHORT tp ({self.take_profit_price}) >= entry ({self.entry_price})')

        if errors:
            return False, '; '.join(errors)
        return True, 'OK'

    def __repr__(self) -> str:
        return (
            f"Signal({self.direction.value}, entry={self.entry_price:.5f}, "
            f"stop={self.buffered_stop_price:.5f}, tp={self.take_profit_price:.5f})"
        )


@dataclass(frozen=True)
class NoSignal:
    """Evaluation ended without a tradeable signal this cycle."""
    reason: NoSignalReason
    detail: str = ""
    context: dict = field(default_factory=dict)
    direction: Optional[SignalDirection] = None


@dataclass(frozen=True)
class TradeProposal:
    """Accepted signal plus the sizing the order capability needs."""
    signal: Signal
    stop_distance_pips: float
    lot_size: float
    label: str = ""
