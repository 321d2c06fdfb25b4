"""Turn a confirmed direction and swing stop into a sized trade proposal."""

from dataclasses import dataclass
from typing import Union

from core.helpers import NoSignalReason, precise_value
from core.logging_utils import get_logger
from core.models import NoSignal, Signal, SignalDirection, TradeProposal
from core.trading_interfaces import ILotSizer
from logic.swing import swing_stop_price

logger = get_logger(__name__)


def build_signal(
    direction: SignalDirection,
    entry_price: float,
    raw_stop_price: float,
    buffered_stop_price: float,
    risk_reward_ratio: float,
    max_distance: float,
    precision: int = 5,
) -> Union[Signal, NoSignal]:
    """
    Derive the take-profit from the stop distance and apply the sanity checks.

    A stop further than `max_distance` from entry skips the cycle. A stop
    exactly at the limit is accepted.
    """
    stop_price = precise_value(buffered_stop_price, precision)
    # Compare at price precision: 1.1 - 1.095 is 0.0050000000000001 in floats
    distance = precise_value(abs(entry_price - stop_price), precision)

    if distance > precise_value(max_distance, precision):
        return NoSignal(
            reason=NoSignalReason.STOP_TOO_FAR,
            detail=f"stop {stop_price} is {distance:.5f} from entry {entry_price} (max {max_distance:.5f})",
            context={"entry": entry_price, "stop": stop_price, "max_distance": max_distance},
            direction=direction,
        )

    if direction.is_long:
        take_profit = entry_price + (entry_price - stop_price) * risk_reward_ratio
    else:
        take_profit = entry_price - (stop_price - entry_price) * risk_reward_ratio

    signal = Signal(
        direction=direction,
        entry_price=entry_price,
        raw_stop_price=precise_value(raw_stop_price, precision),
        buffered_stop_price=stop_price,
        take_profit_price=precise_value(take_profit, precision),
    )

    valid, error = signal.validate()
    if not valid:
        return NoSignal(
            reason=NoSignalReason.INVALID_GEOMETRY,
            detail=error,
            context={"entry": entry_price, "stop": stop_price},
            direction=direction,
        )
    return signal


@dataclass
class SignalTranslator:
    """Instrument-specific signal geometry."""
    pip_value: float
    stop_buffer_pips: float
    risk_reward_ratio: float
    max_stop_distance_pips: float
    precision: int = 5

    @classmethod
    def from_settings(cls, settings_obj) -> "SignalTranslator":
        return cls(
            pip_value=settings_obj.pip_value,
            stop_buffer_pips=settings_obj.stop_buffer_pips,
            risk_reward_ratio=settings_obj.risk_reward_ratio,
            max_stop_distance_pips=settings_obj.max_stop_distance_pips,
            precision=settings_obj.price_precision,
        )

    @property
    def max_distance(self) -> float:
        return self.max_stop_distance_pips * self.pip_value

    def translate(
        self,
        direction: SignalDirection,
        entry_price: float,
        swing_extremum: float,
    ) -> Union[Signal, NoSignal]:
        buffered = swing_stop_price(
            swing_extremum, direction.is_long, self.stop_buffer_pips, self.pip_value
        )
        return build_signal(
            direction=direction,
            entry_price=entry_price,
            raw_stop_price=swing_extremum,
            buffered_stop_price=buffered,
            risk_reward_ratio=self.risk_reward_ratio,
            max_distance=self.max_distance,
            precision=self.precision,
        )

    def stop_distance_pips(self, signal: Signal) -> float:
        return signal.stop_distance / self.pip_value

    def propose(
        self,
        signal: Signal,
        sizer: ILotSizer,
        consecutive_losses: int = 0,
        label: str = "",
    ) -> TradeProposal:
        """Ask the sizing policy for a lot size keyed off the stop distance."""
        distance_pips = self.stop_distance_pips(signal)
        lot_size = sizer.lot_size(distance_pips, consecutive_losses)
        logger.debug(
            "[TRANSLATE] %s stop=%.1f pips losses=%d -> lot=%.3f",
            signal.direction.value, distance_pips, consecutive_losses, lot_size,
        )
        return TradeProposal(
            signal=signal,
            stop_distance_pips=distance_pips,
            lot_size=lot_size,
            label=label,
        )
