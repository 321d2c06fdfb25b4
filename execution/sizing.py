"""Reference sizing policies and the consecutive-loss tracker they key off."""

from dataclasses import dataclass

from core.helpers import precise_value
from core.logging_utils import get_logger

logger = get_logger(__name__)


@dataclass
class MartingaleSizer:
    """
    Scale the base lot by ratio**losses, then spread it over the stop distance
    so a wider stop risks roughly the same amount.
    """
    base_lot_size: float = 0.01
    martingale_ratio: float = 2.0
    min_lot_size: float = 0.001

    @classmethod
    def from_settings(cls, settings_obj) -> "MartingaleSizer":
        return cls(
            base_lot_size=settings_obj.base_lot_size,
            martingale_ratio=settings_obj.martingale_ratio,
            min_lot_size=settings_obj.min_lot_size,
        )

    def lot_size(self, stop_distance_pips: float, consecutive_losses: int) -> float:
        if stop_distance_pips <= 0:
            raise ValueError("stop distance must be > 0 pips")
        lot = self.base_lot_size * self.martingale_ratio ** consecutive_losses
        lot = precise_value(lot / stop_distance_pips, 3)
        if lot < self.min_lot_size:
            lot = self.min_lot_size
        return lot


@dataclass
class FixedLotSizer:
    """Same lot every trade regardless of stop or streak."""
    lot: float = 0.01

    def lot_size(self, stop_distance_pips: float, consecutive_losses: int) -> float:
        return self.lot


@dataclass
class LossStreak:
    """
    Consecutive-loss counter fed by close notifications.

    A win (or breakeven) resets the streak. A loss that arrives once the
    streak has already reached `limit` counts a bailout and starts over, which
    caps how far a martingale sizer can escalate.
    """
    limit: int = 10
    consecutive_losses: int = 0
    wins: int = 0
    losses: int = 0
    bailouts: int = 0

    def record_close(self, pnl_pips: float):
        if pnl_pips >= 0:
            self.wins += 1
            self.consecutive_losses = 0
            return

        self.losses += 1
        if self.consecutive_losses >= self.limit:
            logger.warning(
                "[SIZING] %d consecutive losses - bailing out and resetting streak",
                self.limit,
            )
            self.bailouts += 1
            self.consecutive_losses = 0
        else:
            self.consecutive_losses += 1

    @property
    def trades(self) -> int:
        return self.wins + self.losses

    @property
    def win_rate(self) -> float:
        if self.trades == 0:
            return 0.0
        return self.wins / self.trades

    def summary(self) -> dict:
        return {
            "wins": self.wins,
            "losses": self.losses,
            "bailouts": self.bailouts,
            "consecutive_losses": self.consecutive_losses,
            "win_rate": round(self.win_rate * 100, 1),
        }
