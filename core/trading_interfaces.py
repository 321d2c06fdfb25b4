"""Capabilities the engine consumes from its money-management and order collaborators."""

from typing import Any, Protocol

from core.models import SignalDirection


class ILotSizer(Protocol):
    """Position sizing policy (martingale, fixed-fractional, grid...)."""

    def lot_size(self, stop_distance_pips: float, consecutive_losses: int) -> float:
        ...


class IOrderExecutor(Protocol):
    """Submits an accepted proposal. Fill/close notifications go back to money management."""

    def submit(
        self,
        direction: SignalDirection,
        entry: float,
        stop: float,
        take_profit: float,
        lot_size: float,
        label: str = "",
    ) -> Any:
        ...

