"""Typed data models for the tick bar engine."""

from core.models.bar import Bar, Direction
from core.models.signal import NoSignal, Signal, SignalDirection, TradeProposal
from core.models.tick import Tick

__all__ = [
    "Bar",
    "Direction",
    "NoSignal",
    "Signal",
    "SignalDirection",
    "Tick",
    "TradeProposal",
]
