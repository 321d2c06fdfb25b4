"""Shared helper utilities for consistency across the engine."""

from .precision import precise_value
from .reasons import NoSignalReason

__all__ = [
    "precise_value",
    "NoSignalReason",
]
