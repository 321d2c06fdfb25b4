"""Standardized no-signal reasons for consistency across logging and stats."""

from enum import Enum
from typing import Union


class NoSignalReason(str, Enum):
    INSUFFICIENT_DATA = "insufficient_data"
    EMPTY_SLICE = "empty_slice"
    OUT_OF_RANGE = "out_of_range"
    NO_CONFLUENCE = "no_confluence"
    EMA_CONTAINMENT = "ema_containment"
    NO_SWING_FOUND = "no_swing_found"
    STOP_TOO_FAR = "stop_too_far"
    INVALID_GEOMETRY = "invalid_geometry"

    @property
    def is_logic_fault(self) -> bool:
        """Slice-bound faults point at bad cadence or config, not market state."""
        return self in (NoSignalReason.EMPTY_SLICE, NoSignalReason.OUT_OF_RANGE)

    @classmethod
    def from_value(cls, value: Union[str, "NoSignalReason"]) -> "NoSignalReason":
        if isinstance(value, NoSignalReason):
            return value
        return cls(value)
