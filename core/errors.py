"""
Tick bar errors.

Raised by the window and bar helpers. The signal engine turns every one of
them into a NoSignal result so a pass never blows up the tick loop.
"""


class TickBarError(Exception):
    """Base exception for tick window / bar synthesis errors."""
    pass


class InsufficientDataError(TickBarError):
    """Window holds fewer ticks than the request needs. Retry on a later tick."""

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(f"need {required} ticks, window holds {available}")


class EmptySliceError(TickBarError):
    """A bar was requested from zero ticks."""
    pass


class OutOfRangeError(TickBarError):
    """Slice bounds fall outside the window."""

    def __init__(self, start: int, end: int, size: int):
        self.start = start
        self.end = end
        self.size = size
        super().__init__(f"slice [{start}, {end}) out of range for window of {size}")
