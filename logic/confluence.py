"""Multi-resolution direction confluence."""

from typing import Optional, Sequence

from core.models import Direction
from core.tick_window import TickWindow
from logic.bars import last_bar


def resolution_directions(window: TickWindow, resolutions: Sequence[int]) -> dict[int, Direction]:
    """Direction of the newest bar at each resolution."""
    return {size: last_bar(window, size).direction for size in resolutions}


def detect_confluence(window: TickWindow, resolutions: Sequence[int]) -> Optional[Direction]:
    """
    Direction shared by the newest bar at every resolution, or None.

    Coarse bars set the trend, fine bars confirm it has not just turned. Any
    sideways bar vetoes; there is no majority vote.
    """
    if not resolutions:
        return None
    directions = resolution_directions(window, resolutions)
    first = directions[resolutions[0]]
    if first == Direction.SIDEWAYS:
        return None
    if all(d == first for d in directions.values()):
        return first
    return None
