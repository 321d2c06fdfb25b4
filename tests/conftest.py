import logging
import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from core.config import Settings
from core.models import Bar, Tick
from core.tick_window import TickWindow

START_TS = 1_700_000_000_000  # 2023-11-14T22:13:20Z

# Eight 5-tick bars: a pullback into a swing low of 1.0980 (bar 4) followed by
# a rally whose last bar crosses the 3-period EMA upward.
LONG_SETUP_BIDS = [
    1.1000, 1.1003, 1.1001, 1.0998, 1.0996,
    1.0996, 1.0999, 1.0997, 1.0994, 1.0995,
    1.0995, 1.0997, 1.0996, 1.0993, 1.0992,
    1.0992, 1.0994, 1.0990, 1.0991, 1.0990,
    1.0988, 1.0985, 1.0980, 1.0983, 1.0986,
    1.0986, 1.0985, 1.0988, 1.0989, 1.0990,
    1.0990, 1.0991, 1.0993, 1.0992, 1.0994,
    1.0995, 1.0998, 1.1001, 1.1005, 1.1010,
]

# Mirror image around 1.1000: same structure heading down, swing high at 1.1020.
SHORT_SETUP_BIDS = [round(2.2 - b, 5) for b in LONG_SETUP_BIDS]


def build_ticks(bids, start=START_TS, step=250, spread=0.0002, volume=1):
    return [
        Tick(timestamp=start + i * step, bid=b, ask=round(b + spread, 5), bid_volume=volume)
        for i, b in enumerate(bids)
    ]


@pytest.fixture
def make_ticks():
    return build_ticks


@pytest.fixture
def make_window():
    def _make(bids, capacity=None, **kwargs):
        window = TickWindow(capacity or len(bids), "EUR/USD")
        for tick in build_ticks(bids, **kwargs):
            window.push(tick)
        return window
    return _make


@pytest.fixture
def make_bar():
    def _make(open, high, low, close, start_time=0, end_time=0, volume=0, formed_count=1):
        return Bar(
            open=open,
            high=high,
            low=low,
            close=close,
            volume=volume,
            start_time=start_time,
            end_time=end_time,
            formed_count=formed_count,
        )
    return _make


@pytest.fixture
def small_config(tmp_path):
    """Window of 40 ticks: resolutions 40/20/10, eight 5-tick bars for EMA and swing."""
    return Settings(
        instrument="EUR/USD",
        pip_value=0.0001,
        window_capacity=40,
        eval_every_ticks=5,
        resolutions="40,20,10",
        ema_period=3,
        ema_bar_size=5,
        ema_bar_count=8,
        swing_bar_size=5,
        swing_bar_count=8,
        stop_buffer_pips=2.0,
        max_stop_distance_pips=50.0,
        risk_reward_ratio=2.0,
        logs_dir=str(tmp_path / "logs"),
    )


@pytest.fixture
def long_setup_ticks():
    return build_ticks(LONG_SETUP_BIDS)


@pytest.fixture
def short_setup_ticks():
    return build_ticks(SHORT_SETUP_BIDS)


@pytest.fixture
def restore_root_logging():
    """Drop handlers a test attaches to the root logger and restore its level."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
