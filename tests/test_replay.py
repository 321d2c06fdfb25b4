"""Tests for the CSV replay tool."""

import logging

import pandas as pd
import pytest

from conftest import LONG_SETUP_BIDS, START_TS
from core.models import SignalDirection
from execution.sizing import MartingaleSizer
from logic.engine import TickBarEngine
from tools.replay import iter_ticks, load_ticks, main, replay


def _write_csv(path, bids, start=START_TS, step=250):
    df = pd.DataFrame({
        "Timestamp": [start + i * step for i in range(len(bids))],
        "Bid": bids,
        "Ask": [round(b + 0.0002, 5) for b in bids],
        "Bid_Volume": [1] * len(bids),
    })
    df.to_csv(path, index=False)
    return path


def test_load_numeric_timestamps(tmp_path):
    path = _write_csv(tmp_path / "ticks.csv", [1.1, 1.2, 1.3])
    df = load_ticks(path)

    assert list(df["timestamp"]) == [START_TS, START_TS + 250, START_TS + 500]
    ticks = list(iter_ticks(df))
    assert ticks[1].bid == 1.2
    assert ticks[1].bid_volume == 1


def test_load_iso_timestamps_and_sort(tmp_path):
    path = tmp_path / "iso.csv"
    path.write_text(
        "timestamp,bid,ask\n"
        "2023-11-14T22:13:21.000Z,1.1001,1.1003\n"
        "2023-11-14T22:13:20.000Z,1.1000,1.1002\n"
    )
    df = load_ticks(path)

    assert list(df["timestamp"]) == [START_TS, START_TS + 1000]
    assert list(df["bid"]) == [1.1000, 1.1001]
    assert list(df["bid_volume"]) == [0, 0]


def test_missing_column_rejected(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("timestamp,bid\n1,1.1\n")
    with pytest.raises(ValueError, match="ask"):
        load_ticks(path)


def test_limit(tmp_path):
    path = _write_csv(tmp_path / "ticks.csv", [1.1] * 20)
    assert len(load_ticks(path, limit=5)) == 5


def test_replay_collects_proposals(tmp_path, small_config):
    path = _write_csv(tmp_path / "ticks.csv", LONG_SETUP_BIDS)
    engine = TickBarEngine(small_config, sizer=MartingaleSizer.from_settings(small_config))

    proposals = replay(load_ticks(path), engine)

    assert len(proposals) == 1
    assert proposals[0].signal.direction == SignalDirection.LONG
    assert proposals[0].signal.buffered_stop_price == 1.0978


def test_replay_wraps_unsized_signals(tmp_path, small_config):
    path = _write_csv(tmp_path / "ticks.csv", LONG_SETUP_BIDS)
    proposals = replay(load_ticks(path), TickBarEngine(small_config))

    assert proposals[0].lot_size == 0.0
    assert proposals[0].signal.entry_price == 1.1012


def test_main_runs(tmp_path, restore_root_logging):
    path = _write_csv(tmp_path / "ticks.csv", LONG_SETUP_BIDS)
    assert main([str(path), "--profile", "single-bar", "--limit", "30"]) == 0


def test_main_log_options(tmp_path, monkeypatch, restore_root_logging):
    monkeypatch.setenv("LOGS_DIR", str(tmp_path / "logs"))
    path = _write_csv(tmp_path / "ticks.csv", LONG_SETUP_BIDS)

    assert main([str(path), "--log-level", "debug", "--log-file", "--limit", "10"]) == 0
    assert restore_root_logging.level == logging.DEBUG
    assert (tmp_path / "logs" / "tickbar.log").exists()
