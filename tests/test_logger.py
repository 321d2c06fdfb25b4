"""Tests for the JSONL journal helpers."""

import json
from datetime import datetime, timezone

from core.logger import (
    append_jsonl,
    log_fill,
    log_path,
    log_rejection,
    millis_to_datetime,
    utc_date_str,
    utc_iso_str,
)


def test_log_path_by_family_and_date(tmp_path):
    ts = datetime(2024, 1, 2, 23, 59, tzinfo=timezone.utc)
    assert log_path("signals", ts, tmp_path) == tmp_path / "signals_2024-01-02.jsonl"
    assert log_path("custom", ts, tmp_path) == tmp_path / "custom_2024-01-02.jsonl"


def test_naive_datetimes_treated_as_utc():
    ts = datetime(2024, 1, 2, 3, 4, 5, 678000)
    assert utc_date_str(ts) == "2024-01-02"
    assert utc_iso_str(ts) == "2024-01-02T03:04:05.678Z"


def test_millis_to_datetime():
    ts = millis_to_datetime(1_700_000_000_000)
    assert ts == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)


def test_append_jsonl_creates_dirs_and_appends(tmp_path):
    path = tmp_path / "nested" / "out.jsonl"
    append_jsonl(path, {"a": 1})
    append_jsonl(path, {"b": datetime(2024, 1, 2, tzinfo=timezone.utc)})

    lines = path.read_text().splitlines()
    assert json.loads(lines[0]) == {"a": 1}
    assert json.loads(lines[1])["b"].startswith("2024-01-02")


def test_rejection_and_fill_families(tmp_path):
    ts = datetime(2024, 5, 6, tzinfo=timezone.utc)
    log_rejection({"reason": "no_confluence"}, ts, tmp_path)
    log_fill({"pnl_pips": -5.0}, ts, tmp_path)

    assert (tmp_path / "rejections_2024-05-06.jsonl").exists()
    assert json.loads((tmp_path / "fills_2024-05-06.jsonl").read_text())["pnl_pips"] == -5.0
