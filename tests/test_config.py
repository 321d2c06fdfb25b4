"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from core.config import Settings, parse_resolutions


def test_defaults_are_consistent():
    config = Settings()
    assert config.resolution_list == [5000, 2500, 1000, 500, 100]
    assert config.window_capacity >= config.resolution_list[0]
    assert config.log_level == "INFO"


def test_parse_resolutions():
    assert parse_resolutions("40, 20,10,") == [40, 20, 10]
    assert parse_resolutions("") == []


@pytest.mark.parametrize("resolutions", ["", "10,20", "20,20", "20,0"])
def test_bad_resolutions_rejected(resolutions):
    with pytest.raises(ValidationError):
        Settings(resolutions=resolutions, window_capacity=100, ema_bar_size=1, swing_bar_size=1)


def test_resolution_larger_than_window_rejected():
    with pytest.raises(ValidationError, match="largest resolution"):
        Settings(window_capacity=1000, resolutions="2000,100", ema_bar_size=10, swing_bar_size=10)


def test_bar_series_larger_than_window_rejected():
    with pytest.raises(ValidationError, match="ema bar series"):
        Settings(window_capacity=1000, resolutions="1000,100", ema_bar_size=100, ema_bar_count=11)


@pytest.mark.parametrize(
    "field,value",
    [("eval_every_ticks", 0), ("ema_period", -1), ("pip_value", 0.0), ("risk_reward_ratio", -2.0)],
)
def test_non_positive_values_rejected(field, value):
    with pytest.raises(ValidationError):
        Settings(**{field: value})


def test_assignment_is_validated(small_config):
    with pytest.raises(ValidationError):
        small_config.eval_every_ticks = 0


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("INSTRUMENT", "GBP/USD")
    monkeypatch.setenv("PIP_VALUE", "0.0001")
    monkeypatch.setenv("RESOLUTIONS", "1000,100")
    config = Settings()
    assert config.instrument == "GBP/USD"
    assert config.resolution_list == [1000, 100]


def test_log_level_normalised_and_checked():
    assert Settings(log_level="debug").log_level == "DEBUG"
    with pytest.raises(ValidationError):
        Settings(log_level="LOUD")
