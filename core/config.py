"""Engine configuration."""

import logging

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)
load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
        validate_assignment=True,
    )

    # Instrument
    instrument: str = Field(default="EUR/USD", alias="INSTRUMENT")
    pip_value: float = Field(default=0.0001, alias="PIP_VALUE")
    price_precision: int = 5
    strategy_name: str = "TICK_CONFLUENCE"

    # Window / cadence
    window_capacity: int = Field(default=5000, alias="WINDOW_CAPACITY")
    eval_every_ticks: int = 100  # Run a pass every N ticks once the window is full

    # Confluence resolutions, coarse to fine (tick counts)
    resolutions: str = Field(default="5000,2500,1000,500,100", alias="RESOLUTIONS")

    # EMA containment filter
    ema_period: int = 26
    ema_bar_size: int = 100
    ema_bar_count: int = 50

    # Swing stop
    swing_bar_size: int = 100
    swing_bar_count: int = 50
    stop_buffer_pips: float = 5.0
    max_stop_distance_pips: float = 25.0

    # Target
    risk_reward_ratio: float = 2.0

    # Martingale sizing
    base_lot_size: float = 0.01
    martingale_ratio: float = 2.0
    min_lot_size: float = 0.001
    consecutive_loss_limit: int = 10

    # Profile / logging
    profile: str = Field(default="", alias="PROFILE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    logs_dir: str = Field(default="logs", alias="LOGS_DIR")

    @field_validator(
        "window_capacity",
        "eval_every_ticks",
        "ema_period",
        "ema_bar_size",
        "ema_bar_count",
        "swing_bar_size",
        "swing_bar_count",
    )
    @classmethod
    def _positive_int(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be > 0")
        return value

    @field_validator("pip_value", "risk_reward_ratio", "max_stop_distance_pips", "base_lot_size")
    @classmethod
    def _positive_float(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be > 0")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"unknown log level {value}")
        return value

    @field_validator("resolutions")
    @classmethod
    def _check_resolutions(cls, value: str) -> str:
        parsed = parse_resolutions(value)
        if not parsed:
            raise ValueError("at least one resolution is required")
        if any(r <= 0 for r in parsed):
            raise ValueError("resolutions must be > 0")
        if any(a <= b for a, b in zip(parsed, parsed[1:])):
            raise ValueError("resolutions must be strictly decreasing (coarse to fine)")
        return value

    @model_validator(mode="after")
    def _check_fits_window(self) -> "Settings":
        # Every bar request the engine makes must fit inside a full window
        needs = {
            "largest resolution": self.resolution_list[0],
            "ema bar series": self.ema_bar_size * self.ema_bar_count,
            "swing bar series": self.swing_bar_size * self.swing_bar_count,
        }
        for name, required in needs.items():
            if required > self.window_capacity:
                raise ValueError(
                    f"{name} needs {required} ticks but window_capacity is {self.window_capacity}"
                )
        return self

    @property
    def resolution_list(self) -> list[int]:
        return parse_resolutions(self.resolutions)


def parse_resolutions(value: str) -> list[int]:
    return [int(r.strip()) for r in value.split(",") if r.strip()]


settings = Settings()

try:
    from core.profiles import apply_profile
    if settings.profile:
        apply_profile(settings.profile, settings)
except Exception as e:
    logger.debug("Profile application skipped: %s", e, exc_info=True)
