"""
Profile-based configuration overrides.

PROFILES carry the tuned parameter sets of the recurring tick-bar strategies.
They only touch signal geometry and resolutions, never window/cadence sizing.

Usage:
    PROFILE=confluence uv run python tools/replay.py ticks.csv
    PROFILE=swing-ema uv run python tools/replay.py ticks.csv
"""

from typing import Any, Dict

# Only allow overriding these keys to avoid drifting window sizing.
ALLOWED_PROFILE_KEYS = {
    "resolutions",
    "ema_period",
    "stop_buffer_pips",
    "max_stop_distance_pips",
    "risk_reward_ratio",
    "martingale_ratio",
    "consecutive_loss_limit",
}

PROFILES: Dict[str, Dict[str, Any]] = {
    # Five-resolution confluence with a 26-bar EMA cross
    "confluence": {
        "resolutions": "5000,2500,1000,500,100",
        "ema_period": 26,
        "stop_buffer_pips": 5.0,
        "max_stop_distance_pips": 25.0,
        "risk_reward_ratio": 2.0,
        "martingale_ratio": 2.0,
        "consecutive_loss_limit": 10,
    },

    # Tight swing stops, 1:1 target
    "swing-ema": {
        "stop_buffer_pips": 3.0,
        "max_stop_distance_pips": 10.0,
        "risk_reward_ratio": 1.0,
    },

    # Only the last 100-tick bar decides direction
    "single-bar": {
        "resolutions": "100",
        "consecutive_loss_limit": 12,
    },

    "default": {},  # No overrides - uses base config defaults
}

PROFILE_ALIASES = {
    "french-tickler": "confluence",
    "madman": "swing-ema",
    "roger-dodger": "single-bar",
}


def apply_profile(profile: str, settings_obj):
    """Apply a named profile to the provided settings instance."""
    if not profile:
        profile = "default"
    profile = PROFILE_ALIASES.get(profile, profile)
    if profile not in PROFILES:
        raise ValueError(f"Unknown profile: {profile}")

    overrides = PROFILES[profile]
    for key, value in overrides.items():
        if key not in ALLOWED_PROFILE_KEYS:
            raise ValueError(f"Profile key not allowed: {key}")
        if not hasattr(settings_obj, key):
            raise ValueError(f"Settings has no attribute '{key}'")
        setattr(settings_obj, key, value)
    # Track active profile on the settings object for observability
    setattr(settings_obj, "profile", profile)
