"""Tunable thresholds for the adaptive smoothing and TDEE estimation.

Every ad-hoc number used by the engine lives here, so that it can be
overridden from config and tested in isolation. The engine reads them
through a ``Tunables`` instance rather than importing the constants.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

# Adaptive alpha step applied when a smoother decides to speed up / slow down
ALPHA_STEP = 0.01

# Weight smoother: mean relative prediction error bands (percent)
WEIGHT_ERROR_LOW_PCT = 0.25
WEIGHT_ERROR_HIGH_PCT = 0.75

# Calorie smoother: trailing window (days) and volatility bands
CALORIE_WINDOW_DAYS = 10
CALORIE_CV_LOW = 0.20
CALORIE_CV_HIGH = 0.35
CALORIE_MISSING_LOW_PCT = 15.0
CALORIE_MISSING_HIGH_PCT = 30.0

# A day-over-day trend move above 5% of bodyweight is treated as noise
OUTLIER_DELTA_FRACTION = 0.05

# Algorithmic TDEE outside this band (kcal/day) is considered implausible
TDEE_PLAUSIBLE_MIN = 500.0
TDEE_PLAUSIBLE_MAX = 7000.0

# Cold start: formula-only below MIN_DAYS_FOR_TREND, fully data-driven from
# BLEND_DURATION_DAYS, geometric decay of the formula weight in between
MIN_DAYS_FOR_TREND = 5
BLEND_DURATION_DAYS = 21
BLEND_DECAY = 0.85

# Energy content of one unit of body weight (kcal)
ENERGY_PER_LB = 3500.0
ENERGY_PER_KG = 7700.0


@dataclass(frozen=True)
class Tunables:
    """Bundle of engine thresholds, defaulting to the module constants."""

    alpha_step: float = ALPHA_STEP
    weight_error_low_pct: float = WEIGHT_ERROR_LOW_PCT
    weight_error_high_pct: float = WEIGHT_ERROR_HIGH_PCT
    calorie_window_days: int = CALORIE_WINDOW_DAYS
    calorie_cv_low: float = CALORIE_CV_LOW
    calorie_cv_high: float = CALORIE_CV_HIGH
    calorie_missing_low_pct: float = CALORIE_MISSING_LOW_PCT
    calorie_missing_high_pct: float = CALORIE_MISSING_HIGH_PCT
    outlier_delta_fraction: float = OUTLIER_DELTA_FRACTION
    tdee_plausible_min: float = TDEE_PLAUSIBLE_MIN
    tdee_plausible_max: float = TDEE_PLAUSIBLE_MAX
    min_days_for_trend: int = MIN_DAYS_FOR_TREND
    blend_duration_days: int = BLEND_DURATION_DAYS
    blend_decay: float = BLEND_DECAY
    energy_per_lb: float = ENERGY_PER_LB
    energy_per_kg: float = ENERGY_PER_KG

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tunables":
        """Build tunables from a config mapping, ignoring unknown keys.

        Values are coerced to the type of the field default, so YAML ints
        are accepted for float fields and vice versa.
        """
        kwargs: dict[str, Any] = {}
        for f in fields(cls):
            if f.name in data and data[f.name] is not None:
                kwargs[f.name] = type(f.default)(data[f.name])
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Return tunables as a plain dict (for YAML output)."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_TUNABLES = Tunables()
