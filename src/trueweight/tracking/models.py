"""Data models for daily logs, user settings and engine output."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from datetime import date
from enum import Enum
from typing import Any, Optional

from trueweight.profiles.body_calc import ActivityLevel, HeightUnit, Sex, WeightUnit


def _coerce_enum(enum_cls: type[Enum], value: Any, field_name: str) -> Enum:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        valid = tuple(member.value for member in enum_cls)
        raise ValueError(f"{field_name} must be one of {valid}, got '{value}'") from None


@dataclass(frozen=True)
class LogEntry:
    """One calendar day of logged data.

    Either measurement may be missing. ``previous_day_calories`` is the
    intake logged for the day before ``date``.
    """

    date: date
    weight: Optional[float] = None
    previous_day_calories: Optional[int] = None


@dataclass(frozen=True)
class UserSettings:
    """User profile plus adaptive-smoothing parameters.

    The engine expects ``0 < alpha_min <= alpha <= alpha_max < 1`` for both
    the weight and calorie families but does not check it.
    """

    height: float = 170.0  # in height_unit; decimal feet for FT_IN
    age: int = 30
    sex: Sex = Sex.MALE
    activity_level: ActivityLevel = ActivityLevel.LIGHT
    weight_unit: WeightUnit = WeightUnit.KG
    height_unit: HeightUnit = HeightUnit.CM
    goal_rate: float = 0.0  # percent of body weight to lose per week

    weight_alpha: float = 0.1
    weight_alpha_min: float = 0.05
    weight_alpha_max: float = 0.3
    calorie_alpha: float = 0.1
    calorie_alpha_min: float = 0.05
    calorie_alpha_max: float = 0.3
    trend_smoothing_days: int = 7

    def __post_init__(self) -> None:
        object.__setattr__(self, "sex", _coerce_enum(Sex, self.sex, "sex"))
        object.__setattr__(
            self,
            "activity_level",
            _coerce_enum(ActivityLevel, self.activity_level, "activity_level"),
        )
        object.__setattr__(
            self, "weight_unit", _coerce_enum(WeightUnit, self.weight_unit, "weight_unit")
        )
        object.__setattr__(
            self, "height_unit", _coerce_enum(HeightUnit, self.height_unit, "height_unit")
        )

    def copy_with(self, **changes: Any) -> "UserSettings":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Flat dict with enum values as strings."""
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, Enum):
                data[key] = value.value
        return data


@dataclass(frozen=True)
class CalculationResult:
    """Snapshot of every derived metric after the last processed day.

    Weight-valued fields are in the user's weight unit, energy fields in
    kcal/day. Zero smoothed values mean "not enough data", not a real zero.
    """

    true_weight: float
    weight_trend_per_week: float
    average_calories: float
    estimated_tdee_algo: float
    target_calories_algo: float
    estimated_tdee_standard: float
    target_calories_standard: float
    delta_tdee: float
    delta_target: float
    current_alpha_weight: float
    current_alpha_calorie: float
    tdee_blend_factor_used: float

    def to_dict(self) -> dict[str, float]:
        """Return result fields as a plain dict."""
        return asdict(self)
