"""Calorie targets for a goal rate expressed as % of body weight per week.

The goal rate is a loss rate: 0.5 means "lose 0.5% of body weight per
week" and produces a daily deficit; a negative rate produces a surplus.
"""

from __future__ import annotations

from dataclasses import dataclass

from trueweight.profiles.body_calc import WeightUnit
from trueweight.tracking.constants import DEFAULT_TUNABLES, Tunables
from trueweight.tracking.tdee import energy_equivalent


@dataclass(frozen=True)
class GoalTargets:
    """Targets for both TDEE models plus their differences."""

    daily_deficit: float  # kcal/day, negative = surplus
    target_algo: float
    target_standard: float
    delta_tdee: float
    delta_target: float


def daily_deficit(
    goal_rate_pct: float,
    true_weight: float,
    weight_unit: WeightUnit,
    tunables: Tunables = DEFAULT_TUNABLES,
) -> float:
    """
    Daily calorie deficit (negative = surplus) for a goal rate.

    Example:
        >>> round(daily_deficit(0.5, 80.0, WeightUnit.KG))  # 0.4 kg/week
        440
    """
    weekly_change = goal_rate_pct / 100.0 * true_weight
    return weekly_change * energy_equivalent(weight_unit, tunables) / 7.0


def calculate_targets(
    tdee_algo: float,
    tdee_standard: float,
    goal_rate_pct: float,
    true_weight: float,
    weight_unit: WeightUnit,
    tunables: Tunables = DEFAULT_TUNABLES,
) -> GoalTargets:
    """Apply the same deficit to both TDEE estimates."""
    deficit = daily_deficit(goal_rate_pct, true_weight, weight_unit, tunables)
    target_algo = tdee_algo - deficit
    target_standard = tdee_standard - deficit
    return GoalTargets(
        daily_deficit=deficit,
        target_algo=target_algo,
        target_standard=target_standard,
        delta_tdee=tdee_algo - tdee_standard,
        delta_target=target_algo - target_standard,
    )
