"""Data-driven TDEE estimate with cold-start blending.

Energy balance gives TDEE directly from what was eaten and how weight
moved:

    TDEE = intake - energy_per_unit × trend_per_day

Early on, both the calorie EMA and the trend are too noisy for that to be
trusted, so for the first weeks the estimate is blended with the
Mifflin-St Jeor value. The formula's share starts at 100% and decays
geometrically (×0.85 per day from day 5) until day 21, after which the
estimate is fully data-driven.

An estimate outside 500-7000 kcal/day is never reported. It is replaced by
the previous day's estimate when that one lies strictly inside the
band, and by the formula value otherwise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from trueweight.profiles.body_calc import WeightUnit
from trueweight.tracking.constants import DEFAULT_TUNABLES, Tunables

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TDEEEstimate:
    """Algorithmic TDEE for one day.

    Attributes:
        tdee: Blended estimate reported to the user (kcal/day)
        unblended: Plausibility-checked estimate before blending (kcal/day)
        blend_factor: Share of the formula TDEE in ``tdee`` (1.0 = formula only)
    """

    tdee: float
    unblended: float
    blend_factor: float


def energy_equivalent(
    weight_unit: WeightUnit,
    tunables: Tunables = DEFAULT_TUNABLES,
) -> float:
    """kcal stored in one unit of body weight (lb or kg)."""
    if weight_unit is WeightUnit.LB:
        return tunables.energy_per_lb
    return tunables.energy_per_kg


def is_plausible(tdee: Optional[float], tunables: Tunables = DEFAULT_TUNABLES) -> bool:
    """True when ``tdee`` lies inside the plausibility band."""
    if tdee is None:
        return False
    return tunables.tdee_plausible_min <= tdee <= tunables.tdee_plausible_max


def _reusable(previous: Optional[float], tunables: Tunables) -> bool:
    """Previous estimates are only reused from strictly inside the band."""
    if previous is None:
        return False
    return tunables.tdee_plausible_min < previous < tunables.tdee_plausible_max


def blend_factor(day_count: int, tunables: Tunables = DEFAULT_TUNABLES) -> float:
    """
    Formula share of the reported TDEE after ``day_count`` days of history.

    Example:
        >>> blend_factor(4)
        1.0
        >>> blend_factor(6)
        0.85
        >>> blend_factor(21)
        0.0
    """
    if day_count < tunables.min_days_for_trend:
        return 1.0
    if day_count >= tunables.blend_duration_days:
        return 0.0
    factor = tunables.blend_decay ** (day_count - tunables.min_days_for_trend)
    return max(0.0, min(1.0, factor))


def raw_tdee(
    calorie_ema: float,
    trend_per_day: float,
    energy_per_unit: float,
) -> float:
    """Energy-balance TDEE: intake minus the energy that went into storage."""
    return calorie_ema - energy_per_unit * trend_per_day


def estimate_tdee(
    day_count: int,
    calorie_ema: float,
    trend_per_day: float,
    standard_tdee: float,
    weight_unit: WeightUnit,
    previous_unblended: Optional[float] = None,
    tunables: Tunables = DEFAULT_TUNABLES,
) -> TDEEEstimate:
    """
    Algorithmic TDEE for the day that completes ``day_count`` days of history.

    Args:
        day_count: Number of days processed so far, including today
        calorie_ema: Today's smoothed calorie intake
        trend_per_day: Today's weight trend (weight units/day)
        standard_tdee: Mifflin-St Jeor TDEE at today's smoothed weight
        weight_unit: Selects kcal per lb or per kg
        previous_unblended: Yesterday's ``TDEEEstimate.unblended``, if any
        tunables: Thresholds

    Returns:
        TDEEEstimate for today
    """
    if day_count < tunables.min_days_for_trend:
        return TDEEEstimate(tdee=standard_tdee, unblended=standard_tdee, blend_factor=1.0)

    estimate = raw_tdee(
        calorie_ema, trend_per_day, energy_equivalent(weight_unit, tunables)
    )
    if not is_plausible(estimate, tunables):
        if _reusable(previous_unblended, tunables):
            logger.debug(
                "Implausible TDEE %.0f kcal on day %d, reusing previous %.0f",
                estimate, day_count, previous_unblended,
            )
            estimate = previous_unblended  # type: ignore[assignment]
        else:
            logger.debug(
                "Implausible TDEE %.0f kcal on day %d, falling back to formula %.0f",
                estimate, day_count, standard_tdee,
            )
            estimate = standard_tdee

    factor = blend_factor(day_count, tunables)
    blended = factor * standard_tdee + (1 - factor) * estimate
    return TDEEEstimate(tdee=blended, unblended=estimate, blend_factor=factor)
