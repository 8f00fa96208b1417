"""Adaptive-gain exponential smoothing for weight and calorie logs.

Both series use the classic EMA update:
    T_n = T_{n-1} + α × (X_n - T_{n-1})

which is the same as X_n·α + T_{n-1}·(1 - α), but exact when X_n == T_{n-1}.
Missing days carry the previous value forward.

Unlike a fixed-gain EMA, α is nudged by ±0.01 per logged day depending on
how well the series is behaving:

- Weight: mean relative prediction error (%) over the trailing window.
  Small errors mean the scale is consistent and we can follow it more
  closely; large errors mean noise, so we smooth harder.
- Calories: coefficient of variation of the last 10 logged values plus
  the share of unlogged days. Steady, complete logging earns a faster
  response; erratic or patchy logging a slower one.

The smoothers are written as pure step functions over small immutable
state objects so that the engine can fold them over a history or resume
from a checkpoint.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from trueweight.tracking.constants import DEFAULT_TUNABLES, Tunables
from trueweight.tracking.models import UserSettings

logger = logging.getLogger(__name__)


def ema_update(prev: float, value: float, alpha: float) -> float:
    """
    One EMA step.

    Example:
        >>> ema_update(80.0, 81.0, 0.1)
        80.1
    """
    return prev + alpha * (value - prev)


def relative_error_pct(value: float, prediction: float) -> float:
    """Absolute prediction error as a percentage of the prediction."""
    return abs(value - prediction) / prediction * 100.0


def adapt_weight_alpha(
    alpha: float,
    mean_error_pct: float,
    settings: UserSettings,
    tunables: Tunables = DEFAULT_TUNABLES,
) -> float:
    """
    Nudge the weight alpha from the mean relative prediction error.

    Args:
        alpha: Current weight alpha
        mean_error_pct: Mean relative error (%) over the trailing window
        settings: Supplies weight_alpha_min / weight_alpha_max
        tunables: Error bands and step size

    Returns:
        New alpha, kept inside [weight_alpha_min, weight_alpha_max]
    """
    if mean_error_pct < tunables.weight_error_low_pct:
        return min(settings.weight_alpha_max, alpha + tunables.alpha_step)
    if mean_error_pct > tunables.weight_error_high_pct:
        return max(settings.weight_alpha_min, alpha - tunables.alpha_step)
    return alpha


def adapt_calorie_alpha(
    alpha: float,
    cv: float,
    missing_pct: float,
    settings: UserSettings,
    tunables: Tunables = DEFAULT_TUNABLES,
) -> float:
    """
    Nudge the calorie alpha from logging volatility and completeness.

    Args:
        alpha: Current calorie alpha
        cv: Coefficient of variation of recent logged calories
        missing_pct: Percent of recent days with no calorie log
        settings: Supplies calorie_alpha_min / calorie_alpha_max
        tunables: CV / missing-day bands and step size

    Returns:
        New alpha, kept inside [calorie_alpha_min, calorie_alpha_max]
    """
    if cv < tunables.calorie_cv_low and missing_pct < tunables.calorie_missing_low_pct:
        return min(settings.calorie_alpha_max, alpha + tunables.alpha_step)
    if cv > tunables.calorie_cv_high or missing_pct > tunables.calorie_missing_high_pct:
        return max(settings.calorie_alpha_min, alpha - tunables.alpha_step)
    return alpha


def coefficient_of_variation(values: tuple[int, ...] | list[int]) -> float:
    """
    Sample CV (n-1 denominator) of a list of calorie values.

    A zero mean has no meaningful CV; it is reported as 1.0 (worst case)
    so that the caller slows down rather than speeds up.
    """
    mean = float(np.mean(values))
    if mean == 0:
        logger.debug("Calorie mean is zero, treating CV as 1.0")
        return 1.0
    std = float(np.std(values, ddof=1)) if len(values) > 1 else 0.0
    return std / mean


@dataclass(frozen=True)
class WeightSmootherState:
    """Running state of the weight smoother."""

    ema: float
    alpha: float
    errors: tuple[float, ...] = ()
    days_seen: int = 0

    @classmethod
    def start(cls, settings: UserSettings) -> "WeightSmootherState":
        return cls(ema=0.0, alpha=settings.weight_alpha)


def step_weight(
    state: WeightSmootherState,
    raw: Optional[float],
    settings: UserSettings,
    tunables: Tunables = DEFAULT_TUNABLES,
) -> WeightSmootherState:
    """
    Advance the weight smoother by one calendar day.

    The first day seeds the EMA with the raw value (0 when missing). On later
    days with a weight, the relative prediction error joins a trailing window
    of ``trend_smoothing_days`` samples; once that window is full its mean
    drives the alpha adjustment, which is applied before the EMA update.
    """
    if state.days_seen == 0:
        seed = raw if raw is not None else 0.0
        return replace(state, ema=seed, days_seen=1)

    if raw is None:
        return replace(state, days_seen=state.days_seen + 1)

    window = settings.trend_smoothing_days
    errors = state.errors
    if state.ema != 0:
        errors = (errors + (relative_error_pct(raw, state.ema),))[-window:]
    else:
        logger.debug("Previous weight EMA is zero, skipping prediction error")

    alpha = state.alpha
    if len(errors) == window:
        alpha = adapt_weight_alpha(alpha, sum(errors) / window, settings, tunables)

    return WeightSmootherState(
        ema=ema_update(state.ema, raw, alpha),
        alpha=alpha,
        errors=errors,
        days_seen=state.days_seen + 1,
    )


@dataclass(frozen=True)
class CalorieSmootherState:
    """Running state of the calorie smoother.

    ``recent`` holds the last logged values (the seed day is not included);
    ``presence`` holds one flag per calendar day for the last window of days.
    """

    ema: float
    alpha: float
    recent: tuple[int, ...] = ()
    presence: tuple[bool, ...] = ()
    days_seen: int = 0

    @classmethod
    def start(cls, settings: UserSettings) -> "CalorieSmootherState":
        return cls(ema=0.0, alpha=settings.calorie_alpha)

    @property
    def missing_days(self) -> int:
        return sum(1 for logged in self.presence if not logged)


def step_calories(
    state: CalorieSmootherState,
    raw: Optional[int],
    settings: UserSettings,
    tunables: Tunables = DEFAULT_TUNABLES,
) -> CalorieSmootherState:
    """
    Advance the calorie smoother by one calendar day.

    The missing-day count covers the calendar days before today (at most
    ``calorie_window_days`` of them) and is expressed as a percentage of the
    full window. Alpha is only adjusted once the logged-value window holds
    at least as many samples as the days that were actually logged.
    """
    window = tunables.calorie_window_days
    presence = (state.presence + (raw is not None,))[-window:]

    if state.days_seen == 0:
        seed = float(raw) if raw is not None else 0.0
        return replace(state, ema=seed, presence=presence, days_seen=1)

    if raw is None:
        return replace(state, presence=presence, days_seen=state.days_seen + 1)

    recent = (state.recent + (raw,))[-window:]
    missing = state.missing_days

    alpha = state.alpha
    if recent and len(recent) >= window - missing:
        cv = coefficient_of_variation(recent)
        missing_pct = missing / window * 100.0
        alpha = adapt_calorie_alpha(alpha, cv, missing_pct, settings, tunables)

    return CalorieSmootherState(
        ema=ema_update(state.ema, float(raw), alpha),
        alpha=alpha,
        recent=recent,
        presence=presence,
        days_seen=state.days_seen + 1,
    )


def smooth_weights(
    weights: list[Optional[float]],
    settings: UserSettings,
    tunables: Tunables = DEFAULT_TUNABLES,
) -> tuple[list[float], float]:
    """
    Smooth a whole weight series.

    Returns:
        Tuple of (EMA series, same length as input; final adapted alpha)
    """
    state = WeightSmootherState.start(settings)
    series = []
    for raw in weights:
        state = step_weight(state, raw, settings, tunables)
        series.append(state.ema)
    return series, state.alpha


def smooth_calories(
    calories: list[Optional[int]],
    settings: UserSettings,
    tunables: Tunables = DEFAULT_TUNABLES,
) -> tuple[list[float], float]:
    """
    Smooth a whole calorie series.

    Returns:
        Tuple of (EMA series, same length as input; final adapted alpha)
    """
    state = CalorieSmootherState.start(settings)
    series = []
    for raw in calories:
        state = step_calories(state, raw, settings, tunables)
        series.append(state.ema)
    return series, state.alpha
