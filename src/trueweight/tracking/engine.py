"""Daily fold that turns a log history into a CalculationResult.

Each day flows through five stages:

1. Weight smoother   -> weight EMA and adapted weight alpha
2. Calorie smoother  -> calorie EMA and adapted calorie alpha
3. Trend             -> outlier-damped mean of daily weight-EMA deltas
4. TDEE              -> energy-balance TDEE, plausibility-checked and
                        blended with Mifflin-St Jeor during cold start
5. Goals             -> calorie targets for both TDEE models

All of the running state lives in an immutable ``EngineState``. Folding
``step`` over a history from ``initial_state`` reproduces a from-scratch
recompute exactly; keeping the returned state lets callers append new days
later without replaying everything.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from trueweight.profiles.body_calc import calculate_standard_tdee
from trueweight.tracking.constants import DEFAULT_TUNABLES, Tunables
from trueweight.tracking.ema import (
    CalorieSmootherState,
    WeightSmootherState,
    step_calories,
    step_weight,
)
from trueweight.tracking.goals import calculate_targets
from trueweight.tracking.models import CalculationResult, LogEntry, UserSettings
from trueweight.tracking.tdee import estimate_tdee
from trueweight.tracking.trend import TrendState, step_trend


@dataclass(frozen=True)
class EngineState:
    """Everything the engine needs to carry from one day to the next."""

    weight: WeightSmootherState
    calories: CalorieSmootherState
    trend: TrendState
    day_count: int = 0
    previous_unblended_tdee: Optional[float] = None


def initial_state(settings: UserSettings) -> EngineState:
    """State before the first logged day."""
    return EngineState(
        weight=WeightSmootherState.start(settings),
        calories=CalorieSmootherState.start(settings),
        trend=TrendState(),
    )


def neutral_result(settings: UserSettings) -> CalculationResult:
    """
    Result for an empty history.

    Smoothed and algorithmic values are zero. The formula TDEE is computed
    at zero body weight, which is degenerate but well defined.
    """
    standard = calculate_standard_tdee(settings, 0.0)
    return CalculationResult(
        true_weight=0.0,
        weight_trend_per_week=0.0,
        average_calories=0.0,
        estimated_tdee_algo=0.0,
        target_calories_algo=0.0,
        estimated_tdee_standard=standard,
        target_calories_standard=standard,
        delta_tdee=-standard,
        delta_target=-standard,
        current_alpha_weight=settings.weight_alpha,
        current_alpha_calorie=settings.calorie_alpha,
        tdee_blend_factor_used=1.0,
    )


def step(
    state: EngineState,
    entry: LogEntry,
    settings: UserSettings,
    tunables: Tunables = DEFAULT_TUNABLES,
) -> tuple[EngineState, CalculationResult]:
    """
    Process one day.

    Args:
        state: State after the previous day (``initial_state`` for day one)
        entry: Today's log entry
        settings: User profile and algorithm parameters
        tunables: Engine thresholds

    Returns:
        Tuple of (new state, result as of today)
    """
    weight = step_weight(state.weight, entry.weight, settings, tunables)
    calories = step_calories(
        state.calories, entry.previous_day_calories, settings, tunables
    )
    trend = step_trend(state.trend, weight.ema, settings.trend_smoothing_days, tunables)
    day_count = state.day_count + 1

    standard_tdee = calculate_standard_tdee(settings, weight.ema)
    estimate = estimate_tdee(
        day_count=day_count,
        calorie_ema=calories.ema,
        trend_per_day=trend.per_day(),
        standard_tdee=standard_tdee,
        weight_unit=settings.weight_unit,
        previous_unblended=state.previous_unblended_tdee,
        tunables=tunables,
    )
    targets = calculate_targets(
        tdee_algo=estimate.tdee,
        tdee_standard=standard_tdee,
        goal_rate_pct=settings.goal_rate,
        true_weight=weight.ema,
        weight_unit=settings.weight_unit,
        tunables=tunables,
    )

    result = CalculationResult(
        true_weight=weight.ema,
        weight_trend_per_week=trend.per_week(),
        average_calories=calories.ema,
        estimated_tdee_algo=estimate.tdee,
        target_calories_algo=targets.target_algo,
        estimated_tdee_standard=standard_tdee,
        target_calories_standard=targets.target_standard,
        delta_tdee=targets.delta_tdee,
        delta_target=targets.delta_target,
        current_alpha_weight=weight.alpha,
        current_alpha_calorie=calories.alpha,
        tdee_blend_factor_used=estimate.blend_factor,
    )
    new_state = EngineState(
        weight=weight,
        calories=calories,
        trend=trend,
        day_count=day_count,
        previous_unblended_tdee=estimate.unblended,
    )
    return new_state, result


def run(
    history: Iterable[LogEntry],
    settings: UserSettings,
    tunables: Tunables = DEFAULT_TUNABLES,
    state: Optional[EngineState] = None,
) -> tuple[EngineState, list[CalculationResult]]:
    """
    Fold ``step`` over ``history``.

    Args:
        history: Entries in ascending date order, unique dates
        settings: User profile and algorithm parameters
        tunables: Engine thresholds
        state: Checkpoint to resume from (default: start from scratch)

    Returns:
        Tuple of (final state, one result per entry)
    """
    if state is None:
        state = initial_state(settings)
    results = []
    for entry in history:
        state, result = step(state, entry, settings, tunables)
        results.append(result)
    return state, results


def compute_status(
    history: Iterable[LogEntry],
    settings: UserSettings,
    tunables: Tunables = DEFAULT_TUNABLES,
) -> CalculationResult:
    """Current status after replaying the whole history."""
    _, results = run(history, settings, tunables)
    if not results:
        return neutral_result(settings)
    return results[-1]


def compute_history(
    history: Iterable[LogEntry],
    settings: UserSettings,
    tunables: Tunables = DEFAULT_TUNABLES,
) -> list[CalculationResult]:
    """
    Per-day results for the whole history.

    Result ``k`` equals ``compute_status(history[:k + 1])``.
    """
    _, results = run(history, settings, tunables)
    return results
