"""Weight trend from day-over-day changes in the smoothed weight.

The trend is the mean of the most recent daily deltas of the weight EMA.
A single-day EMA move of more than 5% of bodyweight is physiologically
implausible and almost always a logging error (wrong unit, typo, someone
else on the scale), so it contributes a zero delta instead.
"""

from __future__ import annotations

from dataclasses import dataclass

from trueweight.tracking.constants import DEFAULT_TUNABLES, Tunables


def damped_delta(
    prev_ema: float,
    ema: float,
    tunables: Tunables = DEFAULT_TUNABLES,
) -> float:
    """EMA delta, replaced by 0 when it exceeds the outlier band."""
    delta = ema - prev_ema
    if prev_ema != 0 and abs(delta) / abs(prev_ema) > tunables.outlier_delta_fraction:
        return 0.0
    return delta


@dataclass(frozen=True)
class TrendState:
    """Trailing window of damped deltas plus the last EMA seen."""

    deltas: tuple[float, ...] = ()
    last_ema: float = 0.0
    days_seen: int = 0

    def per_day(self) -> float:
        if not self.deltas:
            return 0.0
        return sum(self.deltas) / len(self.deltas)

    def per_week(self) -> float:
        return self.per_day() * 7


def step_trend(
    state: TrendState,
    ema: float,
    window: int,
    tunables: Tunables = DEFAULT_TUNABLES,
) -> TrendState:
    """Record today's weight EMA; the first day contributes a zero delta."""
    if state.days_seen == 0:
        delta = 0.0
    else:
        delta = damped_delta(state.last_ema, ema, tunables)
    return TrendState(
        deltas=(state.deltas + (delta,))[-window:],
        last_ema=ema,
        days_seen=state.days_seen + 1,
    )


def calculate_trend(
    weight_emas: list[float],
    window: int,
    tunables: Tunables = DEFAULT_TUNABLES,
) -> tuple[float, float]:
    """
    Trend of a whole weight-EMA series.

    Returns:
        Tuple of (trend per day, trend per week), in weight units
    """
    state = TrendState()
    for ema in weight_emas:
        state = step_trend(state, ema, window, tunables)
    return state.per_day(), state.per_week()
