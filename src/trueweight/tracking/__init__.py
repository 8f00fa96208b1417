"""Weight and energy tracking engine.

Turns a daily log of body weight and calorie intake into a smoothed
"true" weight, a weight trend, a smoothed intake and two TDEE estimates
(data-driven and Mifflin-St Jeor), plus calorie targets for a goal rate.

Key components:
- Adaptive-gain EMA smoothers for weight and calories
- Outlier-damped weight trend
- Energy-balance TDEE with cold-start blending
- Step-function engine with explicit, checkpointable state
- Logging-consistency statistics (complete days, streaks)
"""

from __future__ import annotations

from trueweight.tracking.constants import DEFAULT_TUNABLES, Tunables
from trueweight.tracking.engine import (
    EngineState,
    compute_history,
    compute_status,
    initial_state,
    step,
)
from trueweight.tracking.models import CalculationResult, LogEntry, UserSettings
from trueweight.tracking.stats import LoggingStats, logging_stats

__all__ = [
    "CalculationResult",
    "DEFAULT_TUNABLES",
    "EngineState",
    "LogEntry",
    "LoggingStats",
    "Tunables",
    "UserSettings",
    "compute_history",
    "compute_status",
    "initial_state",
    "logging_stats",
    "step",
]
