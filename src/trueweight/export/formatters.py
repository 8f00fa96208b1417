"""Output formatters for engine results and log exports."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Optional

import pandas as pd
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from trueweight import __version__
from trueweight.tracking.engine import compute_history
from trueweight.tracking.models import CalculationResult, LogEntry, UserSettings
from trueweight.tracking.stats import LoggingStats


def _positive_or_none(value: float) -> Optional[float]:
    return value if value > 0 else None


class TableFormatter:
    """Format results as Rich tables for terminal display."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the formatter.

        Args:
            console: Rich console for output. If None, creates a new one.
        """
        self.console = console or Console()

    def format_status(self, result: CalculationResult, settings: UserSettings) -> None:
        """Print the current status panel.

        Args:
            result: Latest engine result
            settings: Settings used (for units and goal rate)
        """
        unit = settings.weight_unit.value
        if result.true_weight <= 0:
            self.console.print("[yellow]Not enough data yet: log a weight to get started.[/yellow]")

        lines = [
            f"True weight:      [bold]{result.true_weight:.1f} {unit}[/bold]",
            f"Trend:            {result.weight_trend_per_week:+.2f} {unit}/week",
            f"Average intake:   {result.average_calories:.0f} kcal/day",
        ]
        self.console.print(Panel("\n".join(lines), title="Weight"))

        tdee_table = Table(title=f"Total Daily Energy Expenditure (goal {settings.goal_rate:+.2f}%/week)")
        tdee_table.add_column("Model")
        tdee_table.add_column("TDEE", justify="right")
        tdee_table.add_column("Target", justify="right", style="green")
        tdee_table.add_row(
            "Adaptive",
            f"{result.estimated_tdee_algo:.0f}",
            f"{result.target_calories_algo:.0f}",
        )
        tdee_table.add_row(
            "Mifflin-St Jeor",
            f"{result.estimated_tdee_standard:.0f}",
            f"{result.target_calories_standard:.0f}",
        )
        tdee_table.add_row(
            "[dim]Difference[/dim]",
            f"[dim]{result.delta_tdee:+.0f}[/dim]",
            f"[dim]{result.delta_target:+.0f}[/dim]",
        )
        self.console.print(tdee_table)

        self.console.print(
            f"[dim]alpha weight {result.current_alpha_weight:.3f} | "
            f"alpha calories {result.current_alpha_calorie:.3f} | "
            f"formula blend {result.tdee_blend_factor_used:.2f}[/dim]"
        )

    def format_history(
        self,
        entries: list[LogEntry],
        results: list[CalculationResult],
        settings: UserSettings,
    ) -> None:
        """Print one row per day."""
        unit = settings.weight_unit.value
        table = Table(title="Daily History")
        table.add_column("Date", style="cyan")
        table.add_column("Weight", justify="right")
        table.add_column("True", justify="right", style="blue")
        table.add_column(f"{unit}/wk", justify="right")
        table.add_column("Calories", justify="right")
        table.add_column("Avg", justify="right", style="blue")
        table.add_column("TDEE", justify="right")
        table.add_column("Target", justify="right", style="green")

        for entry, result in zip(entries, results):
            table.add_row(
                entry.date.isoformat(),
                f"{entry.weight:.1f}" if entry.weight is not None else "-",
                f"{result.true_weight:.1f}",
                f"{result.weight_trend_per_week:+.2f}",
                str(entry.previous_day_calories) if entry.previous_day_calories is not None else "-",
                f"{result.average_calories:.0f}",
                f"{result.estimated_tdee_algo:.0f}",
                f"{result.target_calories_algo:.0f}",
            )

        self.console.print(table)

    def format_stats(self, stats: LoggingStats) -> None:
        """Print logging consistency."""
        table = Table(title="Logging Consistency", show_header=False)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Days logged", str(stats.total_days))
        table.add_row("Days with weight", str(stats.days_with_weight))
        table.add_row("Days with calories", str(stats.days_with_calories))
        table.add_row("Complete days", f"{stats.complete_data_pct:.1f}%")
        table.add_row("Longest streak", f"{stats.longest_streak} days")
        table.add_row("Current streak", f"[green]{stats.current_streak} days[/green]")

        self.console.print(table)


class JSONFormatter:
    """Build the ``data`` payloads of the CLI's JSON envelopes."""

    def status_data(
        self,
        result: CalculationResult,
        settings: UserSettings,
        days: int,
    ) -> dict[str, Any]:
        """Return the status payload for a single result.

        Args:
            result: Latest engine result
            settings: Settings used (for units and goal rate)
            days: Number of logged days behind the result

        Returns:
            JSON-serializable dict
        """
        return {
            "timestamp": datetime.now().isoformat(),
            "days": days,
            "weight_unit": settings.weight_unit.value,
            "goal_rate": settings.goal_rate,
            **{key: round(value, 4) for key, value in result.to_dict().items()},
        }

    def stats_data(self, stats: LoggingStats) -> dict[str, Any]:
        """Return the logging statistics payload."""
        data = stats.to_dict()
        data["complete_data_pct"] = round(stats.complete_data_pct, 1)
        return data


def results_to_frame(
    entries: list[LogEntry],
    results: list[CalculationResult],
) -> pd.DataFrame:
    """Per-day series as a DataFrame indexed by date."""
    records = []
    for entry, result in zip(entries, results):
        record: dict[str, Any] = {
            "date": entry.date,
            "raw_weight": entry.weight,
            "raw_calories": entry.previous_day_calories,
        }
        record.update(result.to_dict())
        records.append(record)
    return pd.DataFrame.from_records(records, index="date") if records else pd.DataFrame()


def export_basic_csv(entries: list[LogEntry], settings: UserSettings) -> str:
    """Raw log as CSV, oldest first, with the weight unit in the header."""
    ordered = sorted(entries, key=lambda e: e.date)
    df = pd.DataFrame({
        "Date": [e.date.isoformat() for e in ordered],
        f"Weight ({settings.weight_unit.value})": pd.array(
            [e.weight for e in ordered], dtype="Float64"
        ),
        "PreviousDayCalories (kcal)": pd.array(
            [e.previous_day_calories for e in ordered], dtype="Int64"
        ),
    })
    return df.to_csv(index=False, lineterminator="\n")


def export_detailed_json(entries: list[LogEntry], settings: UserSettings) -> str:
    """Per-day engine output plus a settings snapshot, as JSON.

    Every record is what the engine reported on that day given only the
    entries up to and including it.
    """
    ordered = sorted(entries, key=lambda e: e.date)
    results = compute_history(ordered, settings)
    unit = settings.weight_unit.value

    log_data = []
    for entry, result in zip(ordered, results):
        log_data.append({
            "Date": entry.date.isoformat(),
            "RawWeight": entry.weight,
            "WeightUnit": unit,
            "RawPreviousDayCalories": entry.previous_day_calories,
            "WeightEMA": _positive_or_none(result.true_weight),
            "CalorieEMA": _positive_or_none(result.average_calories),
            "SmoothedTrend_unit_per_week": result.weight_trend_per_week,
            "TrendUnit": f"{unit}/week",
            "EstimatedTDEE_Algo": _positive_or_none(result.estimated_tdee_algo),
            "EstimatedTDEE_Standard": _positive_or_none(result.estimated_tdee_standard),
            "TargetCalories_Algo": _positive_or_none(result.target_calories_algo),
            "TargetCalories_Standard": _positive_or_none(result.target_calories_standard),
            "AlphaWeight_Used": result.current_alpha_weight,
            "AlphaCalorie_Used": result.current_alpha_calorie,
            "GoalRate_Set_for_Day": settings.goal_rate,
            "TDEE_BlendFactor_Used": result.tdee_blend_factor_used,
        })

    data = {
        "exportDate": datetime.now().isoformat(),
        "exportAppVersion": __version__,
        "settingsSnapshot": settings.to_dict(),
        "logData": log_data,
    }
    return json.dumps(data, indent=2)
