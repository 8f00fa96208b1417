"""CLI interface using Typer."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from trueweight.config import get_settings, reload_settings
from trueweight.config.settings import Settings, default_config_path

app = typer.Typer(
    help="Adaptive weight trend and TDEE tracking",
    no_args_is_help=True,
)
console = Console()

config_app = typer.Typer(help="Show or create the settings file")
app.add_typer(config_app, name="config")


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: dict, file=None) -> None:
    """Output JSON response to stdout or file."""
    json_str = json.dumps(response, indent=2)
    if file:
        file.write(json_str)
    else:
        print(json_str)


def fail(command: str, message: str, json_output: bool) -> None:
    """Report an error and exit with status 1."""
    if json_output:
        output_json({"success": False, "command": command, "errors": [message]})
    else:
        console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def load_settings(command: str, config_path: Optional[Path], json_output: bool) -> Settings:
    """Load settings from --config or the default location."""
    try:
        if config_path is not None:
            return reload_settings(config_path)
        return get_settings()
    except ValueError as e:
        fail(command, f"Invalid settings: {e}", json_output)


def load_entries(command: str, log_path: Optional[Path], settings: Settings, json_output: bool):
    """Resolve the log path (argument or config default) and load it."""
    from trueweight.data.log_loader import load_log_csv

    path = log_path or settings.defaults.log_path
    if path is None:
        fail(command, "No log file given and no defaults.log_path configured", json_output)
    try:
        return load_log_csv(path)  # type: ignore[arg-type]
    except FileNotFoundError as e:
        fail(command, str(e), json_output)
    except ValueError as e:
        fail(command, f"Could not read log file: {e}", json_output)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Adaptive weight trend and TDEE tracking."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


# ============================================================================
# Status Commands
# ============================================================================


@app.command("status")
def status(
    log_path: Optional[Path] = typer.Argument(None, help="Log CSV (date,weight,calories)"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings YAML"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show true weight, trend and both TDEE estimates."""
    from trueweight.export.formatters import JSONFormatter, TableFormatter
    from trueweight.tracking.engine import compute_status

    settings = load_settings("status", config_path, json_output)
    entries = load_entries("status", log_path, settings, json_output)
    result = compute_status(entries, settings.user, settings.tunables)

    if json_output:
        output_json({
            "success": True,
            "command": "status",
            "data": JSONFormatter().status_data(result, settings.user, len(entries)),
            "human_summary": (
                f"True weight {result.true_weight:.1f} {settings.user.weight_unit.value}, "
                f"TDEE {result.estimated_tdee_algo:.0f} kcal/day, "
                f"target {result.target_calories_algo:.0f} kcal/day"
            ),
        })
    else:
        TableFormatter(console).format_status(result, settings.user)


@app.command("history")
def history(
    log_path: Optional[Path] = typer.Argument(None, help="Log CSV (date,weight,calories)"),
    days: Optional[int] = typer.Option(None, "--days", "-d", help="Only show the last N days"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings YAML"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the engine output for every logged day."""
    from trueweight.export.formatters import TableFormatter
    from trueweight.tracking.engine import compute_history

    settings = load_settings("history", config_path, json_output)
    entries = load_entries("history", log_path, settings, json_output)
    results = compute_history(entries, settings.user, settings.tunables)

    if days is not None:
        entries = entries[-days:] if days > 0 else []
        results = results[-days:] if days > 0 else []

    if not entries:
        if json_output:
            output_json({"success": True, "command": "history", "data": {"entries": []},
                         "human_summary": "No log entries found"})
        else:
            console.print("No log entries found")
        return

    if json_output:
        output_json({
            "success": True,
            "command": "history",
            "data": {
                "entries": [
                    {"date": entry.date.isoformat(), **result.to_dict()}
                    for entry, result in zip(entries, results)
                ]
            },
            "human_summary": f"{len(entries)} days",
        })
    else:
        TableFormatter(console).format_history(entries, results, settings.user)


@app.command("stats")
def stats(
    log_path: Optional[Path] = typer.Argument(None, help="Log CSV (date,weight,calories)"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings YAML"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show how consistently weight and calories have been logged."""
    from datetime import date

    from trueweight.export.formatters import JSONFormatter, TableFormatter
    from trueweight.tracking.stats import logging_stats

    settings = load_settings("stats", config_path, json_output)
    entries = load_entries("stats", log_path, settings, json_output)
    result = logging_stats(entries, date.today())

    if json_output:
        output_json({
            "success": True,
            "command": "stats",
            "data": JSONFormatter().stats_data(result),
            "human_summary": (
                f"{result.total_days} days logged, {result.complete_data_pct:.0f}% complete, "
                f"current streak {result.current_streak} days"
            ),
        })
    else:
        TableFormatter(console).format_stats(result)


@app.command("export")
def export(
    log_path: Optional[Path] = typer.Argument(None, help="Log CSV (date,weight,calories)"),
    fmt: str = typer.Option("json", "--format", "-f", help="Export format: csv or json"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to file"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings YAML"),
) -> None:
    """Export the log (csv) or the per-day engine output (json)."""
    from trueweight.export.formatters import export_basic_csv, export_detailed_json

    settings = load_settings("export", config_path, False)
    entries = load_entries("export", log_path, settings, False)

    if fmt == "csv":
        data = export_basic_csv(entries, settings.user)
    elif fmt == "json":
        data = export_detailed_json(entries, settings.user)
    else:
        fail("export", f"Unknown format '{fmt}', expected 'csv' or 'json'", False)

    if output:
        output.write_text(data)
        console.print(f"[green]Exported {len(entries)} days to {output}[/green]")
    else:
        print(data, end="" if data.endswith("\n") else "\n")


# ============================================================================
# Config Commands
# ============================================================================


@config_app.command("show")
def config_show(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings YAML"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Print the effective settings."""
    import yaml

    settings = load_settings("config show", config_path, json_output)

    if json_output:
        output_json({"success": True, "command": "config show", "data": settings.to_dict()})
    else:
        console.print(yaml.dump(settings.to_dict(), default_flow_style=False, sort_keys=False))


@config_app.command("init")
def config_init(
    path: Optional[Path] = typer.Option(None, "--path", "-p", help="Where to write (default: ~/.trueweight/config.yaml)"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write a settings file with default values."""
    target = path or default_config_path()
    if target.exists() and not force:
        console.print(f"[yellow]{target} already exists (use --force to overwrite)[/yellow]")
        raise typer.Exit(1)

    written = Settings().save(target)
    console.print(f"[green]Wrote default settings to {written}[/green]")


@config_app.command("reset-algorithm")
def config_reset_algorithm(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Settings YAML"),
) -> None:
    """Reset the smoothing parameters to defaults, keeping the profile."""
    target = config_path or default_config_path()
    settings = load_settings("config reset-algorithm", target, False)
    settings.reset_algorithm()
    written = settings.save(target)
    console.print(f"[green]Reset algorithm parameters in {written}[/green]")


if __name__ == "__main__":
    app()
