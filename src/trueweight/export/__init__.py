"""Output formatters and log exports."""

from trueweight.export.formatters import (
    JSONFormatter,
    TableFormatter,
    export_basic_csv,
    export_detailed_json,
    results_to_frame,
)

__all__ = [
    "JSONFormatter",
    "TableFormatter",
    "export_basic_csv",
    "export_detailed_json",
    "results_to_frame",
]
