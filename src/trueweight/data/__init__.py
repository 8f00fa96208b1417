"""Log import."""

from trueweight.data.log_loader import load_log_csv, parse_log_csv

__all__ = ["load_log_csv", "parse_log_csv"]
