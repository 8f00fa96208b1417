"""Load daily weight / calorie logs from CSV.

Expected columns, in order: date (YYYY-MM-DD), weight, previous-day
calories. A header row is optional and either measurement may be blank.
Values outside sane ranges are treated as not logged rather than
rejected, so one typo does not lose the rest of the file.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path
from typing import Optional

import pandas as pd

from trueweight.tracking.models import LogEntry

logger = logging.getLogger(__name__)

COLUMNS = ["date", "weight", "calories"]
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Plausible raw values; anything outside is dropped to "missing"
MAX_WEIGHT = 1000.0
MAX_CALORIES = 10000


def _is_header(first_row: list[object]) -> bool:
    cells = [c.lower() for c in first_row if isinstance(c, str)]
    has_date = any("date" in c for c in cells)
    has_value = any("weight" in c or "calories" in c for c in cells)
    return has_date and has_value


def _parse_date(value: object) -> Optional[date]:
    if not isinstance(value, str) or not DATE_PATTERN.match(value.strip()):
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


def _parse_weight(value: object) -> Optional[float]:
    if not isinstance(value, str) or not value.strip():
        return None
    weight = pd.to_numeric(value.strip(), errors="coerce")
    if pd.isna(weight):
        return None
    weight = float(weight)
    if weight <= 0 or weight > MAX_WEIGHT:
        return None
    return weight


def _parse_calories(value: object) -> Optional[int]:
    if not isinstance(value, str) or not value.strip():
        return None
    calories = pd.to_numeric(value.strip(), errors="coerce")
    if pd.isna(calories) or not float(calories).is_integer():
        return None
    calories = int(calories)
    if calories < 0 or calories > MAX_CALORIES:
        return None
    return calories


def parse_log_csv(text: str) -> list[LogEntry]:
    """Parse CSV text into log entries, sorted oldest first.

    Rows without a valid date are skipped. When a date appears more than
    once, the last row wins.

    Args:
        text: CSV content

    Returns:
        List of LogEntry with unique, ascending dates
    """
    lines = pd.Series(text.splitlines(), dtype=object).str.strip()
    lines = lines[lines != ""]
    if lines.empty:
        return []

    # Rows may be ragged: short rows are padded, anything past the
    # calories column (notes, trailing commas) is dropped.
    df = lines.str.split(",", n=len(COLUMNS), expand=True)
    df = df.reindex(columns=range(len(COLUMNS)))
    df.columns = COLUMNS

    rows = df.values.tolist()
    if _is_header(rows[0]):
        rows = rows[1:]

    entries: dict[date, LogEntry] = {}
    skipped = 0
    for raw_date, raw_weight, raw_calories in rows:
        day = _parse_date(raw_date)
        if day is None:
            skipped += 1
            continue
        entries[day] = LogEntry(
            date=day,
            weight=_parse_weight(raw_weight),
            previous_day_calories=_parse_calories(raw_calories),
        )

    if skipped:
        logger.info("Skipped %d rows without a valid YYYY-MM-DD date", skipped)

    return [entries[day] for day in sorted(entries)]


def load_log_csv(path: Path) -> list[LogEntry]:
    """Load a log CSV file.

    Raises:
        FileNotFoundError: If ``path`` does not exist
    """
    if not path.exists():
        raise FileNotFoundError(f"Log file '{path}' not found")
    logger.debug("Loading log entries from %s", path)
    return parse_log_csv(path.read_text(encoding="utf-8"))
