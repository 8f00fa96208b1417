"""Tests for the CSV log loader."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from trueweight.data.log_loader import load_log_csv, parse_log_csv

SAMPLE_CSV = """date,weight,calories
2025-01-03,80.1,2400
2025-01-01,80.5,2500
not-a-date,80,2000
2025-02-30,80,2000
2025-01-02,,2300
2025-01-01,80.7,
2025-01-04,1500,-5
2025-01-05,abc,2500.5
"""


class TestParseLogCsv:
    """Tests for parse_log_csv function."""

    @pytest.fixture
    def entries(self):
        return {entry.date: entry for entry in parse_log_csv(SAMPLE_CSV)}

    def test_sorted_unique_dates(self) -> None:
        dates = [entry.date for entry in parse_log_csv(SAMPLE_CSV)]
        assert dates == [date(2025, 1, d) for d in range(1, 6)]

    def test_invalid_dates_skipped(self, entries) -> None:
        """Malformed and impossible calendar dates are dropped."""
        assert len(entries) == 5

    def test_last_duplicate_wins(self, entries) -> None:
        first = entries[date(2025, 1, 1)]
        assert first.weight == 80.7
        assert first.previous_day_calories is None

    def test_blank_weight_is_missing(self, entries) -> None:
        second = entries[date(2025, 1, 2)]
        assert second.weight is None
        assert second.previous_day_calories == 2300

    def test_out_of_range_values_missing(self, entries) -> None:
        fourth = entries[date(2025, 1, 4)]
        assert fourth.weight is None
        assert fourth.previous_day_calories is None

    def test_non_numeric_and_fractional_missing(self, entries) -> None:
        fifth = entries[date(2025, 1, 5)]
        assert fifth.weight is None
        assert fifth.previous_day_calories is None

    def test_without_header(self) -> None:
        entries = parse_log_csv("2025-01-01,80.5,2500\n2025-01-02,80.4,2450\n")
        assert len(entries) == 2
        assert entries[1].weight == 80.4
        assert entries[1].previous_day_calories == 2450

    def test_short_first_row(self) -> None:
        """A first row without the calories field does not fix the width."""
        entries = parse_log_csv("2025-01-01,80\n2025-01-02,80.2,2000\n")
        assert len(entries) == 2
        assert entries[0].weight == 80.0
        assert entries[0].previous_day_calories is None
        assert entries[1].previous_day_calories == 2000

    def test_extra_fields_dropped(self) -> None:
        entries = parse_log_csv(
            "date,weight,calories\n2025-01-01,80,2000\n2025-01-02,80.2,2100,felt bloated\n"
        )
        assert len(entries) == 2
        assert entries[1].weight == 80.2
        assert entries[1].previous_day_calories == 2100

    def test_date_only_row(self) -> None:
        entries = parse_log_csv("2025-01-01\n")
        assert entries[0].weight is None
        assert entries[0].previous_day_calories is None

    def test_whitespace_and_crlf(self) -> None:
        entries = parse_log_csv("2025-01-01, 80.5 , 2500\r\n\r\n2025-01-02,80.4,\r\n")
        assert entries[0].weight == 80.5
        assert entries[0].previous_day_calories == 2500
        assert entries[1].previous_day_calories is None

    def test_empty_text(self) -> None:
        assert parse_log_csv("") == []
        assert parse_log_csv("  \n") == []

    def test_header_only(self) -> None:
        assert parse_log_csv("date,weight,calories\n") == []


class TestLoadLogCsv:
    """Tests for load_log_csv function."""

    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "log.csv"
        path.write_text(SAMPLE_CSV)
        assert len(load_log_csv(path)) == 5

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_log_csv(tmp_path / "missing.csv")
