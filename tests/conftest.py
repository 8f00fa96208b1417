"""Pytest fixtures for trueweight tests."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Callable, Optional

import pytest

from trueweight.tracking.models import LogEntry, UserSettings

HistoryFactory = Callable[..., list[LogEntry]]


@pytest.fixture
def settings() -> UserSettings:
    """Default settings: 170 cm, 30 y, male, light activity, kg."""
    return UserSettings()


@pytest.fixture
def make_history() -> HistoryFactory:
    """Build consecutive daily entries from weight / calorie lists."""

    def _make(
        weights: list[Optional[float]],
        calories: Optional[list[Optional[int]]] = None,
        start: date = date(2025, 1, 1),
    ) -> list[LogEntry]:
        if calories is None:
            calories = [None] * len(weights)
        return [
            LogEntry(
                date=start + timedelta(days=i),
                weight=weight,
                previous_day_calories=kcal,
            )
            for i, (weight, kcal) in enumerate(zip(weights, calories))
        ]

    return _make
