"""Tests for Mifflin-St Jeor BMR and standard TDEE."""

from __future__ import annotations

import pytest

from trueweight.profiles.body_calc import (
    ACTIVITY_MULTIPLIERS,
    ActivityLevel,
    HeightUnit,
    Sex,
    WeightUnit,
    calculate_bmr,
    calculate_standard_tdee,
    calculate_tdee,
    feet_inches_to_height,
    height_to_cm,
    weight_to_kg,
)
from trueweight.tracking.models import UserSettings


class TestCalculateBmr:
    """Tests for calculate_bmr function."""

    def test_male(self) -> None:
        assert calculate_bmr(30, Sex.MALE, 180.0, 80.0) == pytest.approx(1780.0)

    def test_female(self) -> None:
        assert calculate_bmr(30, Sex.FEMALE, 180.0, 80.0) == pytest.approx(1614.0)

    def test_clamped_at_zero(self) -> None:
        assert calculate_bmr(120, Sex.FEMALE, 10.0, 0.0) == 0.0


class TestActivity:
    """Tests for the activity multiplier table."""

    def test_every_level_has_multiplier(self) -> None:
        assert set(ACTIVITY_MULTIPLIERS) == set(ActivityLevel)

    @pytest.mark.parametrize(
        "level,multiplier",
        [
            (ActivityLevel.SEDENTARY, 1.2),
            (ActivityLevel.LIGHT, 1.375),
            (ActivityLevel.MODERATE, 1.55),
            (ActivityLevel.VERY, 1.725),
            (ActivityLevel.EXTRA, 1.9),
        ],
    )
    def test_multipliers(self, level: ActivityLevel, multiplier: float) -> None:
        assert calculate_tdee(1000.0, level) == pytest.approx(1000.0 * multiplier)


class TestUnits:
    """Tests for explicit unit conversion."""

    def test_pounds_to_kg(self) -> None:
        assert weight_to_kg(100.0, WeightUnit.LB) == pytest.approx(45.3592)
        assert weight_to_kg(80.0, WeightUnit.KG) == 80.0

    def test_feet_to_cm(self) -> None:
        assert height_to_cm(5.75, HeightUnit.FT_IN) == pytest.approx(175.26)
        assert height_to_cm(175.0, HeightUnit.CM) == 175.0

    def test_feet_inches(self) -> None:
        assert feet_inches_to_height(5, 9) == pytest.approx(5.75)

    def test_small_cm_height_not_treated_as_feet(self) -> None:
        """Units come from the setting, never from the size of the value."""
        assert height_to_cm(6.0, HeightUnit.CM) == 6.0


class TestStandardTdee:
    """Tests for calculate_standard_tdee function."""

    def test_metric_profile(self) -> None:
        settings = UserSettings(height=180.0, age=30, activity_level="sedentary")
        assert calculate_standard_tdee(settings, 80.0) == pytest.approx(1780.0 * 1.2)

    def test_imperial_matches_metric(self) -> None:
        metric = UserSettings(height=175.26, age=40, sex="female")
        imperial = UserSettings(
            height=5.75,
            age=40,
            sex="female",
            weight_unit=WeightUnit.LB,
            height_unit=HeightUnit.FT_IN,
        )
        pounds = 70.0 / 0.453592
        assert calculate_standard_tdee(imperial, pounds) == pytest.approx(
            calculate_standard_tdee(metric, 70.0)
        )

    def test_zero_weight_is_degenerate_not_error(self) -> None:
        settings = UserSettings()
        expected = (6.25 * 170.0 - 5 * 30 + 5) * 1.375
        assert calculate_standard_tdee(settings, 0.0) == pytest.approx(expected)
