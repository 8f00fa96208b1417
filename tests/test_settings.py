"""Tests for YAML settings."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from trueweight.config.settings import Settings, parse_user_settings
from trueweight.profiles.body_calc import ActivityLevel, HeightUnit, Sex, WeightUnit
from trueweight.tracking.constants import Tunables
from trueweight.tracking.models import UserSettings


def write_config(path: Path, data: dict) -> Path:
    path.write_text(yaml.dump(data))
    return path


class TestSettingsLoad:
    """Tests for Settings.load."""

    def test_missing_file_defaults(self, tmp_path: Path) -> None:
        settings = Settings.load(tmp_path / "missing.yaml")
        assert settings.user == UserSettings()
        assert settings.tunables == Tunables()
        assert settings.defaults.log_path is None

    def test_empty_file_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert Settings.load(path).user == UserSettings()

    def test_profile_section(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "config.yaml", {
            "profile": {
                "height": 5.75,
                "age": 41,
                "sex": "female",
                "activity_level": "moderate",
                "weight_unit": "lb",
                "height_unit": "ft_in",
                "goal_rate": 0.5,
            },
        })
        user = Settings.load(path).user
        assert user.height == 5.75
        assert user.age == 41
        assert user.sex is Sex.FEMALE
        assert user.activity_level is ActivityLevel.MODERATE
        assert user.weight_unit is WeightUnit.LB
        assert user.height_unit is HeightUnit.FT_IN
        assert user.goal_rate == 0.5

    def test_tunables_and_defaults_sections(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "config.yaml", {
            "tunables": {"blend_decay": 0.9, "unknown": 3},
            "defaults": {"log_path": "~/weight.csv", "output_format": "json"},
        })
        settings = Settings.load(path)
        assert settings.tunables.blend_decay == 0.9
        assert settings.defaults.log_path == Path("~/weight.csv").expanduser()
        assert settings.defaults.output_format == "json"

    def test_invalid_enum(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "config.yaml", {"profile": {"sex": "robot"}})
        with pytest.raises(ValueError, match="sex"):
            Settings.load(path)


class TestSettingsSave:
    """Tests for Settings.save."""

    def test_round_trip(self, tmp_path: Path) -> None:
        original = Settings(
            user=UserSettings(age=52, sex=Sex.FEMALE, goal_rate=0.25, weight_alpha=0.2),
            tunables=Tunables(calorie_window_days=14),
        )
        original.defaults.log_path = tmp_path / "log.csv"

        path = original.save(tmp_path / "nested" / "config.yaml")
        assert path.exists()
        assert Settings.load(path) == original


class TestParseUserSettings:
    """Tests for parse_user_settings clamping."""

    def test_alpha_clamped_into_range(self) -> None:
        user = parse_user_settings(algorithm={"weight_alpha": 0.9, "weight_alpha_max": 0.3})
        assert user.weight_alpha == 0.3

    def test_min_not_above_max(self) -> None:
        user = parse_user_settings(
            algorithm={"calorie_alpha_min": 0.4, "calorie_alpha_max": 0.2, "calorie_alpha": 0.1}
        )
        assert user.calorie_alpha_min == 0.4
        assert user.calorie_alpha_max == 0.4
        assert user.calorie_alpha == 0.4

    def test_alpha_bounds_open_interval(self) -> None:
        user = parse_user_settings(algorithm={"weight_alpha_min": 0.0, "weight_alpha_max": 1.0})
        assert user.weight_alpha_min == 0.001
        assert user.weight_alpha_max == 0.999

    def test_trend_days_clamped(self) -> None:
        assert parse_user_settings(algorithm={"trend_smoothing_days": 100}).trend_smoothing_days == 30
        assert parse_user_settings(algorithm={"trend_smoothing_days": 0}).trend_smoothing_days == 1


class TestResetAlgorithm:
    """Tests for Settings.reset_algorithm."""

    def test_keeps_profile(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "config.yaml", {
            "profile": {"age": 45, "sex": "female", "goal_rate": 0.5},
            "algorithm": {"weight_alpha": 0.2, "calorie_alpha_max": 0.5, "trend_smoothing_days": 14},
            "tunables": {"blend_decay": 0.9},
        })
        settings = Settings.load(path)
        settings.reset_algorithm()

        defaults = UserSettings()
        assert settings.user.weight_alpha == defaults.weight_alpha
        assert settings.user.calorie_alpha_max == defaults.calorie_alpha_max
        assert settings.user.trend_smoothing_days == defaults.trend_smoothing_days
        assert settings.user.age == 45
        assert settings.user.sex is Sex.FEMALE
        assert settings.user.goal_rate == 0.5
        assert settings.tunables.blend_decay == 0.9
