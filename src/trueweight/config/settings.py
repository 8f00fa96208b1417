"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from trueweight.tracking.constants import Tunables
from trueweight.tracking.models import UserSettings

PROFILE_KEYS = (
    "height",
    "age",
    "sex",
    "activity_level",
    "weight_unit",
    "height_unit",
    "goal_rate",
)
ALGORITHM_KEYS = (
    "weight_alpha",
    "weight_alpha_min",
    "weight_alpha_max",
    "calorie_alpha",
    "calorie_alpha_min",
    "calorie_alpha_max",
    "trend_smoothing_days",
)

ALPHA_FLOOR = 0.001
ALPHA_CEILING = 0.999
TREND_DAYS_RANGE = (1, 30)


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".trueweight"


def default_config_path() -> Path:
    return _default_config_dir() / "config.yaml"


def _constrain(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _alpha_family(data: dict[str, Any], prefix: str, defaults: UserSettings) -> dict[str, float]:
    """Read alpha / alpha_min / alpha_max and force min <= alpha <= max."""
    alpha = float(data.get(f"{prefix}_alpha", getattr(defaults, f"{prefix}_alpha")))
    low = float(data.get(f"{prefix}_alpha_min", getattr(defaults, f"{prefix}_alpha_min")))
    high = float(data.get(f"{prefix}_alpha_max", getattr(defaults, f"{prefix}_alpha_max")))

    low = _constrain(low, ALPHA_FLOOR, ALPHA_CEILING)
    high = _constrain(high, low, ALPHA_CEILING)
    alpha = _constrain(alpha, low, high)
    return {
        f"{prefix}_alpha": alpha,
        f"{prefix}_alpha_min": low,
        f"{prefix}_alpha_max": high,
    }


def parse_user_settings(
    profile: Optional[dict[str, Any]] = None,
    algorithm: Optional[dict[str, Any]] = None,
) -> UserSettings:
    """Build UserSettings from the ``profile`` and ``algorithm`` config sections.

    Missing keys take their defaults. Algorithm parameters are clamped into
    their legal ranges; unknown enum values raise ValueError.
    """
    profile = profile or {}
    algorithm = algorithm or {}
    defaults = UserSettings()

    kwargs: dict[str, Any] = {key: profile[key] for key in PROFILE_KEYS if profile.get(key) is not None}
    if "height" in kwargs:
        kwargs["height"] = float(kwargs["height"])
    if "age" in kwargs:
        kwargs["age"] = int(kwargs["age"])
    if "goal_rate" in kwargs:
        kwargs["goal_rate"] = float(kwargs["goal_rate"])

    kwargs.update(_alpha_family(algorithm, "weight", defaults))
    kwargs.update(_alpha_family(algorithm, "calorie", defaults))

    trend_days = int(algorithm.get("trend_smoothing_days", defaults.trend_smoothing_days))
    kwargs["trend_smoothing_days"] = int(_constrain(trend_days, *TREND_DAYS_RANGE))

    return UserSettings(**kwargs)


@dataclass
class DefaultsConfig:
    """Default values for CLI operations."""

    log_path: Optional[Path] = None
    output_format: str = "table"  # "table", "json"


@dataclass
class Settings:
    """Main application settings."""

    user: UserSettings = field(default_factory=UserSettings)
    tunables: Tunables = field(default_factory=Tunables)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.trueweight/config.yaml

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = default_config_path()

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls()

        settings.user = parse_user_settings(
            data.get("profile"), data.get("algorithm")
        )

        if "tunables" in data:
            settings.tunables = Tunables.from_dict(data["tunables"] or {})

        # Parse defaults
        if "defaults" in data:
            def_data = data["defaults"] or {}
            if def_data.get("log_path"):
                settings.defaults.log_path = Path(def_data["log_path"]).expanduser()
            if "output_format" in def_data:
                settings.defaults.output_format = def_data["output_format"]

        return settings

    def to_dict(self) -> dict[str, Any]:
        """Settings in the YAML file layout."""
        user = self.user.to_dict()
        return {
            "profile": {key: user[key] for key in PROFILE_KEYS},
            "algorithm": {key: user[key] for key in ALGORITHM_KEYS},
            "tunables": self.tunables.to_dict(),
            "defaults": {
                "log_path": str(self.defaults.log_path) if self.defaults.log_path else None,
                "output_format": self.defaults.output_format,
            },
        }

    def reset_algorithm(self) -> None:
        """Restore the algorithm section to defaults, keeping the profile."""
        defaults = UserSettings()
        self.user = self.user.copy_with(
            **{key: getattr(defaults, key) for key in ALGORITHM_KEYS}
        )

    def save(self, config_path: Optional[Path] = None) -> Path:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.trueweight/config.yaml

        Returns:
            Path written
        """
        if config_path is None:
            config_path = default_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

        return config_path


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings(config_path: Optional[Path] = None) -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load(config_path)
    return _settings
