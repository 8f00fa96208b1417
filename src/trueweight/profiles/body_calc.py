"""Standard-formula energy expenditure.

Calculates BMR with the Mifflin-St Jeor equation and scales it to TDEE
(Total Daily Energy Expenditure) with the usual activity multipliers.

Units are never guessed from the magnitude of a value: the caller says
whether weight is in kg or lb and whether height is in cm or feet.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from trueweight.tracking.models import UserSettings


class Sex(Enum):
    """Biological sex for BMR calculation."""
    MALE = "male"
    FEMALE = "female"


class ActivityLevel(Enum):
    """Activity level multipliers for TDEE calculation."""
    SEDENTARY = "sedentary"          # Little or no exercise
    LIGHT = "light"                  # Light exercise 1-3 days/week
    MODERATE = "moderate"            # Moderate exercise 3-5 days/week
    VERY = "very"                    # Hard exercise 6-7 days/week
    EXTRA = "extra"                  # Very hard exercise, physical job


class WeightUnit(Enum):
    """Unit the user logs body weight in."""
    KG = "kg"
    LB = "lb"


class HeightUnit(Enum):
    """Unit the profile height is stored in."""
    CM = "cm"
    FT_IN = "ft_in"                  # Stored as decimal feet


# Activity level multipliers (Harris-Benedict activity factors)
ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.VERY: 1.725,
    ActivityLevel.EXTRA: 1.9,
}

# Mifflin-St Jeor sex offset (kcal/day)
SEX_OFFSETS = {
    Sex.MALE: 5.0,
    Sex.FEMALE: -161.0,
}

KG_PER_LB = 0.453592
CM_PER_FOOT = 30.48
INCHES_PER_FOOT = 12.0


def feet_inches_to_height(feet: int, inches: float = 0.0) -> float:
    """Express a feet + inches height as decimal feet.

    >>> feet_inches_to_height(5, 9)
    5.75
    """
    return feet + inches / INCHES_PER_FOOT


def weight_to_kg(weight: float, unit: WeightUnit) -> float:
    """Convert a body weight in ``unit`` to kilograms."""
    if unit is WeightUnit.LB:
        return weight * KG_PER_LB
    return weight


def height_to_cm(height: float, unit: HeightUnit) -> float:
    """Convert a profile height in ``unit`` to centimetres."""
    if unit is HeightUnit.FT_IN:
        return height * CM_PER_FOOT
    return height


def calculate_bmr(
    age: int,
    sex: Sex,
    height_cm: float,
    weight_kg: float,
) -> float:
    """Calculate Basal Metabolic Rate using Mifflin-St Jeor equation.

    Args:
        age: Age in years
        sex: Biological sex
        height_cm: Height in centimetres
        weight_kg: Weight in kilograms

    Returns:
        BMR in calories per day, never negative
    """
    bmr = (10 * weight_kg) + (6.25 * height_cm) - (5 * age) + SEX_OFFSETS[sex]
    return max(0.0, bmr)


def calculate_tdee(
    bmr: float,
    activity_level: ActivityLevel,
) -> float:
    """Calculate Total Daily Energy Expenditure.

    Args:
        bmr: Basal Metabolic Rate
        activity_level: Activity level

    Returns:
        TDEE in calories per day
    """
    multiplier = ACTIVITY_MULTIPLIERS[activity_level]
    return bmr * multiplier


def calculate_standard_tdee(settings: UserSettings, weight: float) -> float:
    """TDEE from the profile in ``settings`` at the given body weight.

    ``weight`` is in the user's weight unit. A zero weight is accepted and
    yields the (degenerate) height/age-only value.
    """
    weight_kg = weight_to_kg(weight, settings.weight_unit)
    height_cm = height_to_cm(settings.height, settings.height_unit)
    bmr = calculate_bmr(settings.age, settings.sex, height_cm, weight_kg)
    return calculate_tdee(bmr, settings.activity_level)
