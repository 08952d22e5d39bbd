"""Tests for target calculation."""

from uuid import uuid4

import pytest

from fittrack.domain.models import UserProfile
from fittrack.services.targets import (
    MIN_TARGET_CALORIES,
    TargetCalculator,
    base_calories,
    calculate_bmr,
    calorie_adjustment,
)


def _profile(**values: object) -> UserProfile:
    return UserProfile(id=uuid4(), **values)


def test_male_profile_without_goal() -> None:
    profile = _profile(age=30, gender="male", weight_kg=80, height_cm=180)

    targets = TargetCalculator().calculate(profile)

    assert calculate_bmr(80, 180, 30, "male") == 1780
    assert targets.calories.target == 2759
    assert targets.calories.adjustment == 0
    assert targets.calories.base_source == "mifflin_st_jeor"
    assert targets.protein_g == 160
    assert targets.fat_g == 80
    assert targets.carbs_g == 350


def test_female_bmr_uses_lower_constant() -> None:
    profile = _profile(age=25, gender="female", weight_kg=60, height_cm=165)

    assert calculate_bmr(60, 165, 25, "female") == pytest.approx(1345.25)
    assert base_calories(profile) == (2085, "mifflin_st_jeor")


def test_gain_goal_adds_surplus_to_override() -> None:
    profile = _profile(
        weight_kg=70, weight_goal_kg=75, weekly_rate_kg=0.5, daily_calorie_target=2000
    )

    targets = TargetCalculator().calculate(profile)

    assert targets.calories.adjustment == 550
    assert targets.calories.base == 2000
    assert targets.calories.base_source == "override"
    assert targets.calories.target == 2550


def test_loss_goal_subtracts_deficit() -> None:
    profile = _profile(weight_kg=90, weight_goal_kg=80, weekly_rate_kg=0.25)

    assert calorie_adjustment(profile) == -275


def test_adjustment_is_zero_without_goal_or_weight() -> None:
    assert calorie_adjustment(_profile(weight_kg=80)) == 0
    assert calorie_adjustment(_profile(weight_goal_kg=70)) == 0


def test_target_never_drops_below_floor() -> None:
    profile = _profile(
        weight_kg=100, weight_goal_kg=50, weekly_rate_kg=1.0, daily_calorie_target=1300
    )

    targets = TargetCalculator().calculate(profile)

    assert targets.calories.adjustment == -1100
    assert targets.calories.target == MIN_TARGET_CALORIES


def test_carbs_never_negative() -> None:
    profile = _profile(weight_kg=300, daily_calorie_target=1200)

    targets = TargetCalculator().calculate(profile)

    assert targets.protein_g * 4 + targets.fat_g * 9 > targets.calories.target
    assert targets.carbs_g == 0


def test_incomplete_profile_uses_gender_defaults() -> None:
    assert base_calories(_profile(gender="male")) == (2500, "gender_default")
    assert base_calories(_profile(gender="female", age=40)) == (
        2000,
        "gender_default",
    )
    assert base_calories(_profile()) == (2000, "gender_default")


def test_weight_policy_falls_back_to_reference_weight() -> None:
    targets = TargetCalculator().calculate(_profile())

    assert targets.calories.target == 2000
    assert targets.protein_g == 140
    assert targets.fat_g == 70
    assert targets.carbs_g == 203


def test_percentage_policy() -> None:
    targets = TargetCalculator(macro_policy="percentage").calculate(
        _profile(weight_kg=80, daily_calorie_target=2000)
    )

    assert targets.macro_policy == "percentage"
    assert targets.protein_g == 150
    assert targets.carbs_g == 225
    assert targets.fat_g == 56


def test_unknown_macro_policy_rejected() -> None:
    with pytest.raises(ValueError, match="macro policy"):
        TargetCalculator(macro_policy="keto")


def test_calculation_is_deterministic() -> None:
    profile = _profile(age=45, gender="other", weight_kg=72.5, height_cm=168)
    calculator = TargetCalculator()

    assert calculator.calculate(profile) == calculator.calculate(profile)
