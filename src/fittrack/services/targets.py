"""Daily calorie and macro target calculation.

Targets never fail to compute: each missing input falls back to a rougher
estimate, and the path taken is recorded on the returned ``CalorieTarget``.
"""

from dataclasses import dataclass

from fittrack.domain.models import DEFAULT_WEEKLY_RATE_KG, UserProfile
from fittrack.domain.nutrition import round_half_up
from fittrack.domain.stats import CalorieTarget, NutritionTargets

ACTIVITY_MULTIPLIER = 1.55
KCAL_PER_KG = 7700
MIN_TARGET_CALORIES = 1200
DEFAULT_CALORIES = {"male": 2500}
FALLBACK_CALORIES = 2000
REFERENCE_WEIGHT_KG = 70.0

MACRO_POLICIES = ("weight", "percentage")

BASE_OVERRIDE = "override"
BASE_MIFFLIN_ST_JEOR = "mifflin_st_jeor"
BASE_GENDER_DEFAULT = "gender_default"


def calculate_bmr(weight_kg: float, height_cm: float, age: int, gender: str) -> float:
    """Basal metabolic rate via Mifflin-St Jeor."""
    bmr = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == "male":
        return bmr + 5
    return bmr - 161


def base_calories(profile: UserProfile) -> tuple[int, str]:
    """Return maintenance calories and the source they came from."""
    if profile.daily_calorie_target:
        return round_half_up(profile.daily_calorie_target), BASE_OVERRIDE
    if all(
        (profile.age, profile.gender, profile.weight_kg, profile.height_cm)
    ):
        bmr = calculate_bmr(
            weight_kg=profile.weight_kg,
            height_cm=profile.height_cm,
            age=profile.age,
            gender=profile.gender,
        )
        return round_half_up(bmr * ACTIVITY_MULTIPLIER), BASE_MIFFLIN_ST_JEOR
    calories = DEFAULT_CALORIES.get(profile.gender or "", FALLBACK_CALORIES)
    return calories, BASE_GENDER_DEFAULT


def calorie_adjustment(profile: UserProfile) -> int:
    """Signed daily surplus or deficit for the weight goal, 0 without a goal."""
    if not profile.weight_goal_kg or not profile.weight_kg:
        return 0
    weekly_rate = profile.weekly_rate_kg or DEFAULT_WEEKLY_RATE_KG
    sign = 1 if profile.weight_goal_kg > profile.weight_kg else -1
    return sign * round_half_up(KCAL_PER_KG * weekly_rate / 7)


def weight_based_macros(target_calories: int, weight_kg: float) -> tuple[int, int, int]:
    """Protein 2 g/kg, fat 1 g/kg, carbs fill the remaining calories."""
    protein = round_half_up(weight_kg * 2)
    fat = round_half_up(weight_kg * 1)
    carbs = max(0, round_half_up((target_calories - (protein * 4 + fat * 9)) / 4))
    return protein, carbs, fat


def percentage_based_macros(target_calories: int) -> tuple[int, int, int]:
    """30% protein, 45% carbs, 25% fat by calories."""
    protein = round_half_up(0.30 * target_calories / 4)
    carbs = round_half_up(0.45 * target_calories / 4)
    fat = round_half_up(0.25 * target_calories / 9)
    return protein, carbs, fat


@dataclass
class TargetCalculator:
    """Derives daily targets from a user profile under one macro policy."""

    macro_policy: str = "weight"

    def __post_init__(self) -> None:
        if self.macro_policy not in MACRO_POLICIES:
            raise ValueError(f"Unknown macro policy: {self.macro_policy}")

    def calculate(self, profile: UserProfile) -> NutritionTargets:
        """Return calorie and macro targets for the profile."""
        base, source = base_calories(profile)
        adjustment = calorie_adjustment(profile)
        target = max(MIN_TARGET_CALORIES, base + adjustment)
        if self.macro_policy == "percentage":
            protein, carbs, fat = percentage_based_macros(target)
        else:
            protein, carbs, fat = weight_based_macros(
                target, profile.weight_kg or REFERENCE_WEIGHT_KG
            )
        return NutritionTargets(
            calories=CalorieTarget(
                target=target,
                adjustment=adjustment,
                base=base,
                base_source=source,
            ),
            protein_g=protein,
            carbs_g=carbs,
            fat_g=fat,
            macro_policy=self.macro_policy,
        )
