"""Domain models for targets, totals and progress reports."""

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class NutritionTotals:
    """Consumed macros over a time window."""

    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0

    def __add__(self, other: "NutritionTotals") -> "NutritionTotals":
        return NutritionTotals(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            carbs_g=self.carbs_g + other.carbs_g,
            fat_g=self.fat_g + other.fat_g,
        )

    def floored(self) -> "NutritionTotals":
        """Return a copy with every field clamped at zero."""
        return NutritionTotals(
            calories=max(0.0, self.calories),
            protein_g=max(0.0, self.protein_g),
            carbs_g=max(0.0, self.carbs_g),
            fat_g=max(0.0, self.fat_g),
        )


@dataclass(frozen=True)
class DailyTotals:
    """Totals for a single calendar day."""

    day: date
    totals: NutritionTotals = field(default_factory=NutritionTotals)


@dataclass(frozen=True)
class CalorieTarget:
    """Calorie target with the goal adjustment that produced it."""

    target: int
    adjustment: int
    base: int
    base_source: str


@dataclass(frozen=True)
class NutritionTargets:
    """Daily calorie and macro targets."""

    calories: CalorieTarget
    protein_g: int
    carbs_g: int
    fat_g: int
    macro_policy: str


@dataclass(frozen=True)
class NutrientProgress:
    """Current intake against a target."""

    current: int
    target: int
    percentage: int | None


@dataclass(frozen=True)
class CalorieProgress(NutrientProgress):
    """Calorie progress, including the goal adjustment."""

    adjustment: int = 0


@dataclass(frozen=True)
class NutritionSummary:
    """Current-vs-target report for one day."""

    day: date
    calories: CalorieProgress
    protein: NutrientProgress
    carbs: NutrientProgress
    fats: NutrientProgress


@dataclass(frozen=True)
class WeeklyDay:
    """Calories for one day of the weekly view."""

    day: date
    calories: int
    goal_met: bool


@dataclass(frozen=True)
class WeeklySummary:
    """Seven days of calories, oldest first."""

    days: list[WeeklyDay]
    calorie_target: int
