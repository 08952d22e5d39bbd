"""Combine targets and consumed totals into progress reports."""

from datetime import date

from fittrack.domain.nutrition import round_half_up
from fittrack.domain.stats import (
    CalorieProgress,
    DailyTotals,
    NutrientProgress,
    NutritionSummary,
    NutritionTargets,
    NutritionTotals,
    WeeklyDay,
    WeeklySummary,
)


def percentage(current: float, target: float) -> int | None:
    """Current as a whole percentage of target, None when there is no target."""
    if target <= 0:
        return None
    return round_half_up(current / target * 100)


def _progress(current: float, target: int) -> NutrientProgress:
    return NutrientProgress(
        current=max(0, round_half_up(current)),
        target=max(0, target),
        percentage=percentage(current, target),
    )


def compose_summary(
    day: date, targets: NutritionTargets, totals: NutritionTotals
) -> NutritionSummary:
    """Build the current-vs-target report for a day."""
    totals = totals.floored()
    calories = _progress(totals.calories, targets.calories.target)
    return NutritionSummary(
        day=day,
        calories=CalorieProgress(
            current=calories.current,
            target=calories.target,
            percentage=calories.percentage,
            adjustment=targets.calories.adjustment,
        ),
        protein=_progress(totals.protein_g, targets.protein_g),
        carbs=_progress(totals.carbs_g, targets.carbs_g),
        fats=_progress(totals.fat_g, targets.fat_g),
    )


def compose_weekly(daily: list[DailyTotals], calorie_target: int) -> WeeklySummary:
    """Flag each day whose calories reached the target."""
    days = [
        WeeklyDay(
            day=entry.day,
            calories=max(0, round_half_up(entry.totals.calories)),
            goal_met=entry.totals.calories >= calorie_target,
        )
        for entry in daily
    ]
    return WeeklySummary(days=days, calorie_target=calorie_target)
