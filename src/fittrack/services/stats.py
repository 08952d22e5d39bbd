"""Statistics service for logged meals."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from fittrack.domain.meals import Meal
from fittrack.domain.stats import (
    DailyTotals,
    NutritionSummary,
    NutritionTotals,
    WeeklySummary,
)
from fittrack.services.summary import compose_summary, compose_weekly
from fittrack.services.targets import TargetCalculator
from fittrack.services.users import UserService

WEEK_DAYS = 7


class StatsRepository(Protocol):
    """Persistence interface for meal statistics."""

    def list_meals(self, user_id: UUID, start: date, end: date) -> list[Meal]:
        """Return meals whose day falls in [start, end]."""


def aggregate_meals(meals: Iterable[Meal]) -> NutritionTotals:
    """Sum calories and macros over every food of every meal."""
    total = NutritionTotals()
    for meal in meals:
        for food in meal.foods:
            total = total + NutritionTotals(
                calories=food.nutrition.calories,
                protein_g=food.nutrition.protein_g,
                carbs_g=food.nutrition.carbs_g,
                fat_g=food.nutrition.fat_g,
            )
    return total.floored()


def aggregate_week(meals: Iterable[Meal], today: date) -> list[DailyTotals]:
    """Bucket meals into the seven days ending today, oldest first."""
    start = today - timedelta(days=WEEK_DAYS - 1)
    by_day: dict[date, list[Meal]] = {
        start + timedelta(days=offset): [] for offset in range(WEEK_DAYS)
    }
    for meal in meals:
        if meal.day in by_day:
            by_day[meal.day].append(meal)
    return [
        DailyTotals(day=day, totals=aggregate_meals(day_meals))
        for day, day_meals in sorted(by_day.items())
    ]


@dataclass
class StatsService:
    """Service for computing daily and weekly progress in the user's timezone."""

    repository: StatsRepository
    user_service: UserService
    calculator: TargetCalculator

    def get_today(self, user_id: UUID, day: date | None = None) -> NutritionSummary:
        """Return today's totals against the user's targets."""
        profile = self.user_service.get_profile(user_id)
        resolved_day = day or _local_today(profile.timezone)
        meals = self.repository.list_meals(user_id, resolved_day, resolved_day)
        targets = self.calculator.calculate(profile)
        return compose_summary(resolved_day, targets, aggregate_meals(meals))

    def get_week(self, user_id: UUID, day: date | None = None) -> WeeklySummary:
        """Return calories for the last seven days with goal flags."""
        profile = self.user_service.get_profile(user_id)
        today = day or _local_today(profile.timezone)
        start = today - timedelta(days=WEEK_DAYS - 1)
        meals = self.repository.list_meals(user_id, start, today)
        targets = self.calculator.calculate(profile)
        return compose_weekly(
            aggregate_week(meals, today), targets.calories.target
        )


def _local_today(timezone_name: str) -> date:
    return datetime.now(tz=ZoneInfo(timezone_name)).date()
