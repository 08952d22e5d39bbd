"""Meal logging service."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

from fittrack.domain.errors import NotFoundError, ValidationError
from fittrack.domain.meals import MEAL_TYPES, LoggedFood, Meal
from fittrack.domain.nutrition import NutrientSnapshot
from fittrack.services.nutrition import FoodLookup
from fittrack.services.users import UserService

MAX_PORTION_GRAMS = 5000.0

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meals and their embedded foods.

    Both writes are single statements: concurrent appends to the same slot
    never lose an entry and never create a second meal row.
    """

    def get_meal(self, meal_id: UUID) -> Meal | None:
        """Return a meal by id."""

    def append_food(
        self, user_id: UUID, day: date, meal_type: str, food: LoggedFood
    ) -> Meal:
        """Add a food to the slot's meal, creating the meal if absent."""

    def remove_food(self, meal_id: UUID, entry_id: UUID) -> Meal | None:
        """Drop one entry from a meal and return the meal, None if it is gone."""

    def list_meals(self, user_id: UUID, start: date, end: date) -> list[Meal]:
        """Return meals whose day falls in [start, end], oldest first."""


@dataclass
class MealLogService:
    """Adds and removes foods in per-day meals."""

    food_lookup: FoodLookup
    repository: MealRepository
    user_service: UserService

    async def add_food(
        self,
        user_id: UUID,
        meal_type: str,
        food_id: str,
        grams: float = 100.0,
        day: date | None = None,
    ) -> Meal:
        """Snapshot a food's nutrition into the user's meal for the day."""
        _validate_meal_type(meal_type)
        if not 0 < grams <= MAX_PORTION_GRAMS:
            raise ValidationError(
                f"grams must be between 0 and {MAX_PORTION_GRAMS:g}"
            )
        resolved_day = day or self._today(user_id)
        food = await self.food_lookup.get_food(food_id)
        entry = LoggedFood(
            id=uuid4(),
            food_id=food.id,
            name=food.name,
            grams=grams,
            nutrition=NutrientSnapshot.for_portion(food, grams),
        )
        meal = self.repository.append_food(user_id, resolved_day, meal_type, entry)
        _logger.info(
            "Logged food %s to %s meal %s", food.id, meal_type, meal.id
        )
        return meal

    def remove_food(self, user_id: UUID, meal_id: UUID, entry_id: UUID) -> Meal:
        """Remove one logged food from a meal the user owns."""
        meal = self.repository.get_meal(meal_id)
        if meal is None or meal.user_id != user_id:
            raise NotFoundError("Meal not found")
        if all(food.id != entry_id for food in meal.foods):
            raise NotFoundError("Food not found in meal")
        updated = self.repository.remove_food(meal_id, entry_id)
        if updated is None:
            raise NotFoundError("Meal not found")
        return updated

    def list_day(
        self, user_id: UUID, day: date | None = None
    ) -> dict[str, list[Meal]]:
        """Return every meal row of the day keyed by canonical meal type.

        Each slot normally holds at most one meal; rows written before the
        slot became unique are all returned so the list matches the totals.
        """
        resolved_day = day or self._today(user_id)
        grouped: dict[str, list[Meal]] = {meal_type: [] for meal_type in MEAL_TYPES}
        for meal in self.repository.list_meals(user_id, resolved_day, resolved_day):
            if meal.meal_type in grouped:
                grouped[meal.meal_type].append(meal)
        return grouped

    def _today(self, user_id: UUID) -> date:
        profile = self.user_service.get_profile(user_id)
        return datetime.now(tz=ZoneInfo(profile.timezone)).date()


def _validate_meal_type(meal_type: str) -> None:
    if meal_type not in MEAL_TYPES:
        raise ValidationError(
            f"Meal type must be one of {', '.join(MEAL_TYPES)}"
        )
