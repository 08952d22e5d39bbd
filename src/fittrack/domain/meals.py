"""Domain models for meal logging."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from fittrack.domain.nutrition import NutrientSnapshot

MEAL_TYPES = ("breakfast", "lunch", "snack", "dinner")


@dataclass(frozen=True)
class LoggedFood:
    """A food entry embedded in a meal."""

    id: UUID
    food_id: str
    name: str
    grams: float
    nutrition: NutrientSnapshot


@dataclass(frozen=True)
class Meal:
    """All foods a user logged for one meal slot on one day."""

    id: UUID
    user_id: UUID
    day: date
    meal_type: str
    foods: list[LoggedFood] = field(default_factory=list)
    created_at: datetime | None = None
