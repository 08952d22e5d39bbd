"""Supabase repository for meals with embedded foods."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID, uuid5

from supabase import Client

from fittrack.adapters.supabase_query import execute
from fittrack.domain.errors import StorageError
from fittrack.domain.meals import LoggedFood, Meal
from fittrack.domain.nutrition import NutrientSnapshot, coerce_number
from fittrack.services.meals import MealRepository
from fittrack.services.stats import StatsRepository

_COLUMNS = "id, user_id, day, meal_type, foods, created_at"


@dataclass
class SupabaseMealRepository(MealRepository, StatsRepository):
    """Supabase implementation for meals.

    Each meal is one row per (user, day, slot) whose ``foods`` column holds
    the logged entries as a JSON array. Writes go through the
    ``append_meal_food`` and ``remove_meal_food`` database functions so each
    change is one statement on the server.
    """

    client: Client

    def get_meal(self, meal_id: UUID) -> Meal | None:
        """Return a meal by id."""
        rows = execute(
            self.client.table("meals").select(_COLUMNS).eq("id", str(meal_id)).limit(1),
            "load meal",
        )
        if not rows:
            return None
        return parse_meal(rows[0])

    def append_food(
        self, user_id: UUID, day: date, meal_type: str, food: LoggedFood
    ) -> Meal:
        """Upsert the slot's meal and append one entry to its foods."""
        rows = execute(
            self.client.rpc(
                "append_meal_food",
                {
                    "p_user_id": str(user_id),
                    "p_day": day.isoformat(),
                    "p_meal_type": meal_type,
                    "p_food": _dump_food(food),
                },
            ),
            "log food",
        )
        if not rows:
            raise StorageError("Failed to log food")
        return parse_meal(rows[0])

    def remove_food(self, meal_id: UUID, entry_id: UUID) -> Meal | None:
        """Drop an entry from a meal's foods, None when the meal is gone."""
        rows = execute(
            self.client.rpc(
                "remove_meal_food",
                {"p_meal_id": str(meal_id), "p_entry_id": str(entry_id)},
            ),
            "remove food",
        )
        if not rows:
            return None
        return parse_meal(rows[0])

    def list_meals(self, user_id: UUID, start: date, end: date) -> list[Meal]:
        """Return meals whose day is within [start, end]."""
        rows = execute(
            self.client.table("meals")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("day", start.isoformat())
            .lte("day", end.isoformat())
            .order("day", desc=False),
            "list meals",
        )
        return [parse_meal(row) for row in rows]


def parse_meal(row: dict[str, object]) -> Meal:
    """Build a Meal, coercing malformed embedded foods instead of failing."""
    meal_id = UUID(str(row["id"]))
    raw_foods = row.get("foods")
    foods = [
        _parse_food(meal_id, index, raw)
        for index, raw in enumerate(raw_foods if isinstance(raw_foods, list) else [])
        if isinstance(raw, dict)
    ]
    created_raw = row.get("created_at")
    return Meal(
        id=meal_id,
        user_id=UUID(str(row["user_id"])),
        day=date.fromisoformat(str(row["day"])[:10]),
        meal_type=str(row.get("meal_type") or ""),
        foods=foods,
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )


def _parse_food(meal_id: UUID, index: int, raw: dict[str, object]) -> LoggedFood:
    # Older rows carry flat nutrient fields instead of a nutrition object
    nutrition = raw.get("nutrition")
    try:
        entry_id = UUID(str(raw.get("id")))
    except ValueError:
        # remove_meal_food derives the same id from the array position
        entry_id = uuid5(meal_id, str(index))
    return LoggedFood(
        id=entry_id,
        food_id=str(raw.get("food_id") or raw.get("name") or ""),
        name=str(raw.get("name") or ""),
        grams=max(0.0, coerce_number(raw.get("grams"))),
        nutrition=NutrientSnapshot.from_raw(
            nutrition if isinstance(nutrition, dict) else raw
        ),
    )


def _dump_food(food: LoggedFood) -> dict[str, object]:
    return {
        "id": str(food.id),
        "food_id": food.food_id,
        "name": food.name,
        "grams": food.grams,
        "nutrition": food.nutrition.to_dict(),
    }
