"""Nutrition domain models."""

import math
from dataclasses import dataclass


def coerce_number(value: object) -> float:
    """Return a float for numeric-looking values, 0.0 for anything else."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class FoodRecord:
    """Reference nutrition data for a food, per 100 g."""

    id: str
    name: str
    brand: str | None
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float = 0.0
    sugars_g: float = 0.0
    serving: str = "100 g"


@dataclass(frozen=True)
class NutrientSnapshot:
    """Nutrition values frozen at the moment a food was logged."""

    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0
    sugars_g: float = 0.0

    @classmethod
    def from_raw(cls, raw: object) -> "NutrientSnapshot":
        """Build a snapshot from a stored payload, zeroing missing fields."""
        data = raw if isinstance(raw, dict) else {}
        return cls(
            calories=_amount(data.get("calories")),
            protein_g=_amount(data.get("protein", data.get("protein_g"))),
            carbs_g=_amount(data.get("carbs", data.get("carbs_g"))),
            fat_g=_amount(data.get("fat", data.get("fat_g"))),
            fiber_g=_amount(data.get("fiber", data.get("fiber_g"))),
            sugars_g=_amount(data.get("sugars", data.get("sugars_g"))),
        )

    @classmethod
    def for_portion(cls, food: FoodRecord, grams: float) -> "NutrientSnapshot":
        """Scale a per-100 g record to a logged portion."""
        factor = grams / 100.0 if grams > 0 else 0.0
        return cls(
            calories=food.calories * factor,
            protein_g=food.protein_g * factor,
            carbs_g=food.carbs_g * factor,
            fat_g=food.fat_g * factor,
            fiber_g=food.fiber_g * factor,
            sugars_g=food.sugars_g * factor,
        )

    def to_dict(self) -> dict[str, float]:
        """Return the stored representation."""
        return {
            "calories": self.calories,
            "protein": self.protein_g,
            "carbs": self.carbs_g,
            "fat": self.fat_g,
            "fiber": self.fiber_g,
            "sugars": self.sugars_g,
        }


def _amount(value: object) -> float:
    return max(0.0, coerce_number(value))
