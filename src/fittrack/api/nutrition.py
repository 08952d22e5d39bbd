"""Nutrition endpoints: summaries, meal logging and food search."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from fittrack.api.dependencies import current_user_id, get_container
from fittrack.api.models import AddFoodRequest
from fittrack.domain.meals import Meal
from fittrack.domain.nutrition import FoodRecord
from fittrack.domain.stats import NutrientProgress, NutritionTargets

router = APIRouter(prefix="/nutrition", tags=["nutrition"])


@router.get("/summary")
async def summary(
    request: Request,
    day: date | None = None,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return today's intake against calorie and macro targets."""
    container = get_container(request)
    report = container.stats_service.get_today(user_id, day)
    return {
        "success": True,
        "date": report.day.isoformat(),
        "calories": {
            **_progress_payload(report.calories),
            "adjustment": report.calories.adjustment,
        },
        "protein": _progress_payload(report.protein),
        "carbs": _progress_payload(report.carbs),
        "fats": _progress_payload(report.fats),
    }


@router.get("/targets")
async def targets(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object]:
    """Return the caller's daily targets and how they were derived."""
    container = get_container(request)
    profile = container.user_service.get_profile(user_id)
    calculated = container.target_calculator.calculate(profile)
    return {"success": True, **_targets_payload(calculated)}


@router.get("/weekly")
async def weekly(
    request: Request,
    day: date | None = None,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return calories for the last seven days, oldest first."""
    container = get_container(request)
    week = container.stats_service.get_week(user_id, day)
    return {
        "success": True,
        "calorieGoal": week.calorie_target,
        "weeklyData": [
            {
                "date": entry.day.isoformat(),
                "calories": entry.calories,
                "goalMet": entry.goal_met,
            }
            for entry in week.days
        ],
    }


@router.get("/meals")
async def list_meals(
    request: Request,
    day: date | None = None,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return the day's meals grouped by meal type, one list per slot."""
    container = get_container(request)
    grouped = container.meal_log_service.list_day(user_id, day)
    return {
        "success": True,
        "meals": {
            meal_type: [_meal_payload(meal) for meal in meals]
            for meal_type, meals in grouped.items()
        },
    }


@router.post("/meals", status_code=status.HTTP_201_CREATED)
async def add_food(
    payload: AddFoodRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Log a food into one of today's meals."""
    container = get_container(request)
    meal = await container.meal_log_service.add_food(
        user_id=user_id,
        meal_type=payload.meal_type,
        food_id=payload.food_id,
        grams=payload.grams,
    )
    return {"success": True, "meal": _meal_payload(meal)}


@router.delete("/meals/{meal_id}/foods/{entry_id}")
async def remove_food(
    meal_id: UUID,
    entry_id: UUID,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Remove a logged food from a meal."""
    container = get_container(request)
    meal = container.meal_log_service.remove_food(user_id, meal_id, entry_id)
    return {"success": True, "meal": _meal_payload(meal)}


@router.get("/search")
async def search(
    request: Request,
    q: str = "",
    _user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Search the food database by name or brand."""
    container = get_container(request)
    foods = await container.food_lookup.search(
        q, limit=container.settings.food_search_limit
    )
    return {"success": True, "results": [_food_payload(food) for food in foods]}


@router.get("/foods/{food_id}")
async def food_detail(
    food_id: str,
    request: Request,
    _user_id: UUID = Depends(current_user_id),
) -> dict[str, object]:
    """Return nutrition details for one food."""
    container = get_container(request)
    food = await container.food_lookup.get_food(food_id)
    return {"success": True, **_food_payload(food)}


def _progress_payload(progress: NutrientProgress) -> dict[str, object]:
    payload: dict[str, object] = {
        "current": progress.current,
        "target": progress.target,
    }
    if progress.percentage is not None:
        payload["percentage"] = progress.percentage
    return payload


def _targets_payload(targets: NutritionTargets) -> dict[str, object]:
    return {
        "calories": {
            "target": targets.calories.target,
            "adjustment": targets.calories.adjustment,
            "base": targets.calories.base,
            "baseSource": targets.calories.base_source,
        },
        "protein": {"target": targets.protein_g},
        "carbs": {"target": targets.carbs_g},
        "fats": {"target": targets.fat_g},
        "macroPolicy": targets.macro_policy,
    }


def _food_payload(food: FoodRecord) -> dict[str, object]:
    return {
        "id": food.id,
        "name": food.name,
        "brand": food.brand or "",
        "calories": food.calories,
        "protein": food.protein_g,
        "carbs": food.carbs_g,
        "fat": food.fat_g,
        "fiber": food.fiber_g,
        "sugars": food.sugars_g,
        "servingSize": food.serving,
        "description": "Per 100g serving",
    }


def _meal_payload(meal: Meal) -> dict[str, object]:
    return {
        "id": str(meal.id),
        "date": meal.day.isoformat(),
        "mealType": meal.meal_type,
        "foods": [
            {
                "id": str(food.id),
                "foodId": food.food_id,
                "name": food.name,
                "grams": food.grams,
                "nutrition": food.nutrition.to_dict(),
            }
            for food in meal.foods
        ],
    }
