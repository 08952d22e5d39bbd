"""Shared test fixtures."""

import json
from dataclasses import dataclass, field, replace
from datetime import date
from pathlib import Path
from uuid import UUID, uuid4

import pytest

from fittrack.adapters.fdc_client import FdcClient
from fittrack.adapters.json_food_dataset import JsonFoodDataset
from fittrack.config import Settings
from fittrack.containers import AppContainer
from fittrack.domain.meals import LoggedFood, Meal
from fittrack.domain.models import UserProfile, UserRecord
from fittrack.services.auth import AuthService
from fittrack.services.meals import MealLogService, MealRepository
from fittrack.services.nutrition import StaticFoodLookup
from fittrack.services.stats import StatsRepository, StatsService
from fittrack.services.targets import TargetCalculator
from fittrack.services.users import UserRepository, UserService

FOOD_ROWS = [
    {
        "name": "Banana",
        "food_link": "banana",
        "nutri_energy": "371 kj (89 kcal)",
        "nutri_protein": "1.1 g",
        "nutri_carbohydrate": "22.8 g",
        "nutri_fat": "0.3 g",
        "nutri_fiber": "2.6 g",
        "nutri_sugars": "12.2 g",
    },
    {
        "name": "Chicken Breast",
        "food_link": "chicken-breast",
        "brand": "Kirkland",
        "nutri_energy": "690 kj (165 kcal)",
        "nutri_protein": "31 g",
        "nutri_carbohydrate": "0 g",
        "nutri_fat": "3.6 g",
    },
    {
        "name": "Sparkling Water",
        "food_link": "sparkling-water",
        "nutri_energy": "0 kj (0 kcal)",
    },
]


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory account and profile repository for tests."""

    users: dict[str, UserRecord] = field(default_factory=dict)
    profiles: dict[UUID, UserProfile] = field(default_factory=dict)

    def get_by_email(self, email: str) -> UserRecord | None:
        return self.users.get(email)

    def create_user(
        self, name: str, email: str, password_hash: str, timezone: str
    ) -> UserRecord:
        user = UserRecord(
            id=uuid4(), name=name, email=email, password_hash=password_hash
        )
        self.users[email] = user
        self.profiles[user.id] = UserProfile(
            id=user.id, timezone=timezone, name=name, email=email
        )
        return user

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        return self.profiles.get(user_id)

    def update_profile(
        self, user_id: UUID, changes: dict[str, object]
    ) -> UserProfile | None:
        profile = self.profiles.get(user_id)
        if profile is None:
            return None
        updated = replace(profile, **changes)
        self.profiles[user_id] = updated
        account = self.users.pop(profile.email, None)
        if account is not None:
            self.users[updated.email] = replace(
                account, name=updated.name, email=updated.email
            )
        return updated

    def add_profile(self, **values: object) -> UserProfile:
        profile = UserProfile(id=uuid4(), **values)
        self.profiles[profile.id] = profile
        return profile


@dataclass
class InMemoryMealRepository(MealRepository, StatsRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, Meal] = field(default_factory=dict)

    def get_meal(self, meal_id: UUID) -> Meal | None:
        return self.meals.get(meal_id)

    def append_food(
        self, user_id: UUID, day: date, meal_type: str, food: LoggedFood
    ) -> Meal:
        for meal in self.meals.values():
            if (
                meal.user_id == user_id
                and meal.day == day
                and meal.meal_type == meal_type
            ):
                updated = replace(meal, foods=[*meal.foods, food])
                self.meals[meal.id] = updated
                return updated
        meal = Meal(
            id=uuid4(), user_id=user_id, day=day, meal_type=meal_type, foods=[food]
        )
        self.meals[meal.id] = meal
        return meal

    def remove_food(self, meal_id: UUID, entry_id: UUID) -> Meal | None:
        meal = self.meals.get(meal_id)
        if meal is None:
            return None
        updated = replace(
            meal, foods=[food for food in meal.foods if food.id != entry_id]
        )
        self.meals[meal_id] = updated
        return updated

    def list_meals(self, user_id: UUID, start: date, end: date) -> list[Meal]:
        return sorted(
            (
                meal
                for meal in self.meals.values()
                if meal.user_id == user_id and start <= meal.day <= end
            ),
            key=lambda meal: meal.day,
        )

    def add(self, meal: Meal) -> Meal:
        self.meals[meal.id] = meal
        return meal


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client with in-memory responses."""

    search_calls: int = 0
    food_calls: int = 0
    search_payload: dict[str, object] = field(
        default_factory=lambda: {
            "foods": [
                {
                    "fdcId": 123456,
                    "description": "Kirkland Signature Chicken Breast",
                    "brandOwner": "Costco",
                    "brandName": "Kirkland",
                    "foodNutrients": [
                        {"nutrientId": 1008, "nutrientNumber": "208", "value": 165},
                        {"nutrientId": 1003, "nutrientNumber": "203", "value": 31},
                    ],
                },
                {
                    "fdcId": 654321,
                    "description": "Kirkland Sparkling Water",
                    "brandOwner": "Costco",
                    "foodNutrients": [],
                },
            ]
        }
    )
    food_payload: dict[str, object] = field(
        default_factory=lambda: {
            "fdcId": 123456,
            "description": "Kirkland Signature Chicken Breast",
            "brandOwner": "Costco",
            "brandName": "Kirkland",
            "foodNutrients": [
                {"nutrient": {"id": 1008, "number": "208"}, "amount": 165},
                {"nutrient": {"id": 1003, "number": "203"}, "amount": 31},
                {"nutrient": {"id": 1004, "number": "204"}, "amount": 3.6},
                {"nutrient": {"id": 1005, "number": "205"}, "amount": 0},
            ],
        }
    )

    async def search_foods(self, query: str, page_size: int = 20) -> dict[str, object]:
        self.search_calls += 1
        return self.search_payload

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        self.food_calls += 1
        return self.food_payload


def write_dataset(path: Path, rows: object) -> Path:
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path


@pytest.fixture
def dataset_path(tmp_path: Path) -> Path:
    return write_dataset(tmp_path / "foodinfo.json", FOOD_ROWS)


@pytest.fixture
def settings(dataset_path: Path) -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="test.service.key",
        jwt_secret="test-secret",
        food_dataset_path=str(dataset_path),
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def container(
    settings: Settings,
    user_repository: InMemoryUserRepository,
    meal_repository: InMemoryMealRepository,
) -> AppContainer:
    user_service = UserService(user_repository)
    auth_service = AuthService(
        repository=user_repository,
        secret_key=settings.jwt_secret,
        default_timezone=settings.default_timezone,
    )
    food_lookup = StaticFoodLookup(JsonFoodDataset(settings.food_dataset_path))
    target_calculator = TargetCalculator(macro_policy=settings.macro_policy)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_service=auth_service,
        user_service=user_service,
        food_lookup=food_lookup,
        meal_log_service=MealLogService(
            food_lookup=food_lookup,
            repository=meal_repository,
            user_service=user_service,
        ),
        stats_service=StatsService(
            repository=meal_repository,
            user_service=user_service,
            calculator=target_calculator,
        ),
        target_calculator=target_calculator,
        close_resources=close_resources,
    )
