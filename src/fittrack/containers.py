"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from fittrack.adapters.fdc_client import HttpxFdcClient
from fittrack.adapters.json_food_dataset import JsonFoodDataset
from fittrack.adapters.supabase_meal_repository import SupabaseMealRepository
from fittrack.adapters.supabase_user_repository import SupabaseUserRepository
from fittrack.config import Settings
from fittrack.services.auth import AuthService
from fittrack.services.cache import InMemoryCache
from fittrack.services.meals import MealLogService
from fittrack.services.nutrition import (
    FoodLookup,
    ProviderFoodLookup,
    StaticFoodLookup,
)
from fittrack.services.stats import StatsService
from fittrack.services.targets import TargetCalculator
from fittrack.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    user_service: UserService
    food_lookup: FoodLookup
    meal_log_service: MealLogService
    stats_service: StatsService
    target_calculator: TargetCalculator
    close_resources: Callable[[], Awaitable[None]]


def build_food_lookup(
    settings: Settings,
) -> tuple[FoodLookup, Callable[[], Awaitable[None]]]:
    """Create the configured lookup strategy and its cleanup hook."""
    if settings.food_lookup == "fdc":
        if not settings.fdc_api_key:
            raise ValueError("FDC_API_KEY is required when FOOD_LOOKUP=fdc")
        fdc_client = HttpxFdcClient.create(
            api_key=settings.fdc_api_key,
            base_url=settings.fdc_base_url,
        )
        lookup = ProviderFoodLookup(
            fdc_client=fdc_client,
            cache=InMemoryCache(),
            food_ttl_seconds=settings.food_cache_ttl_seconds,
            debug=settings.environment == "local",
        )
        return lookup, fdc_client.close

    async def close() -> None:
        return None

    lookup = StaticFoodLookup(
        dataset=JsonFoodDataset(settings.food_dataset_path),
        max_results=settings.food_search_limit,
    )
    return lookup, close


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    meal_repository = SupabaseMealRepository(supabase_client)
    user_service = UserService(user_repository)
    auth_service = AuthService(
        repository=user_repository,
        secret_key=resolved_settings.jwt_secret,
        algorithm=resolved_settings.jwt_algorithm,
        access_token_expire_minutes=resolved_settings.access_token_expire_minutes,
        default_timezone=resolved_settings.default_timezone,
    )
    target_calculator = TargetCalculator(macro_policy=resolved_settings.macro_policy)
    food_lookup, close_lookup = build_food_lookup(resolved_settings)
    meal_log_service = MealLogService(
        food_lookup=food_lookup,
        repository=meal_repository,
        user_service=user_service,
    )
    stats_service = StatsService(
        repository=meal_repository,
        user_service=user_service,
        calculator=target_calculator,
    )

    async def close_resources() -> None:
        await close_lookup()

    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        user_service=user_service,
        food_lookup=food_lookup,
        meal_log_service=meal_log_service,
        stats_service=stats_service,
        target_calculator=target_calculator,
        close_resources=close_resources,
    )
