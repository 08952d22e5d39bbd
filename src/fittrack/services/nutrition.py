"""Food lookup strategies: a local JSON dataset or USDA FDC."""

import logging
from dataclasses import dataclass
from typing import Protocol

from fittrack.adapters.fdc_client import FdcClient
from fittrack.adapters.json_food_dataset import JsonFoodDataset
from fittrack.domain.errors import NotFoundError
from fittrack.domain.nutrition import FoodRecord, coerce_number
from fittrack.services.cache import Cache

DEFAULT_SEARCH_LIMIT = 20

# FDC nutrient ids and their legacy numbers, keyed by FoodRecord field
_FDC_NUTRIENTS: dict[str, tuple[tuple[int, str], ...]] = {
    "calories": ((1008, "208"), (2047, "957"), (2048, "958")),
    "protein_g": ((1003, "203"),),
    "fat_g": ((1004, "204"),),
    "carbs_g": ((1005, "205"),),
    "fiber_g": ((1079, "291"),),
    "sugars_g": ((2000, "269"),),
}

_logger = logging.getLogger(__name__)


class FoodLookup(Protocol):
    """Resolves food queries and identifiers to nutrition records."""

    async def search(
        self, query: str, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> list[FoodRecord]:
        """Return foods whose name or brand matches the query."""

    async def get_food(self, food_id: str) -> FoodRecord:
        """Return a single food or raise NotFoundError."""


@dataclass
class StaticFoodLookup(FoodLookup):
    """Linear search over the in-memory food dataset."""

    dataset: JsonFoodDataset
    max_results: int = DEFAULT_SEARCH_LIMIT

    async def search(
        self, query: str, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> list[FoodRecord]:
        """Case-insensitive substring search, skipping foods without calories."""
        needle = query.strip().lower()
        if not needle:
            return []
        cap = min(limit, self.max_results)
        if cap <= 0:
            return []
        results: list[FoodRecord] = []
        for food in self.dataset.records():
            if food.calories <= 0:
                continue
            if needle in food.name.lower() or needle in (food.brand or "").lower():
                results.append(food)
                if len(results) >= cap:
                    break
        return results

    async def get_food(self, food_id: str) -> FoodRecord:
        """Exact case-insensitive match on name or identifier."""
        key = food_id.strip().lower()
        if key:
            for food in self.dataset.records():
                if food.name.lower() == key or food.id.lower() == key:
                    return food
        raise NotFoundError("Food not found")


@dataclass
class ProviderFoodLookup(FoodLookup):
    """FDC-backed lookup with TTL caching of results."""

    fdc_client: FdcClient
    cache: Cache
    search_ttl_seconds: int = 3600
    food_ttl_seconds: int = 86400
    debug: bool = False

    async def search(
        self, query: str, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> list[FoodRecord]:
        """Search FDC foods with caching."""
        needle = query.strip().lower()
        if not needle or limit <= 0:
            return []
        cache_key = f"fdc:search:{needle}:{limit}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self.fdc_client.search_foods(needle, page_size=limit)
        foods = [
            record
            for record in (_record_from_fdc(food) for food in payload.get("foods", []))
            if record is not None and record.calories > 0
        ]
        self.cache.set(cache_key, foods, ttl_seconds=self.search_ttl_seconds)
        if self.debug:
            _logger.info("Food search FDC: query=%s results=%s", needle, len(foods))
        return foods

    async def get_food(self, food_id: str) -> FoodRecord:
        """Retrieve a food from FDC, serving repeat lookups from the cache."""
        key = food_id.strip().lower()
        if not key.isdigit():
            raise NotFoundError("Food not found")
        cache_key = f"fdc:food:{key}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, FoodRecord):
            return cached

        payload = await self.fdc_client.get_food(int(key))
        record = _record_from_fdc(payload)
        if record is None:
            raise NotFoundError("Food not found")
        self.cache.set(cache_key, record, ttl_seconds=self.food_ttl_seconds)
        if self.debug:
            _logger.info("Food detail FDC: fdc_id=%s", key)
        return record


def _record_from_fdc(payload: object) -> FoodRecord | None:
    """Normalize an FDC search hit or detail payload (values per 100 g)."""
    if not isinstance(payload, dict) or payload.get("fdcId") is None:
        return None
    values = _extract_nutrients(payload.get("foodNutrients") or [])
    return FoodRecord(
        id=str(payload["fdcId"]),
        name=str(payload.get("description") or ""),
        brand=payload.get("brandName") or payload.get("brandOwner"),
        serving="100 g",
        **values,
    )


def _extract_nutrients(food_nutrients: list[dict[str, object]]) -> dict[str, float]:
    """Pick tracked nutrients from either the search or the detail format."""
    found: dict[tuple[int, str], float] = {}
    for nutrient in food_nutrients:
        if not isinstance(nutrient, dict):
            continue
        info = nutrient.get("nutrient") or {}
        nutrient_id = info.get("id") or nutrient.get("nutrientId")
        number = str(info.get("number") or nutrient.get("nutrientNumber") or "")
        amount = nutrient.get("amount", nutrient.get("value"))
        if amount is None:
            continue
        for keys in _FDC_NUTRIENTS.values():
            for key in keys:
                if nutrient_id == key[0] or number == key[1]:
                    found[key] = max(0.0, coerce_number(amount))

    values: dict[str, float] = {}
    for field_name, keys in _FDC_NUTRIENTS.items():
        values[field_name] = next((found[key] for key in keys if key in found), 0.0)
    return values
