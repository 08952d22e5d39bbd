"""Tests for the static food dataset and lookup."""

import asyncio
import os

import pytest

from fittrack.adapters.json_food_dataset import (
    JsonFoodDataset,
    parse_nutrient_text,
    record_from_row,
)
from fittrack.domain.errors import NotFoundError, ServiceUnavailableError
from fittrack.services.nutrition import StaticFoodLookup
from tests.conftest import write_dataset


def test_parse_nutrient_text_prefers_kcal() -> None:
    assert parse_nutrient_text("84 kj (20 kcal)", energy=True) == 20
    assert parse_nutrient_text("250 kcal", energy=True) == 250
    assert parse_nutrient_text("3.1 g") == 3.1
    assert parse_nutrient_text("trace") == 0
    assert parse_nutrient_text(None) == 0
    assert parse_nutrient_text(12.5) == 12.5


def test_record_from_row_skips_nameless_rows() -> None:
    assert record_from_row({"nutri_energy": "100 kcal"}) is None
    assert record_from_row("banana") is None

    record = record_from_row({"food_link": "oats", "nutri_energy": "389 kcal"})

    assert record is not None
    assert record.id == "oats"
    assert record.name == "oats"
    assert record.calories == 389
    assert record.serving == "100 g"


def test_search_is_case_insensitive(dataset_path) -> None:
    lookup = StaticFoodLookup(JsonFoodDataset(dataset_path))

    lower = asyncio.run(lookup.search("chicken"))
    upper = asyncio.run(lookup.search("CHICKEN"))

    assert [food.id for food in lower] == ["chicken-breast"]
    assert lower == upper
    assert lower[0].calories == 165


def test_search_matches_brand(dataset_path) -> None:
    lookup = StaticFoodLookup(JsonFoodDataset(dataset_path))

    results = asyncio.run(lookup.search("kirkland"))

    assert [food.name for food in results] == ["Chicken Breast"]


def test_search_skips_zero_calorie_foods(dataset_path) -> None:
    lookup = StaticFoodLookup(JsonFoodDataset(dataset_path))

    assert asyncio.run(lookup.search("water")) == []


def test_search_blank_query_returns_nothing(dataset_path) -> None:
    lookup = StaticFoodLookup(JsonFoodDataset(dataset_path))

    assert asyncio.run(lookup.search("   ")) == []


def test_search_caps_results(tmp_path) -> None:
    rows = [
        {"name": f"Rice {index}", "nutri_energy": "130 kcal"} for index in range(30)
    ]
    path = write_dataset(tmp_path / "rice.json", rows)
    lookup = StaticFoodLookup(JsonFoodDataset(path), max_results=20)

    assert len(asyncio.run(lookup.search("rice", limit=50))) == 20
    assert len(asyncio.run(lookup.search("rice", limit=5))) == 5


@pytest.mark.parametrize("limit", [0, -1])
def test_search_non_positive_limit_returns_nothing(dataset_path, limit) -> None:
    lookup = StaticFoodLookup(JsonFoodDataset(dataset_path))

    assert asyncio.run(lookup.search("banana", limit=limit)) == []


def test_get_food_by_name_or_id(dataset_path) -> None:
    lookup = StaticFoodLookup(JsonFoodDataset(dataset_path))

    by_name = asyncio.run(lookup.get_food("chicken breast"))
    by_id = asyncio.run(lookup.get_food("chicken-breast"))

    assert by_name == by_id
    assert by_name.brand == "Kirkland"


def test_get_food_missing_raises(dataset_path) -> None:
    lookup = StaticFoodLookup(JsonFoodDataset(dataset_path))

    with pytest.raises(NotFoundError):
        asyncio.run(lookup.get_food("chicken"))


def test_dataset_reloads_when_file_changes(tmp_path) -> None:
    path = write_dataset(tmp_path / "foods.json", [{"name": "Apple"}])
    dataset = JsonFoodDataset(path)

    first = dataset.records()
    assert dataset.records() is first

    write_dataset(path, [{"name": "Apple"}, {"name": "Pear"}])
    stat = path.stat()
    os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))

    reloaded = dataset.records()
    assert [record.name for record in reloaded] == ["Apple", "Pear"]


def test_missing_dataset_is_unavailable(tmp_path) -> None:
    dataset = JsonFoodDataset(tmp_path / "missing.json")

    with pytest.raises(ServiceUnavailableError):
        dataset.records()


def test_malformed_dataset_is_unavailable(tmp_path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ServiceUnavailableError):
        JsonFoodDataset(path).records()


def test_non_list_dataset_is_unavailable(tmp_path) -> None:
    path = write_dataset(tmp_path / "object.json", {"name": "Apple"})

    with pytest.raises(ServiceUnavailableError):
        JsonFoodDataset(path).records()
