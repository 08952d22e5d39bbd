"""Tests for the in-memory TTL cache."""

from datetime import UTC, datetime, timedelta

from fittrack.services.cache import InMemoryCache


def test_cache_returns_value_until_expiry() -> None:
    now = datetime(2024, 1, 1, tzinfo=UTC)
    clock = [now]
    cache = InMemoryCache(clock=lambda: clock[0])

    cache.set("key", {"value": 1}, ttl_seconds=10)
    clock[0] = now + timedelta(seconds=9)
    assert cache.get("key") == {"value": 1}

    clock[0] = now + timedelta(seconds=10)
    assert cache.get("key") is None
    assert len(cache) == 0


def test_cache_last_write_wins() -> None:
    cache = InMemoryCache()

    cache.set("key", "first", ttl_seconds=60)
    cache.set("key", "second", ttl_seconds=60)

    assert cache.get("key") == "second"
    assert cache.get("missing") is None
