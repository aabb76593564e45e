"""
Tests for the daily Cache Gateway
"""

import json
from datetime import date

import pytest
from unittest.mock import AsyncMock

from docupicks.services.cache_service import CacheService, daily_key, latest_key

from conftest import make_validated

NOW = 1_750_000_000


class Clock:
    def __init__(self, now=NOW):
        self.now = now

    def __call__(self):
        return self.now


def test_daily_key_format():
    assert daily_key("DOCS", date(2025, 6, 1)) == "DOCS-2025-06-01"
    assert latest_key("DOCS") == "DOCS-latest"


@pytest.mark.asyncio
async def test_put_then_get_round_trip():
    cache = CacheService(redis_client=None, clock=Clock())
    payload = [make_validated("LA 92", "8.1"), make_validated("13th", "8.2")]
    payload[0].watch_providers = []

    written = await cache.put("DOCS-2025-06-01", payload, 86400)
    entry = await cache.get("DOCS-2025-06-01")

    assert entry.date_key == written.date_key
    assert entry.expiry_timestamp == NOW + 86400
    assert [i.to_wire() for i in entry.payload] == [i.to_wire() for i in payload]


@pytest.mark.asyncio
async def test_missing_key_is_miss():
    assert await CacheService(None, clock=Clock()).get("DOCS-2025-06-01") is None


@pytest.mark.asyncio
async def test_expired_entry_is_miss():
    clock = Clock()
    cache = CacheService(None, clock=clock)
    await cache.put("DOCS-2025-06-01", [make_validated("A", "7.0")], 60)

    clock.now += 61
    assert await cache.get("DOCS-2025-06-01") is None


@pytest.mark.asyncio
async def test_expiry_checked_even_if_store_keeps_value():
    stored = json.dumps({"id": "DOCS-2025-06-01", "data": [], "ttl": NOW - 1})
    redis = AsyncMock()
    redis.get.return_value = stored

    assert await CacheService(redis, clock=Clock()).get("DOCS-2025-06-01") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", [
    "{not json",
    json.dumps({"id": "DOCS-2025-06-01", "data": "oops"}),
    json.dumps([1, 2, 3]),
])
async def test_corrupt_payload_is_miss(raw):
    redis = AsyncMock()
    redis.get.return_value = raw

    assert await CacheService(redis, clock=Clock()).get("DOCS-2025-06-01") is None


@pytest.mark.asyncio
async def test_redis_calls_are_awaited():
    redis = AsyncMock()
    cache = CacheService(redis, clock=Clock())

    await cache.put("DOCS-2025-06-01", [make_validated("A", "7.0")], 86400)

    key, ttl, value = redis.setex.await_args.args
    assert (key, ttl) == ("DOCS-2025-06-01", 86400)
    stored = json.loads(value)
    assert stored["id"] == "DOCS-2025-06-01"
    assert stored["ttl"] == NOW + 86400
    assert stored["data"][0]["Title"] == "A"
    assert stored["data"][0]["imdbRating"] == "7.0"

    redis.get.return_value = value
    entry = await cache.get("DOCS-2025-06-01")
    redis.get.assert_awaited_with("DOCS-2025-06-01")
    assert entry.payload[0].title == "A"


@pytest.mark.asyncio
async def test_redis_failure_falls_back_to_memory():
    redis = AsyncMock()
    redis.setex.side_effect = ConnectionError("down")
    redis.get.side_effect = ConnectionError("down")
    cache = CacheService(redis, clock=Clock())

    await cache.put("DOCS-2025-06-01", [make_validated("A", "7.0")], 86400)
    entry = await cache.get("DOCS-2025-06-01")

    assert entry is not None
    assert entry.payload[0].title == "A"


@pytest.mark.asyncio
async def test_memory_fallback_prunes_expired_keys_on_write():
    clock = Clock()
    cache = CacheService(None, clock=clock)
    await cache.put("DOCS-2025-06-01", [make_validated("A", "8.0")], 60)

    clock.now += 61
    await cache.put("DOCS-2025-06-02", [make_validated("B", "7.0")], 60)

    assert list(cache._memory_cache) == ["DOCS-2025-06-02"]
