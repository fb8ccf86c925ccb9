"""Tests for the snapshot caches."""

import asyncio
from datetime import datetime
from unittest.mock import AsyncMock

import pytest
import redis.asyncio as redis
from hypothesis import given, settings, strategies as st

from gear_search.cache import CacheManager, MemoryCache


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


# MemoryCache

def test_memory_cache_expires_entries():
    clock = FakeClock()
    cache = MemoryCache(clock=clock)

    asyncio.run(cache.set("key", {"a": 1}, ttl_seconds=10))
    clock.now = 9.9
    assert asyncio.run(cache.get("key")) == {"a": 1}

    clock.now = 10
    assert asyncio.run(cache.get("key")) is None
    assert cache.size() == 0


def test_memory_cache_uses_default_ttl():
    clock = FakeClock()
    cache = MemoryCache(default_ttl_seconds=5, clock=clock)

    asyncio.run(cache.set("key", "value"))
    clock.now = 5

    assert not asyncio.run(cache.exists("key"))


def test_memory_cache_evicts_oldest_entries():
    cache = MemoryCache(max_entries=2)

    asyncio.run(cache.set("a", 1))
    asyncio.run(cache.set("b", 2))
    asyncio.run(cache.set("a", 3))
    asyncio.run(cache.set("c", 4))

    assert asyncio.run(cache.get("b")) is None
    assert asyncio.run(cache.get("a")) == 3
    assert asyncio.run(cache.get("c")) == 4


@given(keys=st.lists(st.sampled_from("abcdefgh"), max_size=40), max_entries=st.integers(1, 5))
@settings(max_examples=50)
def test_memory_cache_never_exceeds_capacity(keys, max_entries):
    """
    **Property: Bounded cache**

    However many keys are written, the cache holds at most max_entries,
    and the most recent write is always readable.
    """
    cache = MemoryCache(max_entries=max_entries)

    for index, key in enumerate(keys):
        asyncio.run(cache.set(key, index))
        assert cache.size() <= max_entries
        assert asyncio.run(cache.get(key)) == index


def test_memory_cache_delete_and_clear():
    cache = MemoryCache()
    asyncio.run(cache.set("a", 1))
    asyncio.run(cache.set("b", 2))

    assert asyncio.run(cache.delete("a"))
    assert not asyncio.run(cache.delete("a"))

    asyncio.run(cache.clear())
    assert cache.size() == 0
    assert asyncio.run(cache.health_check())


# CacheManager

def test_disabled_cache_manager_misses_everything():
    cache = CacheManager()

    assert not cache.is_enabled
    assert asyncio.run(cache.get("key")) is None
    assert asyncio.run(cache.set("key", 1)) is False
    assert asyncio.run(cache.delete("key")) is False
    assert asyncio.run(cache.exists("key")) is False
    assert asyncio.run(cache.invalidate_pattern("search:*")) == 0
    assert asyncio.run(cache.health_check()) is False


def test_cache_manager_stores_json_with_expiry():
    client = AsyncMock()
    cache = CacheManager(client)

    stored = asyncio.run(cache.set("search:index", [{"createdAt": datetime(2025, 1, 1)}], ttl_seconds=30))

    assert stored
    key, ttl, payload = client.setex.await_args.args
    assert key == "search:index"
    assert ttl == 30
    assert payload == '[{"createdAt": "2025-01-01 00:00:00"}]'


def test_cache_manager_decodes_json():
    client = AsyncMock()
    client.get.return_value = '{"items": [1, 2]}'
    cache = CacheManager(client)

    assert asyncio.run(cache.get("key")) == {"items": [1, 2]}


def test_cache_manager_treats_empty_value_as_miss():
    client = AsyncMock()
    client.get.return_value = None

    assert asyncio.run(CacheManager(client).get("key")) is None


@pytest.mark.parametrize("error", [
    redis.ConnectionError("refused"),
    redis.TimeoutError("timed out"),
    OSError("network unreachable"),
])
def test_cache_manager_degrades_on_redis_errors(error):
    client = AsyncMock()
    for method in (client.get, client.setex, client.delete, client.exists, client.keys, client.ping):
        method.side_effect = error
    cache = CacheManager(client)

    assert asyncio.run(cache.get("key")) is None
    assert asyncio.run(cache.set("key", 1)) is False
    assert asyncio.run(cache.delete("key")) is False
    assert asyncio.run(cache.exists("key")) is False
    assert asyncio.run(cache.invalidate_pattern("search:*")) == 0
    assert asyncio.run(cache.health_check()) is False


def test_cache_manager_corrupt_value_is_a_miss():
    client = AsyncMock()
    client.get.return_value = "{not json"

    assert asyncio.run(CacheManager(client).get("key")) is None


def test_cache_manager_invalidate_pattern_deletes_matches():
    client = AsyncMock()
    client.keys.return_value = ["search:index", "search:other"]
    cache = CacheManager(client)

    assert asyncio.run(cache.invalidate_pattern("search:*")) == 2
    client.delete.assert_awaited_once_with("search:index", "search:other")
