"""
Result cache tests - key prefixes and graceful JSON handling (Redis calls patched).
"""

import json

import pytest

from catalog_graphql.cache import redis_client
from catalog_graphql.cache.redis_client import CACHE_PREFIX_CATEGORY, CACHE_PREFIX_SEARCH, ResultCache


def test_key_prefix_and_stability():
    state = {"filters": {"a": 1}, "text": None}
    key = ResultCache.key_for(state, searching=False)
    assert key.startswith(CACHE_PREFIX_CATEGORY)
    assert key == ResultCache.key_for({"text": None, "filters": {"a": 1}}, searching=False)
    assert ResultCache.key_for(state, searching=True).startswith(CACHE_PREFIX_SEARCH)


@pytest.mark.asyncio
async def test_get_and_set_round_trip_through_redis_helpers(monkeypatch):
    store = {}

    async def fake_get(key):
        return store.get(key)

    async def fake_set(key, value, ttl_seconds=300):
        store[key] = json.dumps(value)
        return True

    monkeypatch.setattr(redis_client, "cache_get", fake_get)
    monkeypatch.setattr(redis_client, "cache_set", fake_set)

    cache = ResultCache(ttl_seconds=60)
    assert await cache.get("k") is None
    assert await cache.set("k", {"total_count": 3, "items": []})
    assert await cache.get("k") == {"total_count": 3, "items": []}


@pytest.mark.asyncio
async def test_unreadable_entry_is_a_miss(monkeypatch):
    async def fake_get(key):
        return "{not json"

    monkeypatch.setattr(redis_client, "cache_get", fake_get)
    assert await ResultCache().get("k") is None
