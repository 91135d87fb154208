"""
Redis client - resolver result caching.
Fails gracefully when Redis is down: reads miss, writes report False.
"""

import hashlib
import json
import logging
from typing import Any

from redis.asyncio import Redis

from catalog_graphql.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Listing (filter only) and text search results are cached under separate prefixes
CACHE_PREFIX_CATEGORY = "catalog_graphql:category:"
CACHE_PREFIX_SEARCH = "catalog_graphql:search:"

_redis: Redis | None = None


async def get_redis() -> Redis:
    """Shared Redis connection (pool managed by redis-py)."""
    global _redis
    if _redis is None:
        _redis = Redis.from_url(
            settings.redis_url,
            encoding="utf-8",
            decode_responses=True,
        )
    return _redis


async def close_redis() -> None:
    global _redis
    if _redis is not None:
        await _redis.aclose()
        _redis = None


async def cache_get(key: str) -> str | None:
    """Get value from cache. Returns None if miss or error."""
    try:
        client = await get_redis()
        return await client.get(key)
    except Exception as e:
        logger.debug("cache_get failed for %s: %s", key, e)
        return None


async def cache_set(key: str, value: str | dict[str, Any], ttl_seconds: int = 300) -> bool:
    """Set value in cache with TTL. Dict is JSON-serialized."""
    try:
        client = await get_redis()
        if isinstance(value, dict):
            value = json.dumps(value)
        await client.setex(key, ttl_seconds, value)
        return True
    except Exception as e:
        logger.debug("cache_set failed for %s: %s", key, e)
        return False


async def cache_delete(key: str) -> bool:
    try:
        client = await get_redis()
        await client.delete(key)
        return True
    except Exception:
        return False


class ResultCache:
    """Resolver result cache keyed by a fingerprint of the built query."""

    def __init__(self, ttl_seconds: int | None = None):
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.result_cache_ttl

    @staticmethod
    def key_for(query_state: dict[str, Any], searching: bool) -> str:
        prefix = CACHE_PREFIX_SEARCH if searching else CACHE_PREFIX_CATEGORY
        digest = hashlib.sha256(json.dumps(query_state, sort_keys=True, default=str).encode("utf-8")).hexdigest()
        return prefix + digest

    async def get(self, key: str) -> dict[str, Any] | None:
        cached = await cache_get(key)
        if not cached:
            return None
        try:
            return json.loads(cached)
        except ValueError:
            logger.warning("Discarding unreadable cache entry %s", key)
            return None

    async def set(self, key: str, result: dict[str, Any]) -> bool:
        return await cache_set(key, result, self.ttl_seconds)
