"""
Redis-backed cache for search data.

Every operation degrades instead of raising: with no client configured, or
when Redis errors, reads miss and writes report False. Callers always fall
back to the catalog store.
"""

import json
import logging
from typing import Any, Optional

import redis.asyncio as redis

logger = logging.getLogger(__name__)


class CacheManager:
    """JSON cache over an optional Redis client"""

    class TTL:
        """TTL presets in seconds"""
        SHORT = 60
        MEDIUM = 300
        LONG = 1800
        VERY_LONG = 3600
        DAY = 86400

    def __init__(self, client: Optional[redis.Redis] = None):
        self.client = client

    @property
    def is_enabled(self) -> bool:
        return self.client is not None

    async def get(self, key: str) -> Optional[Any]:
        """
        Get a cached value.

        Args:
            key: Cache key

        Returns:
            Decoded value, or None on a miss or when the cache is unavailable
        """
        if not self.is_enabled:
            return None

        try:
            cached = await self.client.get(key)
            if not cached:
                return None
            return json.loads(cached)
        except (redis.RedisError, OSError, ValueError) as e:
            logger.warning(f"Cache get error for key {key}: {e}")
            return None

    async def set(self, key: str, value: Any, ttl_seconds: int = TTL.MEDIUM) -> bool:
        """
        Store a value with an expiry.

        Args:
            key: Cache key
            value: JSON-serialisable value
            ttl_seconds: Time to live

        Returns:
            True if the value was stored
        """
        if not self.is_enabled:
            return False

        try:
            await self.client.setex(key, ttl_seconds, json.dumps(value, default=str))
            return True
        except (redis.RedisError, OSError, TypeError) as e:
            logger.warning(f"Cache set error for key {key}: {e}")
            return False

    async def delete(self, key: str) -> bool:
        if not self.is_enabled:
            return False

        try:
            await self.client.delete(key)
            return True
        except (redis.RedisError, OSError) as e:
            logger.warning(f"Cache delete error for key {key}: {e}")
            return False

    async def invalidate_pattern(self, pattern: str) -> int:
        """
        Delete every key matching a glob pattern.

        Returns:
            Number of keys deleted
        """
        if not self.is_enabled:
            return 0

        try:
            keys = await self.client.keys(pattern)
            if not keys:
                return 0
            await self.client.delete(*keys)
            return len(keys)
        except (redis.RedisError, OSError) as e:
            logger.warning(f"Cache invalidation error for pattern {pattern}: {e}")
            return 0

    async def exists(self, key: str) -> bool:
        if not self.is_enabled:
            return False

        try:
            return await self.client.exists(key) == 1
        except (redis.RedisError, OSError) as e:
            logger.warning(f"Cache exists check error for key {key}: {e}")
            return False

    async def health_check(self) -> bool:
        """Ping Redis; False when disabled or unreachable"""
        if not self.is_enabled:
            return False

        try:
            return bool(await self.client.ping())
        except (redis.RedisError, OSError) as e:
            logger.warning(f"Redis health check failed: {e}")
            return False
