"""
Cache repository for Redis operations.

Caching is best-effort: every Redis or serialization failure is logged and
reported as a miss (or a failed write), never raised to the caller.
"""
import json
from datetime import timedelta
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import RedisError

import structlog

logger = structlog.get_logger()


class CacheRepository:
    """
    Repository for Redis caching operations.

    Provides:
    - Get/set with automatic JSON serialization
    - TTL management
    - Availability checks for health reporting
    """

    def __init__(
        self,
        redis: Redis,
        default_ttl: timedelta = timedelta(minutes=30),
        namespace: str = "smart_pills",
    ):
        """
        Initialize the cache repository.

        Args:
            redis: Redis client instance
            default_ttl: Default TTL for cached values
            namespace: Prefix for every key
        """
        self.redis = redis
        self.default_ttl = default_ttl
        self.namespace = namespace

    def _key(self, *parts: str) -> str:
        """Build a cache key from parts."""
        return ":".join([self.namespace, *(str(p) for p in parts)])

    async def get(self, *key_parts: str) -> Any | None:
        """
        Get a cached value.

        Args:
            *key_parts: Parts of the cache key

        Returns:
            Cached value or None if not found
        """
        key = self._key(*key_parts)
        try:
            data = await self.redis.get(key)
            if data:
                return json.loads(data)
            return None
        except RedisError as e:
            logger.warning("Cache get failed", key=key, error=str(e))
            return None
        except json.JSONDecodeError as e:
            logger.warning("Cache decode failed", key=key, error=str(e))
            return None

    async def set(
        self,
        *key_parts: str,
        value: Any,
        ttl: timedelta | None = None,
    ) -> bool:
        """
        Set a cached value.

        Args:
            *key_parts: Parts of the cache key
            value: Value to cache (will be JSON serialized)
            ttl: Time to live (uses default if not specified)

        Returns:
            True if successful, False otherwise
        """
        key = self._key(*key_parts)
        try:
            ttl_seconds = int((ttl or self.default_ttl).total_seconds())
            serialized = json.dumps(value, default=str)
            await self.redis.setex(key, ttl_seconds, serialized)
            return True
        except RedisError as e:
            logger.warning("Cache set failed", key=key, error=str(e))
            return False
        except (TypeError, ValueError) as e:
            logger.warning("Cache serialize failed", key=key, error=str(e))
            return False

    async def delete(self, *key_parts: str) -> bool:
        """
        Delete a cached value.

        Returns:
            True if the key was deleted, False otherwise
        """
        key = self._key(*key_parts)
        try:
            result = await self.redis.delete(key)
            return result > 0
        except RedisError as e:
            logger.warning("Cache delete failed", key=key, error=str(e))
            return False

    async def ping(self) -> bool:
        """Check whether Redis answers."""
        try:
            return bool(await self.redis.ping())
        except (RedisError, OSError) as e:
            logger.warning("Cache ping failed", error=str(e))
            return False

    async def close(self) -> None:
        try:
            await self.redis.aclose()
        except RedisError as e:
            logger.warning("Cache close failed", error=str(e))


async def connect_cache(redis_url: str) -> CacheRepository | None:
    """
    Connect to Redis and verify it answers.

    Returns None when Redis is not configured or unreachable so the
    application runs without a cache.
    """
    if not redis_url:
        logger.info("Redis not configured, running without cache")
        return None

    try:
        redis = Redis.from_url(redis_url, decode_responses=True)
        await redis.ping()
    except (RedisError, OSError, ValueError) as e:
        logger.warning("Redis not available, running without cache", error=str(e))
        return None

    logger.info("Redis connected successfully")
    return CacheRepository(redis)
