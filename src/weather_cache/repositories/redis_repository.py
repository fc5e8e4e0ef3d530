"""Redis implementation of CacheStore.

Wraps a single long-lived ``redis.asyncio.Redis`` client. The client owns a
connection pool: every command borrows a connection and hands it back on
every exit path, so the repository never opens or closes connections itself
while serving a request.
"""

import logging

import redis.asyncio as redis
from redis.exceptions import RedisError

from weather_cache.config import get_redis_client
from weather_cache.errors import CacheBackendError

logger = logging.getLogger(__name__)


class RedisCacheRepository:
    """Redis implementation of the CacheStore protocol.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Lifecycle is owned by the application lifespan: the client is created
    once at startup and closed once at shutdown via ``close()``.
    """

    def __init__(self, redis_client: redis.Redis) -> None:
        """Initialize the Redis cache repository.

        Args:
            redis_client: Shared async Redis client.
        """
        self._client = redis_client

    @classmethod
    def create(cls, redis_client: redis.Redis | None = None) -> "RedisCacheRepository":
        """Factory method to create RedisCacheRepository with defaults.

        Args:
            redis_client: Redis client. If None, builds one from settings.

        Returns:
            Configured RedisCacheRepository
        """
        return cls(redis_client=redis_client or get_redis_client())

    async def get(self, key: str) -> str | None:
        """Fetch a cached value.

        Args:
            key: The cache key

        Returns:
            The stored string, or None on miss

        Raises:
            CacheBackendError: If Redis is unreachable or the command fails
        """
        try:
            value = await self._client.get(key)
        except RedisError as e:
            raise CacheBackendError(f"Cache read failed for {key}: {e}") from e

        if isinstance(value, bytes):
            value = value.decode()
        return value

    async def set(self, key: str, value: str, ttl: int) -> None:
        """Store a value with an expiry, replacing any previous value.

        Args:
            key: The cache key
            value: Serialized payload
            ttl: Time-to-live in seconds

        Raises:
            CacheBackendError: If Redis is unreachable or the command fails
        """
        try:
            await self._client.set(key, value, ex=ttl)
        except RedisError as e:
            raise CacheBackendError(f"Cache write failed for {key}: {e}") from e

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.warning("Redis health check failed: %s", e)
            return False

    async def close(self) -> None:
        """Close the client and its pool. Only called at shutdown."""
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
