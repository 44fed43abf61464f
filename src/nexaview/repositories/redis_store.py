"""Redis implementation of KeyValueStore.

Values are written with SET ... EX so Redis owns the expiry. Redis serializes
concurrent writes to the same key; the last write wins.
"""

import logging

import redis.asyncio as redis
from redis.exceptions import RedisError

from nexaview.config import get_redis_client
from nexaview.exceptions import StoreError

logger = logging.getLogger(__name__)


class RedisKeyValueStore:
    """Redis implementation of the KeyValueStore protocol.

    This class satisfies the protocol through structural typing - no
    explicit inheritance needed. Connection and protocol errors are raised
    as StoreError so callers never see redis-py exception types.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize the Redis store.

        Args:
            redis_client: asyncio Redis client instance. If None, creates default.
        """
        self._client = redis_client or get_redis_client()

    @classmethod
    def create(cls, redis_client: redis.Redis | None = None) -> "RedisKeyValueStore":
        """Factory method to create RedisKeyValueStore with defaults.

        Args:
            redis_client: Client to wrap. If None, one is built from settings.

        Returns:
            Configured RedisKeyValueStore
        """
        return cls(redis_client=redis_client)

    async def get(self, key: str) -> str | None:
        """Read a value from Redis.

        Args:
            key: The storage key

        Returns:
            The stored value, or None if absent or expired

        Raises:
            StoreError: If Redis cannot be reached
        """
        try:
            value = await self._client.get(key)
        except RedisError as e:
            raise StoreError(f"Redis GET {key} failed: {e}") from e

        if isinstance(value, bytes):
            return value.decode()
        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Write a value to Redis with an expiry.

        Args:
            key: The storage key
            value: Serialized payload
            ttl_seconds: Time-to-live in seconds

        Raises:
            StoreError: If Redis cannot be reached
        """
        try:
            await self._client.set(key, value, ex=ttl_seconds)
        except RedisError as e:
            raise StoreError(f"Redis SET {key} failed: {e}") from e
        logger.debug("Stored %s in Redis (ttl=%ss)", key, ttl_seconds)

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
        """Close the Redis connection pool."""
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
