"""Redis client for iblm.

This module provides an optional async Redis client wrapper used for
caching generated content. If Redis is not configured or unreachable,
every operation degrades to a cache miss.
"""

from typing import TYPE_CHECKING, Any

from iblm.config import RedisSettings
from iblm.logging import get_logger
from iblm.utils.lazy_import import lazy_import

if TYPE_CHECKING:
    from redis.asyncio import Redis

__all__ = [
    "RedisClient",
]

logger = get_logger(__name__)

get_async_redis = lazy_import("redis.asyncio", "Redis")


class RedisClient:
    """Async Redis client wrapper (optional).

    Example:
        async with RedisClient(settings) as client:
            await client.set("key", "value", ex=60)
            value = await client.get("key")
    """

    def __init__(self, settings: RedisSettings) -> None:
        self._settings = settings
        self._redis: "Redis | None" = None
        self._connected = False

    @property
    def is_enabled(self) -> bool:
        """Check if Redis is enabled in configuration."""
        return self._settings.enabled and self._settings.url is not None

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def connect(self) -> bool:
        """Initialize connection to Redis.

        Returns:
            True if connected successfully, False otherwise
        """
        if self._redis is not None:
            return self._connected

        if not self.is_enabled:
            logger.info("redis_disabled", reason="not configured")
            return False

        try:
            Redis = get_async_redis()  # noqa: N806
            self._redis = Redis.from_url(  # type: ignore[attr-defined]
                self._settings.url,
                decode_responses=True,
            )
            await self._redis.ping()
            self._connected = True
            logger.info("connected_to_redis", url=self._settings.url)
            return True
        except Exception as e:
            logger.warning(
                "redis_connection_failed",
                error=str(e),
                reason="Redis unavailable, caching disabled",
            )
            self._redis = None
            self._connected = False
            return False

    async def disconnect(self) -> None:
        if self._redis:
            await self._redis.aclose()
            self._redis = None
            self._connected = False
            logger.info("disconnected_from_redis")

    async def get(self, key: str) -> str | None:
        """Get value from Redis, or None if missing or not connected."""
        if not self._connected or not self._redis:
            return None
        try:
            return await self._redis.get(key)  # type: ignore[no-any-return]
        except Exception as e:
            logger.debug("redis_get_error", key=key, error=str(e))
            return None

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        """Set value in Redis.

        Args:
            key: Cache key
            value: Value to cache
            ex: Expiration time in seconds

        Returns:
            True if successful, False otherwise
        """
        if not self._connected or not self._redis:
            return False
        try:
            await self._redis.set(key, value, ex=ex)
            return True
        except Exception as e:
            logger.debug("redis_set_error", key=key, error=str(e))
            return False

    async def __aenter__(self) -> "RedisClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.disconnect()
