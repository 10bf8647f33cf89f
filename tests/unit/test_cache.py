"""Unit tests for Redis-backed content caching."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from iblm.infra.redis.cache import CachedContentGenerator, ContentCache
from iblm.models.content import ChildProfile, ContentSkeleton
from iblm.services.policy import CALMING_ESCAPE, GENERAL_DISCOVERY


@pytest.fixture
def redis_client() -> MagicMock:
    """In-memory stand-in for RedisClient."""
    store: dict[str, str] = {}
    client = MagicMock()
    client.is_connected = True

    async def _get(key: str) -> str | None:
        return store.get(key)

    async def _set(key: str, value: str, ex: int | None = None) -> bool:
        store[key] = value
        return True

    client.get = AsyncMock(side_effect=_get)
    client.set = AsyncMock(side_effect=_set)
    client.store = store
    return client


class TestContentCache:
    def test_batch_key_depends_on_recommendation(self) -> None:
        a = ContentCache.batch_key("Ocean", None, GENERAL_DISCOVERY, 3)
        b = ContentCache.batch_key("Ocean", None, CALMING_ESCAPE, 3)
        assert a != b

    def test_batch_key_depends_on_age(self) -> None:
        a = ContentCache.batch_key("Ocean", ChildProfile(child_age=4), GENERAL_DISCOVERY, 3)
        b = ContentCache.batch_key("Ocean", ChildProfile(child_age=9), GENERAL_DISCOVERY, 3)
        assert a != b

    @pytest.mark.asyncio
    async def test_batch_roundtrip(self, redis_client: MagicMock) -> None:
        cache = ContentCache(redis_client, ttl=60)
        skeletons = [ContentSkeleton(title="Moon", fact="Dusty.", topic="Space")]

        assert await cache.set_batch("k", skeletons)
        assert await cache.get_batch("k") == skeletons
        redis_client.set.assert_awaited_once()
        assert redis_client.set.await_args.kwargs["ex"] == 60

    @pytest.mark.asyncio
    async def test_corrupt_batch_is_miss(self, redis_client: MagicMock) -> None:
        redis_client.store["iblm:k"] = json.dumps([{"nope": 1}])
        cache = ContentCache(redis_client)
        assert await cache.get_batch("k") is None

    @pytest.mark.asyncio
    async def test_disconnected_is_miss(self, redis_client: MagicMock) -> None:
        redis_client.is_connected = False
        cache = ContentCache(redis_client)
        assert await cache.get_asset("k") is None
        assert await cache.set_asset("k", "v") is False
        redis_client.get.assert_not_awaited()


class TestCachedContentGenerator:
    @pytest.mark.asyncio
    async def test_batch_memoized(
        self, redis_client: MagicMock, mock_generator: AsyncMock
    ) -> None:
        cached = CachedContentGenerator(mock_generator, ContentCache(redis_client))

        first = await cached.generate_content_batch("Ocean", None, GENERAL_DISCOVERY, 2)
        second = await cached.generate_content_batch("Ocean", None, GENERAL_DISCOVERY, 2)

        assert first == second
        mock_generator.generate_content_batch.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_different_recommendation_not_shared(
        self, redis_client: MagicMock, mock_generator: AsyncMock
    ) -> None:
        cached = CachedContentGenerator(mock_generator, ContentCache(redis_client))

        await cached.generate_content_batch("Ocean", None, GENERAL_DISCOVERY, 2)
        await cached.generate_content_batch("Ocean", None, CALMING_ESCAPE, 2)

        assert mock_generator.generate_content_batch.await_count == 2

    @pytest.mark.asyncio
    async def test_asset_memoized(
        self, redis_client: MagicMock, mock_generator: AsyncMock
    ) -> None:
        cached = CachedContentGenerator(mock_generator, ContentCache(redis_client))

        assert await cached.generate_asset("Moon") == "https://img.test/asset.png"
        assert await cached.generate_asset("Moon") == "https://img.test/asset.png"
        mock_generator.generate_asset.assert_awaited_once_with("Moon")

    @pytest.mark.asyncio
    async def test_failures_not_cached(
        self, redis_client: MagicMock, mock_generator: AsyncMock
    ) -> None:
        mock_generator.generate_asset.return_value = None
        mock_generator.generate_content_batch.return_value = []
        cached = CachedContentGenerator(mock_generator, ContentCache(redis_client))

        assert await cached.generate_asset("Moon") is None
        assert await cached.generate_content_batch("Ocean", None, GENERAL_DISCOVERY, 2) == []
        assert redis_client.store == {}
