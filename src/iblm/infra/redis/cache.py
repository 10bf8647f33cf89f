"""Redis-backed content caching for iblm.

Generated batches are memoized by seed topic, child age and the
recommendation parameters, so different behavioral states get different
content. Assets are memoized by prompt.
"""

import json

from pydantic import ValidationError

from iblm.infra.redis.client import RedisClient
from iblm.interfaces.content import ContentGeneratorInterface
from iblm.logging import get_logger
from iblm.models.content import ChildProfile, ContentSkeleton
from iblm.models.recommendation import ContentRecommendation
from iblm.utils.hashing import hash_text, stable_hash

__all__ = [
    "CachedContentGenerator",
    "ContentCache",
]

logger = get_logger(__name__)


class ContentCache:
    """Redis cache for generated batches and assets.

    Falls back gracefully if Redis is unavailable.
    """

    def __init__(
        self,
        redis_client: RedisClient,
        ttl: int = 86400,  # 24 hours
        prefix: str = "iblm:",
    ) -> None:
        self._redis = redis_client
        self._ttl = ttl
        self._prefix = prefix

    @staticmethod
    def batch_key(
        seed_topic: str,
        profile: ChildProfile | None,
        recommendation: ContentRecommendation,
        count: int,
    ) -> str:
        age = profile.child_age if profile else "def"
        return "batch:" + stable_hash(
            seed_topic,
            age,
            recommendation.difficulty,
            recommendation.format,
            recommendation.topic_category,
            count,
        )

    @staticmethod
    def asset_key(prompt: str) -> str:
        return "asset:" + hash_text(prompt)

    async def get_batch(self, key: str) -> list[ContentSkeleton] | None:
        if not self._redis.is_connected:
            return None
        cached = await self._redis.get(self._prefix + key)
        if not cached:
            return None
        try:
            return [ContentSkeleton.model_validate(raw) for raw in json.loads(cached)]
        except (json.JSONDecodeError, TypeError, ValidationError):
            return None

    async def set_batch(self, key: str, skeletons: list[ContentSkeleton]) -> bool:
        if not self._redis.is_connected:
            return False
        payload = json.dumps([s.model_dump() for s in skeletons])
        return await self._redis.set(self._prefix + key, payload, ex=self._ttl)

    async def get_asset(self, key: str) -> str | None:
        if not self._redis.is_connected:
            return None
        return await self._redis.get(self._prefix + key)

    async def set_asset(self, key: str, asset: str) -> bool:
        if not self._redis.is_connected:
            return False
        return await self._redis.set(self._prefix + key, asset, ex=self._ttl)


class CachedContentGenerator(ContentGeneratorInterface):
    """Content generator decorator that memoizes results in Redis.

    Empty batches and failed assets are never cached, so a transient
    provider failure is retried on the next request.
    """

    def __init__(self, inner: ContentGeneratorInterface, cache: ContentCache) -> None:
        self._inner = inner
        self._cache = cache

    @property
    def inner(self) -> ContentGeneratorInterface:
        return self._inner

    async def generate_content_batch(
        self,
        seed_topic: str,
        profile: ChildProfile | None,
        recommendation: ContentRecommendation,
        count: int = 3,
    ) -> list[ContentSkeleton]:
        key = ContentCache.batch_key(seed_topic, profile, recommendation, count)
        cached = await self._cache.get_batch(key)
        if cached is not None:
            logger.debug("content_batch_cache_hit", seed_topic=seed_topic)
            return cached

        skeletons = await self._inner.generate_content_batch(
            seed_topic, profile, recommendation, count
        )
        if skeletons:
            await self._cache.set_batch(key, skeletons)
        return skeletons

    async def generate_asset(self, prompt: str) -> str | None:
        key = ContentCache.asset_key(prompt)
        cached = await self._cache.get_asset(key)
        if cached is not None:
            logger.debug("asset_cache_hit")
            return cached

        asset = await self._inner.generate_asset(prompt)
        if asset:
            await self._cache.set_asset(key, asset)
        return asset
