"""Redis infrastructure for iblm (optional)."""

from iblm.infra.redis.cache import CachedContentGenerator, ContentCache
from iblm.infra.redis.client import RedisClient

__all__ = ["CachedContentGenerator", "ContentCache", "RedisClient"]
