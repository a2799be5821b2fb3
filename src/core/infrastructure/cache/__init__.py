"""进程内缓存封装。"""

from src.core.config import settings
from src.core.infrastructure.cache.keys import CacheKeys
from src.core.infrastructure.cache.ttl_cache import CacheEntry, TTLCache

# 全局缓存实例
ttl_cache = TTLCache(max_entries=settings.CACHE_MAX_ENTRIES)


def get_ttl_cache() -> TTLCache:
    """获取缓存依赖。"""
    return ttl_cache


__all__ = [
    "CacheEntry",
    "CacheKeys",
    "TTLCache",
    "get_ttl_cache",
    "ttl_cache",
]
