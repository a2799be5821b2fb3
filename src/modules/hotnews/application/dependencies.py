"""Hot news module application dependencies."""

from functools import lru_cache

from src.core.infrastructure.cache import get_ttl_cache
from src.modules.hotnews.application.aggregation_service import HotNewsAggregator
from src.modules.hotnews.domain.registry import SourceRegistry, source_registry
from src.modules.hotnews.infrastructure.fetchers import HotListFetcher


def get_source_registry() -> SourceRegistry:
    return source_registry


@lru_cache
def get_hot_news_aggregator() -> HotNewsAggregator:
    """聚合服务单例（共享进程内缓存）。"""
    registry = get_source_registry()
    return HotNewsAggregator(
        registry=registry,
        fetcher=HotListFetcher(registry),
        cache=get_ttl_cache(),
    )
