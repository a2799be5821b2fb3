"""热榜抓取器模块。"""

from src.modules.hotnews.infrastructure.fetchers.hotlist import (
    HotListFetcher,
    HotListItemPayload,
    HotListPayload,
)

__all__ = [
    "HotListFetcher",
    "HotListItemPayload",
    "HotListPayload",
]
