"""Fetcher domain port."""

from typing import Protocol

from src.modules.hotnews.domain.entities import SourceResult


class SourceFetcher(Protocol):
    """Port for fetching one hot list.

    实现需在失败时抛出 UnknownSourceError 或 UpstreamError，不做重试。
    """

    async def fetch(self, source_id: int) -> SourceResult: ...
