"""热榜聚合服务。

并行抓取多个源，与截止时间竞速：
- 全部完成：失败的源使用降级数据，结果缓存 5 分钟
- 截止时间先到：已完成的使用真实数据，其余使用降级数据，结果缓存 2 分钟
- 其他异常：全部使用降级数据，不缓存
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Sequence
from dataclasses import dataclass

from loguru import logger

from src.core.config import settings
from src.core.domain.exceptions import ValidationError
from src.core.infrastructure.cache import CacheKeys, TTLCache
from src.core.infrastructure.logging import BusinessEvents
from src.modules.hotnews.application.fallback import build_fallback_result
from src.modules.hotnews.domain.entities import SourceResult
from src.modules.hotnews.domain.fetcher import SourceFetcher
from src.modules.hotnews.domain.registry import SourceRegistry


@dataclass
class FanOutOutcome:
    """一次并行抓取的结果。"""

    results: list[SourceResult]
    succeeded: int
    timed_out: bool


class HotNewsAggregator:
    """Aggregate hot lists from several sources behind one call."""

    def __init__(
        self,
        registry: SourceRegistry,
        fetcher: SourceFetcher,
        cache: TTLCache,
        *,
        full_ttl_sec: float | None = None,
        partial_ttl_sec: float | None = None,
        cancel_on_timeout: bool | None = None,
    ) -> None:
        self.registry = registry
        self.fetcher = fetcher
        self.cache = cache
        self.full_ttl_sec = full_ttl_sec or settings.HOTNEWS_CACHE_TTL_SEC
        self.partial_ttl_sec = partial_ttl_sec or settings.HOTNEWS_PARTIAL_CACHE_TTL_SEC
        self.cancel_on_timeout = (
            settings.HOTNEWS_CANCEL_ON_TIMEOUT
            if cancel_on_timeout is None
            else cancel_on_timeout
        )

    async def get_hot_news(
        self,
        source_ids: Sequence[int],
        timeout_seconds: float | None = None,
    ) -> list[SourceResult]:
        """获取多个源的热榜，结果顺序与 source_ids 一致。

        Raises:
            ValidationError: source_ids 为空
            UnknownSourceError: 包含未注册的源 ID
        """
        ids = list(source_ids)
        if not ids:
            raise ValidationError("Please provide valid source IDs")
        for source_id in ids:
            self.registry.require(source_id)

        cache_key = CacheKeys.hotnews(ids)
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info(f"返回缓存数据: {cache_key}")
            return list(cached)

        timeout = (
            settings.HOTNEWS_AGGREGATION_TIMEOUT_SEC
            if timeout_seconds is None
            else timeout_seconds
        )
        logger.info(f"开始并行获取{len(ids)}个站点数据，超时设置: {timeout}秒")
        start_time = time.time()

        try:
            outcome = await self._fan_out(ids, timeout)
        except Exception as exc:
            logger.exception(f"获取热点数据失败: {exc}")
            BusinessEvents.feature_degraded(
                feature="hotnews_aggregation", reason=str(exc), cache_key=cache_key
            )
            return [self.fallback_for(source_id) for source_id in ids]

        latency_ms = int((time.time() - start_time) * 1000)
        BusinessEvents.aggregation_completed(
            cache_key=cache_key,
            requested=len(ids),
            succeeded=outcome.succeeded,
            timed_out=outcome.timed_out,
            latency_ms=latency_ms,
        )

        if outcome.timed_out:
            # 等待期间可能已有并发请求写入了同一 key
            current = self.cache.get(cache_key)
            if current is not None:
                logger.info(f"超时后发现更新的缓存数据，直接返回: {cache_key}")
                return list(current)
            logger.info(
                f"请求超时({timeout}秒)，返回{len(outcome.results)}个结果"
                f"（包含{outcome.succeeded}个有效结果）"
            )
            self.cache.set(cache_key, tuple(outcome.results), self.partial_ttl_sec)
        else:
            logger.info(f"成功获取{len(outcome.results)}个站点数据")
            self.cache.set(cache_key, tuple(outcome.results), self.full_ttl_sec)

        return outcome.results

    def fallback_for(self, source_id: int) -> SourceResult:
        return build_fallback_result(self.registry.require(source_id))

    def clear_cache(self) -> None:
        """清空聚合缓存。"""
        self.cache.clear()
        logger.info("缓存已清理")

    async def _fan_out(self, ids: list[int], timeout: float) -> FanOutOutcome:
        # 重复 ID 只请求一次
        tasks: dict[int, asyncio.Task[SourceResult]] = {
            source_id: asyncio.create_task(
                self.fetcher.fetch(source_id), name=f"hotnews-source-{source_id}"
            )
            for source_id in dict.fromkeys(ids)
        }

        try:
            done, pending = await asyncio.wait(tasks.values(), timeout=max(timeout, 0))
        except BaseException:
            for task in tasks.values():
                task.cancel()
            raise

        for task in pending:
            task.add_done_callback(_consume_orphan)
            if self.cancel_on_timeout:
                task.cancel()

        results: list[SourceResult] = []
        settled: dict[int, SourceResult | None] = {}
        for source_id, task in tasks.items():
            settled[source_id] = self._settled_result(source_id, task, done)

        succeeded = 0
        for source_id in ids:
            result = settled[source_id]
            if result is None:
                logger.warning(f"站点{source_id}请求失败或超时，使用降级数据")
                result = self.fallback_for(source_id)
            else:
                succeeded += 1
            results.append(result)

        return FanOutOutcome(
            results=results,
            succeeded=succeeded,
            timed_out=bool(pending),
        )

    @staticmethod
    def _settled_result(
        source_id: int,
        task: asyncio.Task[SourceResult],
        done: set[asyncio.Task[SourceResult]],
    ) -> SourceResult | None:
        if task not in done:
            return None
        if task.cancelled():
            return None
        exc = task.exception()
        if exc is not None:
            BusinessEvents.source_fetch_failed(source_id=source_id, error=str(exc))
            return None
        return task.result()


def _consume_orphan(task: asyncio.Task[SourceResult]) -> None:
    """截止后仍在运行的请求：读取其结果，避免未处理异常告警。"""
    if task.cancelled():
        logger.debug(f"{task.get_name()} cancelled after deadline")
        return
    exc = task.exception()
    if exc is not None:
        logger.debug(f"{task.get_name()} failed after deadline: {exc}")
    else:
        logger.debug(f"{task.get_name()} finished after deadline, result discarded")
