"""进程内 TTL 缓存。

提供带过期时间的 key/value 存储，支持：
- 读取时惰性淘汰过期条目
- 可选的容量上限（LRU 淘汰）
- 后台定期清理任务（不依赖读流量）
"""

from __future__ import annotations

import asyncio
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from loguru import logger


@dataclass(frozen=True)
class CacheEntry:
    """缓存条目。写入即替换，不做原地修改。"""

    key: str
    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class TTLCache:
    """带过期时间的内存缓存。

    单事件循环内使用，不需要加锁。
    """

    def __init__(
        self,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """初始化缓存。

        Args:
            max_entries: 最大条目数，超出时淘汰最久未使用的条目；None 表示不限
            clock: 时钟函数（秒），测试时可替换
        """
        if max_entries is not None and max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._max_entries = max_entries
        self._clock = clock
        self._sweeper: asyncio.Task[None] | None = None

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    # ============ 缓存操作 ============

    def get(self, key: str) -> Any | None:
        """获取未过期的值，过期条目在此处被删除。"""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            del self._entries[key]
            return None
        self._entries.move_to_end(key)
        return entry.value

    def set(self, key: str, value: Any, ttl: float | timedelta) -> None:
        """写入值，覆盖同名条目。

        Args:
            key: 键名
            value: 值
            ttl: 过期时间（秒或 timedelta）
        """
        seconds = ttl.total_seconds() if isinstance(ttl, timedelta) else float(ttl)
        if seconds <= 0:
            raise ValueError("ttl must be positive")

        self._entries.pop(key, None)
        self._entries[key] = CacheEntry(
            key=key,
            value=value,
            expires_at=self._clock() + seconds,
        )
        self._evict_overflow()

    def delete(self, key: str) -> bool:
        """删除条目，存在时返回 True。"""
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """清空全部条目。"""
        self._entries.clear()

    def ttl(self, key: str) -> float | None:
        """获取剩余生存时间（秒），不存在或已过期返回 None。"""
        entry = self._entries.get(key)
        if entry is None:
            return None
        remaining = entry.expires_at - self._clock()
        return remaining if remaining > 0 else None

    def purge_expired(self) -> int:
        """删除所有过期条目，返回删除数量。"""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def _evict_overflow(self) -> None:
        if self._max_entries is None:
            return
        # 先清理过期条目，再按 LRU 淘汰
        if len(self._entries) > self._max_entries:
            self.purge_expired()
        while len(self._entries) > self._max_entries:
            evicted_key, _ = self._entries.popitem(last=False)
            logger.debug(f"Cache entry evicted (capacity): {evicted_key}")

    # ============ 后台清理 ============

    @property
    def sweeper_running(self) -> bool:
        return self._sweeper is not None and not self._sweeper.done()

    def start_sweeper(self, interval: float) -> asyncio.Task[None]:
        """启动后台清理任务（需在事件循环内调用）。"""
        if interval <= 0:
            raise ValueError("interval must be positive")
        if self._sweeper is not None and not self._sweeper.done():
            return self._sweeper
        self._sweeper = asyncio.create_task(
            self._sweep_forever(interval), name="ttl-cache-sweeper"
        )
        return self._sweeper

    async def stop_sweeper(self) -> None:
        """停止后台清理任务。"""
        task = self._sweeper
        self._sweeper = None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _sweep_forever(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            removed = self.purge_expired()
            if removed:
                logger.debug(f"Cache sweeper removed {removed} expired entries")
