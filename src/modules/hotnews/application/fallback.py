"""Fallback hot list synthesis and rendering helpers."""

from collections.abc import Sequence
from datetime import datetime
from zoneinfo import ZoneInfo

from src.core.config import settings
from src.modules.hotnews.domain.entities import NewsItem, Source, SourceResult

FALLBACK_SUBTITLE = "热榜"
LOADING_TITLE = "数据加载中，请稍候..."
RETRYING_TITLE = "网络连接缓慢，正在重试"


def format_update_time(now: datetime | None = None) -> str:
    """格式化更新时间，如 2025/01/06 09:30:00。"""
    current = now or datetime.now(ZoneInfo(settings.TIMEZONE))
    return current.strftime("%Y/%m/%d %H:%M:%S")


def build_fallback_result(source: Source, now: datetime | None = None) -> SourceResult:
    """生成降级占位热榜。"""
    return SourceResult(
        name=source.display_name,
        subtitle=FALLBACK_SUBTITLE,
        update_time=format_update_time(now),
        items=[
            NewsItem(index=1, title=LOADING_TITLE, url="#", hot=0),
            NewsItem(index=2, title=RETRYING_TITLE, url="#", hot=0),
        ],
    )


def is_fallback_result(result: SourceResult) -> bool:
    """是否为降级占位热榜（通过固定标题识别）。"""
    return bool(result.items) and result.items[0].title == LOADING_TITLE


def format_hot_news_markdown(results: Sequence[SourceResult]) -> str:
    """将聚合结果渲染为 Markdown 文本。"""
    blocks: list[str] = []
    for result in results:
        lines = [
            f"### {result.name}:{result.subtitle}",
            f"> Last updated: {result.update_time}",
        ]
        for item in result.items:
            heat = f" <small>Heat: {item.hot}</small>" if item.hot else ""
            lines.append(f"{item.index}. [{item.title}]({item.url}){heat}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)
