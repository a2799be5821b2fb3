"""Tests for fallback hot lists and Markdown rendering."""

from datetime import datetime
from zoneinfo import ZoneInfo

from src.modules.hotnews.application.fallback import (
    build_fallback_result,
    format_hot_news_markdown,
    format_update_time,
)
from src.modules.hotnews.domain.entities import NewsItem, SourceResult


def test_format_update_time() -> None:
    now = datetime(2025, 1, 6, 9, 5, 3, tzinfo=ZoneInfo("Asia/Shanghai"))
    assert format_update_time(now) == "2025/01/06 09:05:03"


def test_fallback_result_uses_display_name(registry) -> None:
    now = datetime(2025, 1, 6, 9, 0, 0, tzinfo=ZoneInfo("Asia/Shanghai"))
    result = build_fallback_result(registry.require(9), now=now)

    assert result.name == "IT新闻"
    assert result.update_time == "2025/01/06 09:00:00"
    assert [item.index for item in result.items] == [1, 2]


def test_markdown_rendering_includes_heat_when_present() -> None:
    result = SourceResult(
        name="知乎",
        subtitle="热榜",
        update_time="2025-01-06 09:30:00",
        items=[
            NewsItem(index=1, title="A", url="https://e.com/a", hot="100万"),
            NewsItem(index=2, title="B", url="https://e.com/b", hot=None),
        ],
    )

    text = format_hot_news_markdown([result])

    assert text.splitlines() == [
        "### 知乎:热榜",
        "> Last updated: 2025-01-06 09:30:00",
        "1. [A](https://e.com/a) <small>Heat: 100万</small>",
        "2. [B](https://e.com/b)",
    ]
