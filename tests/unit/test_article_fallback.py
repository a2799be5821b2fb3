"""Tests for platform detection and degraded article content."""

import pytest

from src.modules.articles.application.fallback import (
    generate_fallback_content,
    guess_from_url,
)
from src.modules.articles.domain.platforms import GENERIC_PLATFORM, SiteType, detect_platform


@pytest.mark.parametrize(
    ("hostname", "expected"),
    [
        ("www.zhihu.com", SiteType.ZHIHU),
        ("36kr.com", SiteType.KR36),
        ("b23.tv", SiteType.BILIBILI),
        ("www.bilibili.com", SiteType.BILIBILI),
        ("s.weibo.com", SiteType.WEIBO),
        ("www.douyin.com", SiteType.DOUYIN),
        ("bbs.hupu.com", SiteType.HUPU),
        ("movie.douban.com", SiteType.DOUBAN),
        ("top.baidu.com", SiteType.BAIDU),
        ("example.org", SiteType.GENERAL),
    ],
)
def test_detect_platform(hostname: str, expected: SiteType) -> None:
    assert detect_platform(hostname).site_type == expected


def test_detect_platform_without_hostname() -> None:
    assert detect_platform(None) is GENERIC_PLATFORM
    assert GENERIC_PLATFORM.display_name == "未知网站"


def test_guess_zhihu_question() -> None:
    guess = guess_from_url("https://www.zhihu.com/question/123456")
    assert guess.title == "知乎问题讨论"
    assert "知乎平台上的热门问题" in guess.summary


def test_guess_zhihu_non_question_uses_generic_text() -> None:
    guess = guess_from_url("https://zhuanlan.zhihu.com/p/1")
    assert guess.title == "热门内容"
    assert guess.summary == "由于网站访问限制，暂时无法获取详细内容。"


def test_guess_bilibili_short_link() -> None:
    assert guess_from_url("https://b23.tv/BV1xx411c7mD").title == "B站视频 - BV1xx411c7mD"
    assert guess_from_url("https://b23.tv/abc").title == "B站短链接内容"
    assert guess_from_url("https://www.bilibili.com/read/cv1").title == "B站内容"


def test_guess_bilibili_video_page_keeps_platform_text() -> None:
    guess = guess_from_url("https://www.bilibili.com/video/BV1xx411c7mD")
    assert guess.title == "B站内容"
    assert guess.summary == "B站平台的视频或文章内容。"


def test_guess_known_platforms() -> None:
    assert guess_from_url("https://36kr.com/p/1").title == "36氪科技资讯"
    assert guess_from_url("https://weibo.com/1").title == "微博热门内容"
    assert guess_from_url("https://www.douyin.com/video/1").title == "抖音热门内容"


def test_video_fallback_template() -> None:
    article = generate_fallback_content("https://b23.tv/abc", "", "")

    assert article.title == "B站热门视频"
    assert article.summary == "点击链接观看B站视频内容。"
    assert "视频内容预览" in article.content
    assert 'href="https://b23.tv/abc"' in article.content


def test_generic_fallback_template() -> None:
    article = generate_fallback_content("https://example.org/a", "标题", "摘要")

    assert article.title == "标题"
    assert article.summary == "摘要"
    assert "内容预览" in article.content
    assert "未知网站" in article.content


def test_fallback_escapes_user_controlled_strings() -> None:
    article = generate_fallback_content(
        'https://example.org/a?"><script>x</script>',
        "t",
        "<img src=x onerror=alert(1)>",
    )

    assert "<script>" not in article.content
    assert "<img src=x" not in article.content
    assert "&lt;img src=x onerror=alert(1)&gt;" in article.content
