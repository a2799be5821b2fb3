"""Degraded article content.

当目标站点拒绝访问或正文过少时，根据 URL 推测标题/摘要并生成引导用户访问原文的 HTML。
"""

import re
from dataclasses import dataclass
from urllib.parse import urlparse

from src.core.domain.urls import hostname_of
from src.core.infrastructure.templates.template_loader import render_template
from src.modules.articles.domain.entities import ArticleContent
from src.modules.articles.domain.platforms import (
    GENERIC_GUESS_SUMMARY,
    GENERIC_GUESS_TITLE,
    Platform,
    SiteType,
    detect_platform,
)

_ZHIHU_QUESTION = re.compile(r"question/(\d+)")
_BILIBILI_BV = re.compile(r"(BV[a-zA-Z0-9]+)")

ZHIHU_QUESTION_TITLE = "知乎问题讨论"
ZHIHU_QUESTION_SUMMARY = (
    "这是一个知乎平台上的热门问题，包含多个回答和讨论。由于访问限制，请点击下方链接查看完整内容。"
)
BILIBILI_VIDEO_SUMMARY = (
    "这是一个B站热门视频内容。B站作为中国最大的弹幕视频网站，汇聚了大量优质的原创内容。"
    "由于技术限制，建议直接访问观看完整视频。"
)
B23_SHORT_LINK_TITLE = "B站短链接内容"
B23_SHORT_LINK_SUMMARY = "B站平台的热门内容，请点击链接查看详情。"


@dataclass(frozen=True)
class UrlGuess:
    """基于 URL 推测的标题与摘要。"""

    title: str
    summary: str


def _guess_for_platform(platform: Platform, host: str, path: str) -> UrlGuess:
    if platform.site_type == SiteType.ZHIHU:
        if _ZHIHU_QUESTION.search(path):
            return UrlGuess(ZHIHU_QUESTION_TITLE, ZHIHU_QUESTION_SUMMARY)
        return UrlGuess(GENERIC_GUESS_TITLE, GENERIC_GUESS_SUMMARY)

    # 只有短链接才从路径中识别 BV 号，bilibili.com 使用平台通用文案
    if platform.site_type == SiteType.BILIBILI and "b23.tv" in host:
        bv_match = _BILIBILI_BV.search(path)
        if bv_match:
            return UrlGuess(f"B站视频 - {bv_match.group(1)}", BILIBILI_VIDEO_SUMMARY)
        return UrlGuess(B23_SHORT_LINK_TITLE, B23_SHORT_LINK_SUMMARY)

    return UrlGuess(platform.guess_title, platform.guess_summary)


def guess_from_url(url: str) -> UrlGuess:
    """从 URL 推测标题和摘要，解析失败时返回通用文案。"""
    try:
        parsed = urlparse(url)
        host = (parsed.hostname or "").lower()
    except ValueError:
        return UrlGuess(GENERIC_GUESS_TITLE, GENERIC_GUESS_SUMMARY)

    platform = detect_platform(host)
    return _guess_for_platform(platform, host, parsed.path)


def generate_fallback_content(url: str, title: str, summary: str) -> ArticleContent:
    """生成降级内容。视频平台使用视频模板，其余使用通用模板。"""
    platform = detect_platform(hostname_of(url))

    if platform.is_video:
        return ArticleContent(
            title=title or "B站热门视频",
            content=render_template(
                "article_fallback_video.html",
                url=url,
                summary=summary,
                site_name=platform.display_name,
                platform_description=platform.description,
            ),
            summary=summary or "点击链接观看B站视频内容。",
        )

    return ArticleContent(
        title=title or GENERIC_GUESS_TITLE,
        content=render_template(
            "article_fallback.html",
            url=url,
            summary=summary,
            site_name=platform.display_name,
            platform_description=platform.description,
        ),
        summary=summary or "由于访问限制，请点击链接查看原文内容。",
    )
