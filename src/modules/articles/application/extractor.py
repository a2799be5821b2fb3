"""Article content extraction."""

from __future__ import annotations

import httpx
from bs4 import BeautifulSoup
from loguru import logger

from src.core.domain.urls import hostname_of, is_public_http_url
from src.core.infrastructure.logging import BusinessEvents
from src.modules.articles.application.fallback import (
    UrlGuess,
    generate_fallback_content,
    guess_from_url,
)
from src.modules.articles.application.sanitizer import (
    MIN_TEXT_LENGTH,
    clean_html_for_rich_text,
    text_length,
)
from src.modules.articles.domain.entities import ArticleContent
from src.modules.articles.domain.exceptions import (
    ExtractionError,
    InvalidArticleUrlError,
)
from src.modules.articles.domain.platforms import (
    BROAD_FALLBACK_SELECTORS,
    Platform,
    detect_platform,
)
from src.modules.articles.infrastructure.page_client import PageClient

# 主选择器内容少于该长度时尝试备用选择器
PRIMARY_CONTENT_MIN_LENGTH = 50
SUMMARY_PARAGRAPH_MAX_LENGTH = 200
UNTITLED = "无标题"

# 出现这些关键字说明目标站点限制了访问
ACCESS_RESTRICTION_SIGNALS = ("403", "Forbidden", "blocked")


def is_access_restricted(message: str) -> bool:
    return any(signal in message for signal in ACCESS_RESTRICTION_SIGNALS)


def _inner_html(soup: BeautifulSoup, selector: str) -> str:
    element = soup.select_one(selector)
    if element is None:
        return ""
    return element.decode_contents()


def _text(soup: BeautifulSoup, selector: str) -> str:
    element = soup.select_one(selector)
    if element is None:
        return ""
    return element.get_text()


def _meta_content(soup: BeautifulSoup, selector: str) -> str:
    element = soup.select_one(selector)
    if element is None:
        return ""
    return element.get("content") or ""


class ArticleExtractor:
    """抓取网页并提取标题、正文和摘要。

    访问受限或正文过少时返回降级内容而不是报错。
    """

    def __init__(self, page_client: PageClient | None = None):
        self.page_client = page_client or PageClient()

    async def fetch_article_content(self, url: str) -> ArticleContent:
        """获取文章内容。

        Raises:
            InvalidArticleUrlError: URL 不是公网 http(s) 地址
            ExtractionError: 非访问限制类的抓取/解析失败
        """
        if not is_public_http_url(url):
            raise InvalidArticleUrlError(url)

        guess = guess_from_url(url)
        platform = detect_platform(hostname_of(url))
        logger.info(f"Fetching article {url} (platform: {platform.site_type})")

        try:
            page = await self.page_client.fetch(url)
            return self._extract(url, page.html, platform, guess)
        except httpx.HTTPError as e:
            message = str(e) or type(e).__name__
            logger.warning(f"Article fetch failed for {url}: {message}")
            return self._degrade_or_raise(url, message, guess)
        except Exception as e:
            message = str(e) or type(e).__name__
            logger.exception(f"Article extraction error for {url}: {message}")
            return self._degrade_or_raise(url, message, guess)

    def _degrade_or_raise(
        self, url: str, message: str, guess: UrlGuess
    ) -> ArticleContent:
        if is_access_restricted(message):
            BusinessEvents.article_degraded(url=url, reason=message)
            return generate_fallback_content(url, guess.title, guess.summary)
        raise ExtractionError(message)

    def _extract(
        self, url: str, html: str, platform: Platform, guess: UrlGuess
    ) -> ArticleContent:
        soup = BeautifulSoup(html, "html.parser")
        selectors = platform.selectors

        for selector in selectors.remove_selectors:
            for element in soup.select(selector):
                if not element.decomposed:
                    element.decompose()

        title = self._extract_title(soup, platform, guess)
        content = self._extract_content(soup, platform)
        summary = self._extract_summary(soup, platform, guess)

        logger.debug(
            f"Extracted {url}: title={len(title)} content={len(content)} "
            f"summary={len(summary)}"
        )

        if text_length(content) < MIN_TEXT_LENGTH:
            BusinessEvents.article_degraded(url=url, reason="content_too_short")
            return generate_fallback_content(
                url, title or guess.title, summary or guess.summary
            )

        return ArticleContent(
            title=title.strip() or guess.title or UNTITLED,
            content=clean_html_for_rich_text(content),
            summary=summary.strip() or guess.summary,
        )

    def _extract_title(
        self, soup: BeautifulSoup, platform: Platform, guess: UrlGuess
    ) -> str:
        candidates = [_text(soup, "title"), _text(soup, "h1")]
        candidates.extend(_text(soup, s) for s in platform.selectors.title_selectors)
        candidates.append(_meta_content(soup, 'meta[property="og:title"]'))
        candidates.append(guess.title)
        return next((c for c in candidates if c), "")

    def _extract_content(self, soup: BeautifulSoup, platform: Platform) -> str:
        content = _inner_html(soup, platform.selectors.selector)
        if len(content.strip()) >= PRIMARY_CONTENT_MIN_LENGTH:
            return content

        logger.debug("Primary content selector too short, trying fallbacks")
        for selector in BROAD_FALLBACK_SELECTORS:
            fallback = _inner_html(soup, selector)
            if fallback:
                return fallback
        return content

    def _extract_summary(
        self, soup: BeautifulSoup, platform: Platform, guess: UrlGuess
    ) -> str:
        candidates = [
            _meta_content(soup, 'meta[name="description"]'),
            _meta_content(soup, 'meta[property="og:description"]'),
        ]
        candidates.extend(_text(soup, s) for s in platform.selectors.summary_selectors)
        candidates.append(_text(soup, "p")[:SUMMARY_PARAGRAPH_MAX_LENGTH])
        candidates.append(guess.summary)
        return next((c for c in candidates if c), "")
