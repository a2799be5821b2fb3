"""Webview proxy.

抓取完整页面并改写为可在小程序 webview 中安全展示的 HTML：
移除脚本与内嵌框架、补全相对资源地址、注入移动端样式。
失败时返回不含脚本的错误页面。
"""

from __future__ import annotations

from bs4 import BeautifulSoup
from loguru import logger

from src.core.domain.urls import is_public_http_url, is_relative_resource, resolve_url
from src.core.infrastructure.logging import BusinessEvents
from src.core.infrastructure.templates.template_loader import render_template
from src.modules.articles.domain.exceptions import InvalidArticleUrlError
from src.modules.articles.infrastructure.page_client import PageClient

ACTIVE_CONTENT_TAGS = (
    "script",
    "noscript",
    "iframe",
    "frame",
    "frameset",
    "object",
    "embed",
)
AD_SELECTOR = '.ad, .advertisement, [class*="ad-"], [id*="ad-"]'
URL_ATTRIBUTES = ("href", "src", "action", "formaction", "xlink:href", "data")


def generate_error_html(url: str, message: str) -> str:
    """生成错误页面，url 和 message 均做 HTML 转义。"""
    return render_template("webview_error.html", url=url, message=message)


def _is_javascript_url(value: str) -> bool:
    # 浏览器会忽略 scheme 中的空白与控制字符
    compact = "".join(ch for ch in value if ch > " ").lower()
    return compact.startswith("javascript:")


def _strip_active_attributes(soup: BeautifulSoup) -> None:
    for element in soup.find_all(True):
        for attr in list(element.attrs):
            if attr.lower().startswith("on"):
                del element.attrs[attr]
                continue
            value = element.attrs[attr]
            if (
                attr.lower() in URL_ATTRIBUTES
                and isinstance(value, str)
                and _is_javascript_url(value)
            ):
                del element.attrs[attr]


def _decompose_all(soup: BeautifulSoup, selector: str) -> None:
    for element in soup.select(selector):
        # 外层元素删除后，其内部匹配项已被一并销毁
        if not element.decomposed:
            element.decompose()


def _absolutize(soup: BeautifulSoup, base_url: str) -> None:
    for img in soup.select("img[src]"):
        src = img.get("src")
        if isinstance(src, str) and is_relative_resource(src):
            img["src"] = resolve_url(base_url, src)

    for link in soup.select('link[rel~="stylesheet"][href]'):
        href = link.get("href")
        if isinstance(href, str) and is_relative_resource(href):
            link["href"] = resolve_url(base_url, href)


def _ensure_head(soup: BeautifulSoup):
    head = soup.head
    if head is not None:
        return head
    head = soup.new_tag("head")
    if soup.html is not None:
        soup.html.insert(0, head)
    else:
        soup.insert(0, head)
    return head


def process_html_for_webview(html: str, base_url: str) -> str:
    """改写 HTML 以适配 webview。

    base_url 为跟随重定向后的最终地址，相对资源以此为基准补全。
    """
    soup = BeautifulSoup(html, "html.parser")

    for tag in ACTIVE_CONTENT_TAGS:
        for element in soup.find_all(tag):
            if not element.decomposed:
                element.decompose()
    _strip_active_attributes(soup)
    _decompose_all(soup, AD_SELECTOR)
    _absolutize(soup, base_url)

    head = _ensure_head(soup)
    mobile = BeautifulSoup(render_template("webview_mobile_head.html"), "html.parser")
    for node in list(mobile.contents):
        head.append(node.extract())

    return str(soup)


class WebviewProxy:
    """抓取页面并返回改写后的 HTML。"""

    def __init__(self, page_client: PageClient | None = None):
        self.page_client = page_client or PageClient()

    async def fetch_article_html(self, url: str) -> str:
        """抓取并改写页面。抓取或改写失败时返回错误页面。

        Raises:
            InvalidArticleUrlError: URL 不是公网 http(s) 地址
        """
        if not is_public_http_url(url):
            raise InvalidArticleUrlError(url)

        try:
            page = await self.page_client.fetch(url)
            html = process_html_for_webview(page.html, page.url)
        except Exception as e:
            message = str(e) or type(e).__name__
            logger.warning(f"Webview proxy failed for {url}: {message}")
            BusinessEvents.feature_degraded(feature="webview_proxy", reason=message)
            return generate_error_html(url, message)

        logger.info(f"Webview proxy ok for {url} ({len(html)} chars)")
        return html
