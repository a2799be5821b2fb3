"""Full-page HTTP client with a browser-like request profile."""

from __future__ import annotations

from dataclasses import dataclass

import httpx
from loguru import logger

from src.core.config import settings


@dataclass(frozen=True)
class FetchedPage:
    """抓取到的页面。"""

    url: str  # 跟随重定向后的最终地址
    status_code: int
    html: str


class PageClient:
    """抓取完整 HTML 页面。

    模拟浏览器请求头以降低被拦截的概率；跟随重定向，接受 2xx/3xx 状态。
    """

    BROWSER_HEADERS = {
        "User-Agent": settings.BROWSER_USER_AGENT,
        "Accept": (
            "text/html,application/xhtml+xml,application/xml;q=0.9,"
            "image/avif,image/webp,image/apng,*/*;q=0.8"
        ),
        "Accept-Language": "zh-CN,zh;q=0.9,en;q=0.8",
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
        "Sec-Ch-Ua": '"Not_A Brand";v="8", "Chromium";v="120", "Google Chrome";v="120"',
        "Sec-Ch-Ua-Mobile": "?0",
        "Sec-Ch-Ua-Platform": '"macOS"',
        "Sec-Fetch-Dest": "document",
        "Sec-Fetch-Mode": "navigate",
        "Sec-Fetch-Site": "none",
        "Sec-Fetch-User": "?1",
        "Upgrade-Insecure-Requests": "1",
        "Referer": "https://www.google.com/",
    }

    def __init__(
        self,
        *,
        timeout_sec: float | None = None,
        max_redirects: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout_sec = timeout_sec or settings.ARTICLE_FETCH_TIMEOUT_SEC
        self.max_redirects = (
            settings.ARTICLE_MAX_REDIRECTS if max_redirects is None else max_redirects
        )
        self._transport = transport

    async def fetch(self, url: str) -> FetchedPage:
        """抓取页面。

        Raises:
            httpx.HTTPStatusError: 状态码不在 200-399 范围内
            httpx.HTTPError: 超时、连接失败、重定向过多等
        """
        async with httpx.AsyncClient(
            timeout=self.timeout_sec,
            follow_redirects=True,
            max_redirects=self.max_redirects,
            transport=self._transport,
        ) as client:
            response = await client.get(url, headers=self.BROWSER_HEADERS)
            if not 200 <= response.status_code < 400:
                response.raise_for_status()

            logger.debug(
                f"Fetched page {url} -> {response.url} "
                f"({response.status_code}, {len(response.text)} chars)"
            )
            return FetchedPage(
                url=str(response.url),
                status_code=response.status_code,
                html=response.text,
            )
