"""Hot list API fetcher implementation."""

from __future__ import annotations

import time
from typing import Any

import httpx
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from src.core.config import settings
from src.modules.hotnews.domain.entities import NewsItem, SourceResult
from src.modules.hotnews.domain.exceptions import UpstreamError
from src.modules.hotnews.domain.registry import SourceRegistry, source_registry


class HotListItemPayload(BaseModel):
    """上游条目结构。"""

    index: int
    title: str
    url: str
    hot: str | int | float | None = None


class HotListPayload(BaseModel):
    """上游响应结构（success=true 时）。"""

    model_config = ConfigDict(extra="ignore")

    success: bool
    message: str | None = None
    name: str
    subtitle: str
    update_time: str
    data: list[HotListItemPayload] = Field(...)


class HotListFetcher:
    """Fetch one hot list from the upstream aggregation API.

    单次请求，固定超时，不重试；所有失败统一转换为 UpstreamError。
    """

    HEADERS = {
        "User-Agent": settings.BROWSER_USER_AGENT,
        "Accept": "application/json, text/plain, */*",
        "Accept-Language": "zh-CN,zh;q=0.9,en;q=0.8",
        "Cache-Control": "no-cache",
    }

    def __init__(
        self,
        registry: SourceRegistry | None = None,
        *,
        base_url: str | None = None,
        timeout_sec: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.registry = registry or source_registry
        self.base_url = (base_url or settings.HOTNEWS_API_BASE_URL).rstrip("/")
        self.timeout_sec = timeout_sec or settings.HOTNEWS_SOURCE_TIMEOUT_SEC
        self._transport = transport

    async def fetch(self, source_id: int) -> SourceResult:
        source = self.registry.require(source_id)
        api_url = f"{self.base_url}/{source.name}"
        start_time = time.time()

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_sec,
                follow_redirects=False,
                transport=self._transport,
            ) as client:
                response = await client.get(api_url, headers=self.HEADERS)
                response.raise_for_status()
                payload = response.json()
        except httpx.TimeoutException as exc:
            logger.warning(f"获取{source.description}超时: {exc!r}")
            raise UpstreamError(source_id, f"Timeout: {exc}") from exc
        except httpx.HTTPStatusError as exc:
            logger.warning(
                f"获取{source.description}失败: HTTP {exc.response.status_code}"
            )
            raise UpstreamError(
                source_id, f"HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning(f"获取{source.description}失败: {exc!r}")
            raise UpstreamError(source_id, f"Error: {exc}") from exc
        except ValueError as exc:
            logger.warning(f"获取{source.description}失败: 响应不是合法 JSON")
            raise UpstreamError(source_id, "Invalid JSON response") from exc

        result = self._parse_payload(source_id, payload)
        duration_ms = int((time.time() - start_time) * 1000)
        logger.debug(
            f"获取{source.description}成功: {len(result.items)} 条, {duration_ms}ms"
        )
        return result

    @staticmethod
    def _parse_payload(source_id: int, payload: Any) -> SourceResult:
        if not isinstance(payload, dict):
            raise UpstreamError(source_id, "Response payload must be an object")

        if payload.get("success") is not True:
            message = payload.get("message")
            if isinstance(message, str) and message:
                raise UpstreamError(source_id, f"API returned error: {message}")
            raise UpstreamError(source_id, "API returned non-success status")

        try:
            parsed = HotListPayload.model_validate(payload)
        except PydanticValidationError as exc:
            raise UpstreamError(
                source_id, f"Malformed response: {exc.error_count()} validation errors"
            ) from exc

        return SourceResult(
            name=parsed.name,
            subtitle=parsed.subtitle,
            update_time=parsed.update_time,
            items=[
                NewsItem(index=item.index, title=item.title, url=item.url, hot=item.hot)
                for item in parsed.data
            ],
        )
