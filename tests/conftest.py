"""
pytest 配置和共享 fixtures。

测试分层：
- unit/: 单元测试（上游 HTTP 通过 httpx.MockTransport 模拟，不访问网络）

使用方法：
    # 运行所有测试
    uv run pytest

    # 只运行单元测试
    uv run pytest tests/unit/
"""

from collections.abc import AsyncGenerator, Callable
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from src.core.infrastructure.cache import TTLCache
from src.modules.hotnews.domain.registry import SourceRegistry

# ============================================
# 配置 Fixtures
# ============================================


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


# ============================================
# 时间控制 Fixtures
# ============================================


class FakeClock:
    """可手动推进的单调时钟。"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> TTLCache:
    """使用可控时钟的缓存。"""
    return TTLCache(max_entries=32, clock=clock)


@pytest.fixture
def registry() -> SourceRegistry:
    return SourceRegistry()


# ============================================
# 上游 HTTP Fixtures
# ============================================


def hotlist_payload(
    subtitle: str = "热榜",
    titles: tuple[str, ...] = ("新闻一", "新闻二"),
    **overrides: Any,
) -> dict[str, Any]:
    """构造热榜接口返回体。"""
    payload: dict[str, Any] = {
        "success": True,
        "name": "知乎",
        "subtitle": subtitle,
        "update_time": "2025-01-06 09:30:00",
        "data": [
            {
                "index": i,
                "title": title,
                "url": f"https://example.com/{i}",
                "hot": f"{i}万",
            }
            for i, title in enumerate(titles, start=1)
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_payload() -> Callable[..., dict[str, Any]]:
    return hotlist_payload


@pytest.fixture
def mock_transport() -> Callable[..., httpx.MockTransport]:
    """根据处理函数创建 MockTransport，并记录请求。"""

    def factory(handler: Callable[[httpx.Request], httpx.Response]):
        requests: list[httpx.Request] = []

        def recording(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        transport = httpx.MockTransport(recording)
        transport.requests = requests  # type: ignore[attr-defined]
        return transport

    return factory


# ============================================
# HTTP Client Fixtures
# ============================================


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """异步 HTTP 客户端（用于 API 测试）。"""
    from main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    # 清理依赖覆盖
    app.dependency_overrides.clear()
