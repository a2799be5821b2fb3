"""Hot news API routes."""

from fastapi import APIRouter, Depends

from src.core.interfaces.http.response import ApiResponse
from src.modules.hotnews.application.aggregation_service import HotNewsAggregator
from src.modules.hotnews.application.dependencies import (
    get_hot_news_aggregator,
    get_source_registry,
)
from src.modules.hotnews.domain.registry import SourceRegistry
from src.modules.hotnews.interfaces.schemas import (
    HotNewsRequest,
    SourceInfoResponse,
    SourceResultResponse,
)

router = APIRouter(prefix="/hotnews", tags=["hotnews"])


@router.post(
    "",
    response_model=ApiResponse[list[SourceResultResponse]],
    summary="获取热榜",
    description="并行获取多个平台的热榜，超时或失败的平台返回降级数据",
)
async def get_hot_news(
    request: HotNewsRequest,
    aggregator: HotNewsAggregator = Depends(get_hot_news_aggregator),
) -> ApiResponse[list[SourceResultResponse]]:
    """Aggregate hot lists."""
    results = await aggregator.get_hot_news(
        request.sources, timeout_seconds=request.timeout_seconds
    )
    return ApiResponse.success(
        data=[SourceResultResponse.from_result(result) for result in results]
    )


@router.get(
    "/sources",
    response_model=ApiResponse[list[SourceInfoResponse]],
    summary="获取可用热榜源",
)
async def list_sources(
    registry: SourceRegistry = Depends(get_source_registry),
) -> ApiResponse[list[SourceInfoResponse]]:
    """List all registered sources."""
    return ApiResponse.success(
        data=[SourceInfoResponse.from_source(source) for source in registry.all()],
        meta={"max_id": registry.max_id()},
    )


@router.delete(
    "/cache",
    response_model=ApiResponse[None],
    summary="清空热榜缓存",
)
async def clear_cache(
    aggregator: HotNewsAggregator = Depends(get_hot_news_aggregator),
) -> ApiResponse[None]:
    """Drop cached aggregations."""
    aggregator.clear_cache()
    return ApiResponse.success(message="Cache cleared")
