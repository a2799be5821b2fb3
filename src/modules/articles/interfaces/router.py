"""Articles API routes."""

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from src.core.interfaces.http.response import ApiResponse
from src.modules.articles.application.dependencies import (
    get_article_extractor,
    get_webview_proxy,
)
from src.modules.articles.application.extractor import ArticleExtractor
from src.modules.articles.application.webview import WebviewProxy
from src.modules.articles.interfaces.schemas import (
    ArticleContentResponse,
    ArticleRequest,
)

router = APIRouter(prefix="/articles", tags=["articles"])


@router.post(
    "/content",
    response_model=ApiResponse[ArticleContentResponse],
    summary="获取文章内容",
    description="提取标题、正文和摘要；站点限制访问时返回降级内容",
)
async def get_article_content(
    request: ArticleRequest,
    extractor: ArticleExtractor = Depends(get_article_extractor),
) -> ApiResponse[ArticleContentResponse]:
    """Extract an article."""
    article = await extractor.fetch_article_content(request.url)
    return ApiResponse.success(data=ArticleContentResponse.from_content(article))


@router.post(
    "/html",
    response_class=HTMLResponse,
    summary="获取 webview 页面",
    description="抓取并改写完整页面，失败时返回错误页面",
)
async def get_article_html(
    request: ArticleRequest,
    proxy: WebviewProxy = Depends(get_webview_proxy),
) -> HTMLResponse:
    """Proxy a page for webview display."""
    html = await proxy.fetch_article_html(request.url)
    return HTMLResponse(content=html)
