"""Tests for article content extraction."""

import httpx
import pytest

from src.modules.articles.application.extractor import ArticleExtractor
from src.modules.articles.domain.exceptions import ExtractionError, InvalidArticleUrlError
from src.modules.articles.infrastructure.page_client import PageClient

pytestmark = pytest.mark.anyio

ZHIHU_PAGE = """
<html>
<head>
  <title>  如何评价某事？ - 知乎 </title>
  <meta name="description" content="问题描述">
</head>
<body>
  <div class="RichContent-inner">
    <div class="AuthorInfo">作者信息</div>
    <p class="para">第一段回答内容，包含足够多的文字用于测试正文提取逻辑。</p>
    <p>第二段内容同样很长很长很长很长很长。</p>
    <script>track()</script>
  </div>
</body>
</html>
"""


def _extractor(mock_transport, handler) -> ArticleExtractor:
    transport = mock_transport(handler)
    return ArticleExtractor(PageClient(timeout_sec=1, transport=transport))


def _html(body: str, status_code: int = 200):
    return lambda request: httpx.Response(
        status_code, text=body, headers={"Content-Type": "text/html; charset=utf-8"}
    )


async def test_extracts_zhihu_answer(mock_transport) -> None:
    extractor = _extractor(mock_transport, _html(ZHIHU_PAGE))

    article = await extractor.fetch_article_content("https://www.zhihu.com/question/1")

    assert article.title == "如何评价某事？ - 知乎"
    assert article.summary == "问题描述"
    assert "第一段回答内容" in article.content
    assert "作者信息" not in article.content
    assert "track()" not in article.content
    assert 'class="para"' not in article.content


async def test_uses_broad_fallback_selector_and_first_paragraph(mock_transport) -> None:
    paragraph = "长" * 300
    page = f"<html><body><h1>页面标题</h1><main><p>{paragraph}</p></main></body></html>"
    extractor = _extractor(mock_transport, _html(page))

    article = await extractor.fetch_article_content("https://example.org/post/1")

    assert article.title == "页面标题"
    assert article.summary == paragraph[:200]
    assert paragraph in article.content


async def test_answer_containers_are_tried_before_main_on_any_site(mock_transport) -> None:
    answer = "专栏正文" * 20
    page = (
        "<html><body>"
        f'<div class="Post-RichTextContainer"><p>{answer}</p></div>'
        "<main><p>侧边栏推荐内容</p></main>"
        "</body></html>"
    )
    extractor = _extractor(mock_transport, _html(page))

    article = await extractor.fetch_article_content("https://example.org/p/2")

    assert answer in article.content
    assert "侧边栏推荐内容" not in article.content

async def test_og_meta_fills_missing_title_and_summary(mock_transport) -> None:
    body = "<p>" + "正文" * 40 + "</p>"
    page = (
        '<html><head><meta property="og:title" content="OG 标题">'
        '<meta property="og:description" content="OG 摘要"></head>'
        f"<body><article>{body}</article></body></html>"
    )
    extractor = _extractor(mock_transport, _html(page))

    article = await extractor.fetch_article_content("https://example.org/a")

    assert article.title == "OG 标题"
    assert article.summary == "OG 摘要"


async def test_short_content_degrades_to_fallback(mock_transport) -> None:
    page = "<html><head><title>标题</title></head><body><article>短</article></body></html>"
    extractor = _extractor(mock_transport, _html(page))

    article = await extractor.fetch_article_content("https://www.zhihu.com/question/42")

    assert article.title == "标题"
    assert "知乎平台上的热门问题" in article.summary
    assert "内容预览" in article.content


async def test_forbidden_response_degrades_to_fallback(mock_transport) -> None:
    extractor = _extractor(mock_transport, _html("denied", status_code=403))

    article = await extractor.fetch_article_content("https://b23.tv/abc")

    assert article.title == "B站短链接内容"
    assert "视频内容预览" in article.content


async def test_blocked_connection_degrades_to_fallback(mock_transport) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection blocked by firewall", request=request)

    extractor = _extractor(mock_transport, handler)

    article = await extractor.fetch_article_content("https://36kr.com/p/1")

    assert article.title == "36氪科技资讯"


async def test_other_failures_raise_extraction_error(mock_transport) -> None:
    extractor = _extractor(mock_transport, _html("oops", status_code=500))

    with pytest.raises(ExtractionError, match="Failed to fetch article content") as exc_info:
        await extractor.fetch_article_content("https://example.org/a")
    assert exc_info.value.http_status_code == 502


@pytest.mark.parametrize(
    "url",
    ["", "not a url", "ftp://example.org/a", "http://127.0.0.1/admin", "http://localhost/"],
)
async def test_invalid_urls_are_rejected(mock_transport, url: str) -> None:
    transport = mock_transport(_html("unused"))
    extractor = ArticleExtractor(PageClient(transport=transport))

    with pytest.raises(InvalidArticleUrlError):
        await extractor.fetch_article_content(url)
    assert transport.requests == []
