"""Articles module application dependencies."""

from functools import lru_cache

from src.modules.articles.application.extractor import ArticleExtractor
from src.modules.articles.application.webview import WebviewProxy
from src.modules.articles.infrastructure.page_client import PageClient


@lru_cache
def get_page_client() -> PageClient:
    return PageClient()


def get_article_extractor() -> ArticleExtractor:
    return ArticleExtractor(get_page_client())


def get_webview_proxy() -> WebviewProxy:
    return WebviewProxy(get_page_client())
