"""API router configuration."""

from fastapi import APIRouter

from src.modules.articles.interfaces.router import router as articles_router
from src.modules.hotnews.interfaces.router import router as hotnews_router

api_router = APIRouter()

# Hot lists
api_router.include_router(hotnews_router)

# Article content / webview proxy
api_router.include_router(articles_router)
