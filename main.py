"""hotnews Backend - 热榜聚合与文章内容服务入口。"""

import sentry_sdk
from fastapi import FastAPI
from fastapi.concurrency import asynccontextmanager
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from loguru import logger
from starlette.middleware.cors import CORSMiddleware

from src.core.config import settings
from src.core.domain.exceptions import DomainException
from src.core.infrastructure.cache import ttl_cache
from src.core.infrastructure.logging import setup_logging
from src.core.interfaces.http.exceptions import (
    domain_exception_handler,
    global_exception_handler,
    request_validation_handler,
)
from src.core.interfaces.http.routers import api_router
from src.modules.hotnews.domain.registry import source_registry

VERSION = "0.1.0"


def custom_generate_unique_id(route: APIRoute) -> str:
    """Generate unique operation IDs for OpenAPI."""
    if route.tags:
        return f"{route.tags[0]}-{route.name}"
    return route.name


# Initialize Sentry if configured
if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
    sentry_sdk.init(
        dsn=str(settings.SENTRY_DSN),
        enable_tracing=True,
        environment=settings.ENVIRONMENT,
    )


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Application lifespan manager."""
    setup_logging()
    logger.info("Starting hotnews backend...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    ttl_cache.start_sweeper(settings.CACHE_SWEEP_INTERVAL_SEC)

    yield

    await ttl_cache.stop_sweeper()
    logger.info("Shutting down hotnews backend...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description=(
        "热榜聚合服务\n\n"
        "- 并行获取多个平台热榜，超时/失败的平台返回降级数据\n"
        "- 文章内容提取（rich-text 适配）\n"
        "- webview 页面代理"
    ),
    version=VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=f"{settings.API_V1_STR}/docs",
    redoc_url=f"{settings.API_V1_STR}/redoc",
    root_path=settings.ROOTPATH,
    generate_unique_id_function=custom_generate_unique_id,
    lifespan=lifespan,
)

# Exception handlers
app.add_exception_handler(DomainException, domain_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(Exception, global_exception_handler)

# CORS middleware
if settings.all_cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

# Include API router
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint.

    服务无外部存储依赖，仅报告缓存状态与热榜源数量。
    """
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "version": VERSION,
        "components": {
            "cache": {
                "status": "ok",
                "entries": len(ttl_cache),
                "sweeper_running": ttl_cache.sweeper_running,
            },
        },
        "sources": source_registry.max_id(),
    }


@app.get("/", tags=["root"])
async def root():
    """Root endpoint."""
    return {
        "message": "Welcome to hotnews API",
        "docs": f"{settings.API_V1_STR}/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.SERVER_PORT,
        reload=settings.ENVIRONMENT == "local",
    )
