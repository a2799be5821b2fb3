"""Logging configuration with structlog integration.

提供两种日志记录方式：
1. loguru: 用于一般调试日志
2. structlog: 用于关键业务事件的结构化日志
"""

import sys
from typing import Any

import structlog
from loguru import logger

from src.core.config import settings


_configured = False


def setup_logging(force: bool = False) -> None:
    """Configure application logging with structlog and loguru.

    服务 lifespan 与命令行工具都会调用，重复调用时只生效一次。
    """
    global _configured
    if _configured and not force:
        return
    _configure_structlog()
    _configure_loguru()
    _configured = True

    logger.info(
        f"Logging configured with level: {settings.LOG_LEVEL} "
        f"(environment: {settings.ENVIRONMENT})"
    )


def _configure_structlog() -> None:
    """配置 structlog 处理器链。"""
    if settings.ENVIRONMENT == "local":
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _get_log_level_number(settings.LOG_LEVEL)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def _configure_loguru() -> None:
    """配置 loguru。"""
    local = settings.ENVIRONMENT == "local"
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        diagnose=local,
    )

    if not local:
        logger.add(
            "logs/hotnews_{time:YYYY-MM-DD}.log",
            rotation="00:00",
            retention="14 days",
            level="INFO",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            diagnose=False,
        )


def _get_log_level_number(level: str) -> int:
    """日志级别名转数字，与 loguru 的级别定义保持一致。"""
    try:
        return logger.level(level.upper()).no
    except ValueError:
        return logger.level("INFO").no


# ============================================================================
# 业务事件日志记录器
# ============================================================================


class BusinessEvents:
    """业务事件日志助手类。

    提供统一的业务事件日志记录接口，确保事件格式一致。

    Usage:
        from src.core.infrastructure.logging import BusinessEvents

        BusinessEvents.source_fetch_failed(source_id=1, error="HTTP 503")
    """

    _log = structlog.get_logger("business.events")

    @classmethod
    def aggregation_completed(
        cls,
        cache_key: str,
        requested: int,
        succeeded: int,
        timed_out: bool,
        latency_ms: int,
        **extra: Any,
    ) -> None:
        """记录热榜聚合完成事件。"""
        cls._log.info(
            "aggregation_completed",
            event_type="aggregate",
            cache_key=cache_key,
            requested=requested,
            succeeded=succeeded,
            timed_out=timed_out,
            latency_ms=latency_ms,
            **extra,
        )

    @classmethod
    def source_fetch_failed(
        cls,
        source_id: int,
        error: str,
        **extra: Any,
    ) -> None:
        """记录源抓取失败事件。"""
        cls._log.warning(
            "source_fetch_failed",
            event_type="fetch_error",
            source_id=source_id,
            error=error,
            **extra,
        )

    @classmethod
    def article_degraded(
        cls,
        url: str,
        reason: str,
        **extra: Any,
    ) -> None:
        """记录文章内容降级事件。"""
        cls._log.warning(
            "article_degraded",
            event_type="extraction",
            url=url,
            reason=reason,
            **extra,
        )

    @classmethod
    def feature_degraded(
        cls,
        feature: str,
        reason: str,
        **extra: Any,
    ) -> None:
        """记录功能降级事件。"""
        cls._log.warning(
            "feature_degraded",
            event_type="degradation",
            feature=feature,
            reason=reason,
            **extra,
        )
