"""Application configuration."""

from typing import Annotated, Any, Literal

from pydantic import AnyUrl, BeforeValidator, HttpUrl, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",")]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "hotnews"
    SERVER_PORT: int = 3001
    ROOTPATH: str = ""
    API_V1_STR: str = "/api/v1"
    FRONTEND_HOST: str = "http://localhost:3000"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"
    TIMEZONE: str = "Asia/Shanghai"

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []
    CORS_ALLOW_METHODS: list[str] = ["GET", "POST", "DELETE", "OPTIONS"]
    CORS_ALLOW_HEADERS: list[str] = ["*"]

    @computed_field
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS] + [
            self.FRONTEND_HOST
        ]

    # Sentry
    SENTRY_DSN: HttpUrl | None = None

    # Hot list upstream
    HOTNEWS_API_BASE_URL: str = "https://api.vvhan.com/api/hotlist"
    HOTNEWS_SOURCE_TIMEOUT_SEC: float = 6.0  # 单个源请求超时
    HOTNEWS_AGGREGATION_TIMEOUT_SEC: float = 8.0  # 聚合整体截止时间
    HOTNEWS_CACHE_TTL_SEC: int = 300  # 全部完成：5 分钟
    HOTNEWS_PARTIAL_CACHE_TTL_SEC: int = 120  # 超时部分结果：2 分钟
    HOTNEWS_CANCEL_ON_TIMEOUT: bool = True  # 截止后取消未完成的请求

    # Cache
    CACHE_MAX_ENTRIES: int = 256
    CACHE_SWEEP_INTERVAL_SEC: float = 60.0

    # Article fetching
    ARTICLE_FETCH_TIMEOUT_SEC: float = 15.0
    ARTICLE_MAX_REDIRECTS: int = 5
    RICH_TEXT_MAX_LENGTH: int = 50_000

    BROWSER_USER_AGENT: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )


settings = Settings()
