"""Articles API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from src.modules.articles.domain.entities import ArticleContent


class ArticleRequest(BaseModel):
    """Article request."""

    url: str = Field(..., min_length=1, max_length=2048, description="文章链接")

    model_config = ConfigDict(
        json_schema_extra={"example": {"url": "https://www.zhihu.com/question/123"}},
    )


class ArticleContentResponse(BaseModel):
    """Extracted (or degraded) article content."""

    title: str = Field(..., description="标题")
    content: str = Field(..., description="rich-text 可渲染的 HTML")
    summary: str = Field(..., description="摘要")

    @classmethod
    def from_content(cls, article: ArticleContent) -> "ArticleContentResponse":
        return cls(title=article.title, content=article.content, summary=article.summary)
