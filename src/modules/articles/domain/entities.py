"""Article domain entities."""

from pydantic import BaseModel, ConfigDict, Field


class ArticleContent(BaseModel):
    """文章内容（真实提取或降级生成）。"""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="标题")
    content: str = Field(..., description="HTML 片段")
    summary: str = Field(..., description="摘要")
