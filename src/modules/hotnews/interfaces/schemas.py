"""Hot news API schemas."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt

from src.modules.hotnews.domain.entities import Source, SourceResult


class HotNewsRequest(BaseModel):
    """Hot news request."""

    sources: list[StrictInt] = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("sources", "siteIds"),
        description="源ID列表（兼容 siteIds）",
    )
    timeout_seconds: float | None = Field(
        None, gt=0, le=30, description="聚合截止时间（秒）"
    )

    model_config = ConfigDict(
        json_schema_extra={"example": {"sources": [1, 3, 7]}},
    )


class NewsItemResponse(BaseModel):
    """Hot list item response."""

    index: int
    title: str
    url: str
    hot: str | int | float | None = None


class SourceResultResponse(BaseModel):
    """Hot list response for one source."""

    name: str = Field(..., description="平台名称")
    subtitle: str = Field(..., description="榜单名称")
    update_time: str = Field(..., description="更新时间")
    data: list[NewsItemResponse] = Field(..., description="热榜条目")

    @classmethod
    def from_result(cls, result: SourceResult) -> "SourceResultResponse":
        return cls(
            name=result.name,
            subtitle=result.subtitle,
            update_time=result.update_time,
            data=[NewsItemResponse(**item.model_dump()) for item in result.items],
        )


class SourceInfoResponse(BaseModel):
    """Registry entry response."""

    id: int
    name: str
    description: str

    @classmethod
    def from_source(cls, source: Source) -> "SourceInfoResponse":
        return cls(id=source.id, name=source.name, description=source.description)
