"""Hot news domain entities."""

import re
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

_DISPLAY_NAME_PATTERN = re.compile(r"\(([^()]+)\)")


@dataclass(frozen=True)
class Source:
    """热榜数据源（只读配置）。"""

    id: int
    name: str  # 上游资源名
    description: str

    @property
    def display_name(self) -> str:
        """描述中括号内的名称，如 "Zhihu Hot List (知乎热榜)" -> "知乎热榜"。"""
        match = _DISPLAY_NAME_PATTERN.search(self.description)
        if match:
            return match.group(1).strip()
        return self.description


class NewsItem(BaseModel):
    """热榜条目。"""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., description="排名")
    title: str = Field(..., description="标题")
    url: str = Field(..., description="链接")
    hot: str | int | float | None = Field(default=None, description="热度")


class SourceResult(BaseModel):
    """单个源的热榜快照（真实数据或降级占位数据）。"""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="平台名称")
    subtitle: str = Field(..., description="榜单名称")
    update_time: str = Field(..., description="更新时间")
    items: tuple[NewsItem, ...] = Field(default=(), description="热榜条目")
