"""Hot list source registry."""

from collections.abc import Mapping
from types import MappingProxyType

from src.modules.hotnews.domain.entities import Source
from src.modules.hotnews.domain.exceptions import UnknownSourceError

HOT_NEWS_SOURCES: tuple[Source, ...] = (
    Source(id=1, name="zhihuHot", description="Zhihu Hot List (知乎热榜)"),
    Source(id=2, name="36Ke", description="36Kr Hot List (36氪热榜)"),
    Source(id=3, name="baiduRD", description="Baidu Hot Discussion (百度热点)"),
    Source(id=4, name="bili", description="Bilibili Hot List (B站热榜)"),
    Source(id=5, name="wbHot", description="Weibo Hot Search (微博热搜)"),
    Source(id=6, name="douyinHot", description="Douyin Hot List (抖音热点)"),
    Source(id=7, name="huPu", description="Hupu Hot List (虎扑热榜)"),
    Source(id=8, name="douban", description="Douban Hot List (豆瓣热榜)"),
    Source(id=9, name="itNews", description="IT News (IT新闻)"),
)


class SourceRegistry:
    """只读的源 ID -> Source 映射。"""

    def __init__(self, sources: tuple[Source, ...] | list[Source] = HOT_NEWS_SOURCES):
        table: dict[int, Source] = {}
        for source in sources:
            if source.id <= 0:
                raise ValueError(f"Source id must be positive: {source.id}")
            if source.id in table:
                raise ValueError(f"Duplicate source id: {source.id}")
            table[source.id] = source
        if not table:
            raise ValueError("Source registry must not be empty")
        self._sources: Mapping[int, Source] = MappingProxyType(table)
        self._max_id = max(table)

    def get(self, source_id: int) -> Source | None:
        # bool 是 int 的子类，True 不能当成 1
        if isinstance(source_id, bool) or not isinstance(source_id, int):
            return None
        return self._sources.get(source_id)

    def require(self, source_id: int) -> Source:
        """获取源，不存在时抛出 UnknownSourceError。"""
        source = self.get(source_id)
        if source is None:
            raise UnknownSourceError(source_id, self._max_id)
        return source

    def max_id(self) -> int:
        return self._max_id

    def all(self) -> list[Source]:
        return [self._sources[key] for key in sorted(self._sources)]

    def describe(self) -> str:
        """生成可用源的说明文本。"""
        sources_list = ",\n".join(
            f'{{ID: {source.id}, Platform: "{source.description}"}}'
            for source in self.all()
        )
        return (
            "Available HotNews sources (ID: Platform):\n\n"
            f"{sources_list}\n\n"
            "Example usage:\n"
            "- [3]: Get Baidu Hot Discussion only\n"
            "- [1,3,7]: Get hot lists from zhihuHot, Baidu, and huPu\n"
            "- [1,2,3,4]: Get hot lists from zhihuHot, 36Kr, Baidu, and Bilibili"
        )


source_registry = SourceRegistry()
