"""Cache Key 命名规范。"""

from collections.abc import Iterable


class CacheKeys:
    """Cache Key 命名空间管理。"""

    # 热榜聚合结果
    # hotnews_{id}_{id}_...
    HOTNEWS_PREFIX = "hotnews"

    @classmethod
    def hotnews(cls, source_ids: Iterable[int]) -> str:
        """生成热榜聚合结果 key。

        按请求顺序拼接全部 ID（包括重复 ID），结果长度与顺序都由它决定。

        Args:
            source_ids: 请求的源 ID 序列

        Returns:
            格式化的缓存 key
        """
        return "_".join([cls.HOTNEWS_PREFIX, *(str(int(i)) for i in source_ids)])
