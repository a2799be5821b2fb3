"""Known platform table.

根据域名识别平台，集中维护：
- 站点类型
- 展示名称与平台介绍
- 访问受限时基于 URL 的标题/摘要猜测
- 正文选择器配置
"""

from dataclasses import dataclass, field
from enum import StrEnum


class SiteType(StrEnum):
    """站点类型。"""

    ZHIHU = "zhihu"
    KR36 = "36kr"
    BILIBILI = "bilibili"
    WEIBO = "weibo"
    DOUYIN = "douyin"
    HUPU = "hupu"
    DOUBAN = "douban"
    BAIDU = "baidu"
    GENERAL = "general"


@dataclass(frozen=True)
class SelectorConfig:
    """正文提取选择器配置。

    selector: 主正文选择器（取第一个匹配元素的 innerHTML）
    remove_selectors: 提取前删除的噪音区域
    title_selectors: 站点特有的标题元素
    summary_selectors: 站点特有的摘要元素
    """

    selector: str
    remove_selectors: tuple[str, ...] = ()
    title_selectors: tuple[str, ...] = ()
    summary_selectors: tuple[str, ...] = ()


# 未配置专用选择器的站点使用
DEFAULT_SELECTORS = SelectorConfig(
    selector=(
        "article, .content, .post-content, .article-content, "
        ".main-content, .RichContent"
    ),
    remove_selectors=(
        ".ad",
        ".advertisement",
        ".share",
        ".related",
        ".AuthorInfo",
        ".ContentItem-actions",
    ),
)

GENERAL_SELECTORS = SelectorConfig(
    selector="article, .content, .post-content, .article-content, .main-content",
    remove_selectors=(".ad", ".advertisement", ".share", ".related", ".sidebar"),
)

# 主选择器内容过少时，所有站点依次尝试的备用选择器
BROAD_FALLBACK_SELECTORS: tuple[str, ...] = (
    ".RichContent-inner",
    ".Post-RichTextContainer",
    ".QuestionAnswer-content",
    "main",
    ".main",
    "body",
)

GENERIC_DESCRIPTION = "这是一个热门的中文网站，提供丰富的资讯和内容。"
GENERIC_GUESS_TITLE = "热门内容"
GENERIC_GUESS_SUMMARY = "由于网站访问限制，暂时无法获取详细内容。"


@dataclass(frozen=True)
class Platform:
    """已知平台。"""

    site_type: SiteType
    host_patterns: tuple[str, ...]
    display_name: str
    description: str = GENERIC_DESCRIPTION
    guess_title: str = GENERIC_GUESS_TITLE
    guess_summary: str = GENERIC_GUESS_SUMMARY
    selectors: SelectorConfig = field(default=DEFAULT_SELECTORS)
    is_video: bool = False

    def matches(self, hostname: str) -> bool:
        host = hostname.lower()
        return any(pattern in host for pattern in self.host_patterns)


PLATFORMS: tuple[Platform, ...] = (
    Platform(
        site_type=SiteType.ZHIHU,
        host_patterns=("zhihu.com",),
        display_name="知乎",
        description=(
            "知乎是中文互联网高质量的问答社区，汇聚了各行各业的专业人士分享知识、经验和见解。"
        ),
        selectors=SelectorConfig(
            selector=(
                ".RichContent-inner, .Post-RichTextContainer, "
                ".QuestionAnswer-content, article"
            ),
            remove_selectors=(
                ".AuthorInfo",
                ".ContentItem-actions",
                ".Sticky",
                ".FollowButton",
                ".VoteButton",
            ),
            title_selectors=(".QuestionHeader-title", ".ContentItem-title"),
            summary_selectors=(".QuestionHeader-detail",),
        ),
    ),
    Platform(
        site_type=SiteType.KR36,
        host_patterns=("36kr.com",),
        display_name="36氪",
        description="36氪是中国领先的科技创业媒体，专注报道创业公司、投资机构和科技趋势。",
        guess_title="36氪科技资讯",
        guess_summary="36氪平台的科技创业资讯内容。",
        selectors=SelectorConfig(
            selector=".article-content, .common-width",
            remove_selectors=(".author-info", ".share-button"),
        ),
    ),
    Platform(
        site_type=SiteType.BILIBILI,
        host_patterns=("bilibili.com", "b23.tv"),
        display_name="B站",
        description=(
            "B站是中国年轻人聚集的文化社区，涵盖动画、游戏、科技、生活等多元化内容。"
        ),
        guess_title="B站内容",
        guess_summary="B站平台的视频或文章内容。",
        selectors=SelectorConfig(
            selector=".article-content, .article-holder",
            remove_selectors=(".up-info", ".video-page-game-card-small"),
        ),
        is_video=True,
    ),
    Platform(
        site_type=SiteType.WEIBO,
        host_patterns=("weibo.com",),
        display_name="微博",
        description="微博是中国主流的社交媒体平台，实时汇聚社会热点与公众讨论。",
        guess_title="微博热门内容",
        guess_summary="新浪微博平台的热门话题或内容。",
    ),
    Platform(
        site_type=SiteType.DOUYIN,
        host_patterns=("douyin.com",),
        display_name="抖音",
        description="抖音是流行的短视频平台，热门话题和创意内容在这里快速传播。",
        guess_title="抖音热门内容",
        guess_summary="抖音平台的热门视频或话题。",
    ),
    Platform(
        site_type=SiteType.HUPU,
        host_patterns=("hupu.com",),
        display_name="虎扑",
        description="虎扑是以体育为核心的社区，聚集了大量球迷与生活话题讨论。",
    ),
    Platform(
        site_type=SiteType.DOUBAN,
        host_patterns=("douban.com",),
        display_name="豆瓣",
        description="豆瓣是以书影音评分和兴趣小组著称的文化社区。",
    ),
    Platform(
        site_type=SiteType.BAIDU,
        host_patterns=("baidu.com",),
        display_name="百度",
        description="百度是中国最大的搜索引擎，热搜榜反映了实时的公众关注焦点。",
    ),
)

GENERIC_PLATFORM = Platform(
    site_type=SiteType.GENERAL,
    host_patterns=(),
    display_name="未知网站",
    selectors=GENERAL_SELECTORS,
)


def detect_platform(hostname: str | None) -> Platform:
    """按域名子串匹配平台，未识别时返回通用平台。"""
    if not hostname:
        return GENERIC_PLATFORM
    for platform in PLATFORMS:
        if platform.matches(hostname):
            return platform
    return GENERIC_PLATFORM
