#!/usr/bin/env python3
"""热榜命令行工具。

不启动 HTTP 服务，直接调用聚合/提取服务，便于调试和运维排查。

使用方式：
    # 获取知乎、百度、虎扑热榜（Markdown 输出）
    python scripts/hotnews_cli.py hotnews 1 3 7

    # 自定义截止时间，JSON 输出
    python scripts/hotnews_cli.py hotnews 1 2 --timeout 5 --json

    # 提取文章内容
    python scripts/hotnews_cli.py article https://www.zhihu.com/question/123

    # 获取 webview 改写后的页面
    python scripts/hotnews_cli.py html https://36kr.com/p/123 > page.html

    # 列出可用热榜源
    python scripts/hotnews_cli.py sources
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# 添加项目根目录到 Python 路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.core.domain.exceptions import DomainException  # noqa: E402
from src.core.infrastructure.logging import setup_logging  # noqa: E402
from src.modules.articles.application.dependencies import (  # noqa: E402
    get_article_extractor,
    get_webview_proxy,
)
from src.modules.hotnews.application.dependencies import (  # noqa: E402
    get_hot_news_aggregator,
    get_source_registry,
)
from src.modules.hotnews.application.fallback import (  # noqa: E402
    format_hot_news_markdown,
)


async def run_hotnews(source_ids: list[int], timeout: float | None, json_output: bool):
    aggregator = get_hot_news_aggregator()
    results = await aggregator.get_hot_news(source_ids, timeout_seconds=timeout)
    if json_output:
        print(
            json.dumps(
                [result.model_dump() for result in results],
                ensure_ascii=False,
                indent=2,
            )
        )
    else:
        print(format_hot_news_markdown(results))


async def run_article(url: str, json_output: bool):
    article = await get_article_extractor().fetch_article_content(url)
    if json_output:
        print(json.dumps(article.model_dump(), ensure_ascii=False, indent=2))
    else:
        print(f"# {article.title}\n")
        print(f"> {article.summary}\n")
        print(article.content)


async def run_html(url: str):
    print(await get_webview_proxy().fetch_article_html(url))


def run_sources(json_output: bool):
    registry = get_source_registry()
    if json_output:
        print(
            json.dumps(
                [
                    {"id": s.id, "name": s.name, "description": s.description}
                    for s in registry.all()
                ],
                ensure_ascii=False,
                indent=2,
            )
        )
    else:
        print(registry.describe())


def build_parser() -> argparse.ArgumentParser:
    output = argparse.ArgumentParser(add_help=False)
    output.add_argument(
        "--json",
        action="store_true",
        help="输出 JSON 格式",
    )

    parser = argparse.ArgumentParser(description="热榜聚合命令行工具")
    subparsers = parser.add_subparsers(dest="command", required=True)

    hotnews = subparsers.add_parser("hotnews", parents=[output], help="获取热榜")
    hotnews.add_argument("sources", type=int, nargs="+", help="源 ID 列表")
    hotnews.add_argument(
        "--timeout",
        "-t",
        type=float,
        default=None,
        help="聚合截止时间（秒）",
    )

    article = subparsers.add_parser("article", parents=[output], help="提取文章内容")
    article.add_argument("url", help="文章链接")

    html = subparsers.add_parser("html", help="获取 webview 页面")
    html.add_argument("url", help="页面链接")

    subparsers.add_parser("sources", parents=[output], help="列出可用热榜源")
    return parser


def main(argv: list[str] | None = None) -> int:
    """主函数。"""
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        if args.command == "hotnews":
            asyncio.run(run_hotnews(args.sources, args.timeout, args.json))
        elif args.command == "article":
            asyncio.run(run_article(args.url, args.json))
        elif args.command == "html":
            asyncio.run(run_html(args.url))
        else:
            run_sources(args.json)
    except DomainException as e:
        print(f"❌ {e.error_code}: {e.message}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
