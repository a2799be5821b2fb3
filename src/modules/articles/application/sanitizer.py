"""HTML cleanup for the rich-text renderer.

rich-text 只支持有限的标签集合，这里通过正则做轻量清理：
输入是不可信且可能不规范的 HTML，任何情况下都只降级、不抛异常。
"""

import re

from src.core.config import settings

# rich-text 支持的标签
RICH_TEXT_SUPPORTED_TAGS = (
    "div", "p", "span", "h1", "h2", "h3", "h4", "h5", "h6",
    "strong", "b", "em", "i", "u", "del", "ins", "sub", "sup",
    "br", "img", "a", "ul", "ol", "li", "blockquote", "pre", "code",
    "table", "thead", "tbody", "tr", "th", "td",
)  # fmt: skip

# 连同内容一起移除的标签
UNSUPPORTED_TAGS = (
    "script", "style", "iframe", "object", "embed", "form", "input",
    "button", "nav", "header", "footer", "aside", "canvas", "svg",
)  # fmt: skip

NO_CONTENT_PLACEHOLDER = "<p>暂无内容</p>"
LOADING_PLACEHOLDER = "<p>内容正在加载中，请稍后...</p>"
MIN_TEXT_LENGTH = 10
IMG_STYLE = "max-width:100%;height:auto;display:block;margin:10px 0;"

_TAG_NAMES = "|".join(UNSUPPORTED_TAGS)
# 标签名后必须是空白、> 或 /，避免误伤 <navigation> 之类的自定义标签
_NAME_END = r"(?=[\s/>])"

_UNSUPPORTED_BLOCK = re.compile(
    rf"<({_TAG_NAMES}){_NAME_END}[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL
)
_UNSUPPORTED_STRAY_TAG = re.compile(
    rf"</?(?:{_TAG_NAMES}){_NAME_END}[^>]*>?", re.IGNORECASE
)
_UNCLOSED_TAG_AT_END = re.compile(
    rf"<(?:{_TAG_NAMES})$", re.IGNORECASE
)
_EMPTY_CONTAINER = re.compile(r"<(div|span)\b[^>]*>\s*</\1>", re.IGNORECASE)
_IMG_TAG = re.compile(r"<img\b([^>]*)>", re.IGNORECASE)
_STYLE_ATTR = re.compile(r"""\sstyle\s*=\s*(?:"[^"]*"|'[^']*'|[^\s>]+)""", re.IGNORECASE)
_UNSAFE_ATTR = re.compile(
    r"""\s(?:id|class|data-[\w-]*|on\w+)\s*=\s*(?:"[^"]*"|'[^']*'|[^\s>]+)""",
    re.IGNORECASE,
)
_CONTAINER_OPEN = re.compile(r"<(?:div|section|article)\b([^>]*)>", re.IGNORECASE)
_CONTAINER_CLOSE = re.compile(r"</(?:div|section|article)\s*>", re.IGNORECASE)
_NESTED_P_OPEN = re.compile(r"<p\b[^>]*>\s*<p\b[^>]*>", re.IGNORECASE)
_NESTED_P_CLOSE = re.compile(r"</p>\s*</p>", re.IGNORECASE)
_EMPTY_P = re.compile(r"<p\b[^>]*>\s*</p>", re.IGNORECASE)
_ANY_TAG = re.compile(r"<[^>]*>")


def _rewrite_img(match: re.Match[str]) -> str:
    attrs = match.group(1).rstrip()
    if attrs.endswith("/"):
        attrs = attrs[:-1].rstrip()
    attrs = _STYLE_ATTR.sub("", attrs)
    return f'<img{attrs} style="{IMG_STYLE}">'


def _remove_unsupported(html: str) -> str:
    previous = None
    # 嵌套块和移除残留标签后拼接出的新标签都需要多轮处理
    while previous != html:
        previous = html
        html = _UNSUPPORTED_BLOCK.sub("", html)
        html = _UNSUPPORTED_STRAY_TAG.sub("", html)
        html = _UNCLOSED_TAG_AT_END.sub("", html)
    return html


def _collapse(pattern: re.Pattern[str], replacement: str, html: str) -> str:
    previous = None
    while previous != html:
        previous = html
        html = pattern.sub(replacement, html)
    return html


def text_length(html: str) -> int:
    """去掉标签后的文本长度。"""
    return len(_ANY_TAG.sub("", html).strip())


def clean_html_for_rich_text(html: str | None, max_length: int | None = None) -> str:
    """清理 HTML 以适配 rich-text 组件。"""
    if not html:
        return NO_CONTENT_PLACEHOLDER
    limit = max_length or settings.RICH_TEXT_MAX_LENGTH

    clean_html = _remove_unsupported(html)

    clean_html = _collapse(_EMPTY_CONTAINER, "", clean_html)

    clean_html = _IMG_TAG.sub(_rewrite_img, clean_html)

    clean_html = _UNSAFE_ATTR.sub("", clean_html)

    # 结构标签统一转为 p
    clean_html = _CONTAINER_OPEN.sub(r"<p\1>", clean_html)
    clean_html = _CONTAINER_CLOSE.sub("</p>", clean_html)

    clean_html = _collapse(_NESTED_P_OPEN, "<p>", clean_html)
    clean_html = _collapse(_NESTED_P_CLOSE, "</p>", clean_html)
    clean_html = _collapse(_EMPTY_P, "", clean_html)

    if text_length(clean_html) < MIN_TEXT_LENGTH:
        return LOADING_PLACEHOLDER

    if len(clean_html) > limit:
        clean_html = clean_html[:limit] + "...</p>"

    return clean_html
