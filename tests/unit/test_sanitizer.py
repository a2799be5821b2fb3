"""Tests for rich-text HTML cleanup."""

import re

import pytest

from src.modules.articles.application.sanitizer import (
    IMG_STYLE,
    LOADING_PLACEHOLDER,
    NO_CONTENT_PLACEHOLDER,
    clean_html_for_rich_text,
)


@pytest.mark.parametrize("html", ["", None])
def test_empty_input_returns_placeholder(html) -> None:
    assert clean_html_for_rich_text(html) == NO_CONTENT_PLACEHOLDER


def test_removes_unsupported_blocks_with_content() -> None:
    html = (
        "<div><p>正文内容足够长的段落文本</p>"
        "<script>alert(1)</script><style>p{}</style>"
        "<nav><a href='/'>首页</a></nav><form><input name=q></form></div>"
    )

    assert clean_html_for_rich_text(html) == "<p>正文内容足够长的段落文本</p>"


def test_removes_stray_unsupported_tags() -> None:
    html = (
        "<p>这是一段足够长的正文内容</p>"
        '<iframe src="https://evil.example">'
        '<embed src="a.swf"/>'
        "</object><script src=a.js>"
    )

    cleaned = clean_html_for_rich_text(html)

    assert cleaned == "<p>这是一段足够长的正文内容</p>"


def test_keeps_tags_that_only_share_a_prefix() -> None:
    cleaned = clean_html_for_rich_text("<p>导航栏目说明文字较长</p><navigation>保留</navigation>")
    assert "保留" in cleaned


def test_rewrites_images_with_responsive_style() -> None:
    html = '<p>图片说明文字足够长了</p><img src="a.png" style="width:10px" class="x"/>'

    cleaned = clean_html_for_rich_text(html)

    assert f'<img src="a.png" style="{IMG_STYLE}">' in cleaned
    assert "width:10px" not in cleaned


def test_strips_identity_and_event_attributes() -> None:
    html = '<p id="a" class="b" data-x="1" onclick="evil()">足够长的文本内容在这里</p>'
    assert clean_html_for_rich_text(html) == "<p>足够长的文本内容在这里</p>"


def test_converts_containers_and_collapses_paragraphs() -> None:
    html = "<section><div>内容足够长足够长的文本</div></section><p> </p><div><span></span></div>"
    assert clean_html_for_rich_text(html) == "<p>内容足够长足够长的文本</p>"


def test_short_text_returns_loading_placeholder() -> None:
    assert clean_html_for_rich_text("<div><span></span>短</div>") == LOADING_PLACEHOLDER


def test_long_output_is_truncated_and_closed() -> None:
    html = "<p>" + "字" * 100 + "</p>"

    cleaned = clean_html_for_rich_text(html, max_length=50)

    assert cleaned.endswith("...</p>")
    assert len(cleaned) == 50 + len("...</p>")


@pytest.mark.parametrize("html", ["<<<>>>", "<p", "</div></div>", "<img", "<script"])
def test_malformed_input_never_raises(html: str) -> None:
    assert isinstance(clean_html_for_rich_text(html), str)


@pytest.mark.parametrize(
    "html",
    [
        "<p>这是一段足够长的正文内容</p><scr<iframe>ipt>alert(1)</p>",
        "<p>这是一段足够长的正文内容</p><sty<embed/>le>body{display:none}</p>",
        "<p>这是一段足够长的正文内容</p><if<script src=x>rame src=https://evil>",
    ],
)
def test_spliced_tags_do_not_reassemble(html: str) -> None:
    cleaned = clean_html_for_rich_text(html)

    assert re.search(r"<\s*/?\s*(script|style|iframe)", cleaned, re.IGNORECASE) is None
    assert cleaned.startswith("<p>这是一段足够长的正文内容</p>")
