"""URL validation and resolution helpers."""

from __future__ import annotations

from ipaddress import ip_address
from urllib.parse import urljoin, urlparse


def is_public_http_url(url: str | None) -> bool:
    """是否为可访问的公网 HTTP(S) URL（排除内网/回环地址）。"""
    if not url or not isinstance(url, str):
        return False
    parsed = urlparse(url.strip())
    if parsed.scheme not in ("http", "https"):
        return False
    host = parsed.hostname
    if not host:
        return False
    if host == "localhost" or host.endswith((".local", ".internal")):
        return False
    try:
        ip_value = ip_address(host)
    except ValueError:
        return True
    if (
        ip_value.is_private
        or ip_value.is_loopback
        or ip_value.is_link_local
        or ip_value.is_reserved
        or ip_value.is_multicast
    ):
        return False
    return True


def hostname_of(url: str) -> str:
    """提取小写域名，无法解析时返回空字符串。"""
    try:
        return (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""


def is_relative_resource(value: str | None) -> bool:
    """资源地址是否需要补全（非 http(s) 绝对地址、非 data URI）。"""
    if not value:
        return False
    stripped = value.strip()
    return not stripped.startswith(("http://", "https://", "data:"))


def resolve_url(base_url: str, value: str) -> str:
    """将相对地址解析为绝对地址。"""
    return urljoin(base_url, value.strip())
