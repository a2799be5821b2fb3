"""HTML template loader using Jinja2.

Templates are stored in resources/html_templates/ directory.
"""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

# Template directory relative to this file
_TEMPLATES_DIR = (
    Path(__file__).parent.parent.parent.parent.parent / "resources" / "html_templates"
)

_env: Environment | None = None


def _get_env() -> Environment:
    """Get or create Jinja2 environment (lazy initialization)."""
    global _env
    if _env is None:
        if not _TEMPLATES_DIR.exists():
            raise FileNotFoundError(
                f"HTML templates directory not found: {_TEMPLATES_DIR}"
            )
        _env = Environment(
            loader=FileSystemLoader(_TEMPLATES_DIR),
            autoescape=select_autoescape(["html", "xml"]),
            keep_trailing_newline=True,
        )
    return _env


def render_template(name: str, **variables: object) -> str:
    """Render an HTML template file.

    变量默认做 HTML 转义，调用方直接传入原始字符串即可。

    Raises:
        jinja2.TemplateNotFound: If template file not found
        jinja2.TemplateError: If template rendering fails
    """
    env = _get_env()
    template = env.get_template(name)
    return template.render(**variables)
