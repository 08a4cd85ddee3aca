"""
Markdown component - restricted markdown dialect to HTML.
"""

from ._impl import (
    MarkdownRenderer,
    escape_html,
    format_inline,
    render_inline,
    render_markdown,
)
from .component import run, run_render
from .models import RenderMarkdownInput, RenderMarkdownOutput

__all__ = [
    # Entry points
    "run",
    "run_render",
    # Models
    "RenderMarkdownInput",
    "RenderMarkdownOutput",
    # Renderer
    "MarkdownRenderer",
    "escape_html",
    "format_inline",
    "render_inline",
    "render_markdown",
]
