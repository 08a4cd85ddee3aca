"""
Markdown component - Render restricted markdown to HTML.

Entry point for callers that want markdown rendering with optional
``[[id]]`` reference linking applied to the result.
"""

from __future__ import annotations

from enzo_blog.components.references import linkify_references

from ._impl import render_markdown
from .models import RenderMarkdownInput, RenderMarkdownOutput


def run_render(inp: RenderMarkdownInput) -> RenderMarkdownOutput:
    """
    Render markdown, then link references if requested.

    Rendering is total, so the output is always successful.
    """
    html = render_markdown(inp.markdown)
    if inp.link_references:
        html = linkify_references(html)
    return RenderMarkdownOutput(html=html)


def run(inp: RenderMarkdownInput) -> RenderMarkdownOutput:
    """Generic entry point."""
    return run_render(inp)
