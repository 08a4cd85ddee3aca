"""
Markdown component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RenderMarkdownInput:
    """Input for rendering markdown to HTML."""

    markdown: str
    link_references: bool = True


@dataclass(frozen=True)
class RenderMarkdownOutput:
    """Rendered HTML fragment."""

    html: str
    success: bool = True
