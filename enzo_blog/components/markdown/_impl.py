"""
Markdown renderer - restricted markdown dialect to HTML.

Supported blocks: fenced code, flat ``-`` lists, ``#`` headings (1-6),
paragraphs. Supported inline marks: ``**bold**``, ``*italic*``, `` `code` ``.

Key behaviors:
- Single forward pass over lines with two block flags (list, fence)
- Escapes ``&``, ``<`` and ``>`` before inline formatting
- Fence contents are escaped but never inline formatted
- An unterminated fence is flushed as a code block at end of input
- Total: any string renders without raising
"""

from __future__ import annotations

import html
import re

# --- Patterns ---

FENCE_MARKER = "```"

LIST_ITEM_RE = re.compile(r"^\s*-\s+")
HEADING_RE = re.compile(r"^(#{1,6})\s+(.*)$")
LINE_ENDING_RE = re.compile(r"\r\n?")

# Applied in this order over the whole string
INLINE_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\*\*([^*]+)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"\*([^*]+)\*"), r"<em>\1</em>"),
    (re.compile(r"`([^`]+)`"), r"<code>\1</code>"),
)


# --- Inline Rendering ---


def escape_html(text: str) -> str:
    """Escape ``&``, ``<`` and ``>``; quotes are left alone."""
    return html.escape(text, quote=False)


def format_inline(text: str) -> str:
    """Apply bold, italic and code marks to already-escaped text."""
    for pattern, replacement in INLINE_RULES:
        text = pattern.sub(replacement, text)
    return text


def render_inline(text: str) -> str:
    return format_inline(escape_html(text))


# --- Block Rendering ---


class MarkdownRenderer:
    """
    Line-oriented renderer.

    A renderer instance holds block state for one document at a time;
    ``render`` resets it, so an instance can be reused but not shared
    between threads mid-render.
    """

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self._parts: list[str] = []
        self._in_list = False
        self._in_code = False
        self._code_buffer: list[str] = []

    def render(self, markdown: str | None) -> str:
        """Render a markdown document to an HTML fragment."""
        self._reset()
        text = LINE_ENDING_RE.sub("\n", markdown or "")

        for raw_line in text.split("\n"):
            self._feed(raw_line)

        self._close_list()
        self._close_code()
        return "".join(self._parts)

    def _feed(self, raw_line: str) -> None:
        line = raw_line.rstrip()

        if line.strip().startswith(FENCE_MARKER):
            if self._in_code:
                self._close_code()
            else:
                self._close_list()
                self._in_code = True
                self._code_buffer = []
            return

        if self._in_code:
            self._code_buffer.append(escape_html(raw_line))
            return

        if LIST_ITEM_RE.match(line):
            if not self._in_list:
                self._close_code()
                self._parts.append("<ul>")
                self._in_list = True
            item = LIST_ITEM_RE.sub("", line, count=1)
            self._parts.append(f"<li>{render_inline(item)}</li>")
            return

        self._close_list()

        if not line.strip():
            return

        heading = HEADING_RE.match(line)
        if heading:
            level = len(heading.group(1))
            content = render_inline(heading.group(2).strip())
            self._parts.append(f"<h{level}>{content}</h{level}>")
            return

        self._parts.append(f"<p>{render_inline(line)}</p>")

    def _close_list(self) -> None:
        if self._in_list:
            self._parts.append("</ul>")
            self._in_list = False

    def _close_code(self) -> None:
        if self._in_code:
            body = "\n".join(self._code_buffer)
            self._parts.append(f"<pre><code>{body}</code></pre>")
            self._in_code = False
            self._code_buffer = []


# --- Main Rendering Function ---


def render_markdown(markdown: str | None) -> str:
    """
    Render restricted markdown to HTML.

    Args:
        markdown: Source text; ``None`` renders as empty.

    Returns:
        HTML fragment with no wrapping element.
    """
    return MarkdownRenderer().render(markdown)
