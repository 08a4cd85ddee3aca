"""
Markdown renderer tests.

Covers block structure (headings, lists, fences, paragraphs), escaping,
inline marks and end-of-document handling.
"""

from __future__ import annotations

import pytest

from enzo_blog.components.markdown import (
    MarkdownRenderer,
    RenderMarkdownInput,
    escape_html,
    format_inline,
    render_markdown,
    run,
    run_render,
)


class TestHeadings:
    def test_level_one_heading(self) -> None:
        assert render_markdown("# Title") == "<h1>Title</h1>"

    def test_level_matches_hash_run(self) -> None:
        assert render_markdown("### Three") == "<h3>Three</h3>"
        assert render_markdown("###### Six") == "<h6>Six</h6>"

    def test_seven_hashes_is_a_paragraph(self) -> None:
        assert render_markdown("####### seven") == "<p>####### seven</p>"

    def test_hash_without_space_is_a_paragraph(self) -> None:
        assert render_markdown("#tag") == "<p>#tag</p>"

    def test_heading_text_trimmed_and_formatted(self) -> None:
        assert render_markdown("#   **Big**   ") == "<h1><strong>Big</strong></h1>"


class TestLists:
    def test_consecutive_items_share_one_list(self) -> None:
        assert render_markdown("- a\n- b") == "<ul><li>a</li><li>b</li></ul>"

    def test_indented_marker_is_an_item(self) -> None:
        assert render_markdown("  - nested") == "<ul><li>nested</li></ul>"

    def test_blank_line_splits_lists(self) -> None:
        assert render_markdown("- a\n\n- b") == "<ul><li>a</li></ul><ul><li>b</li></ul>"

    def test_paragraph_closes_list(self) -> None:
        assert render_markdown("- a\ntext") == "<ul><li>a</li></ul><p>text</p>"

    def test_heading_closes_list(self) -> None:
        assert render_markdown("- a\n# H") == "<ul><li>a</li></ul><h1>H</h1>"

    def test_items_are_escaped_and_formatted(self) -> None:
        assert render_markdown("- **b** <i>") == (
            "<ul><li><strong>b</strong> &lt;i&gt;</li></ul>"
        )

    def test_dash_without_text_is_not_an_item(self) -> None:
        assert render_markdown("-") == "<p>-</p>"

    def test_open_list_closed_at_end(self) -> None:
        assert render_markdown("- only").endswith("</ul>")


class TestFences:
    def test_fenced_block_is_escaped_literal(self) -> None:
        assert render_markdown("```\n<x>\n```") == "<pre><code>&lt;x&gt;</code></pre>"

    def test_no_inline_formatting_inside_fence(self) -> None:
        assert render_markdown("```\n**b** `c`\n```") == "<pre><code>**b** `c`</code></pre>"

    def test_blank_lines_and_whitespace_kept(self) -> None:
        html = render_markdown("```\n  a  \n\nb\n```")
        assert html == "<pre><code>  a  \n\nb</code></pre>"

    def test_info_string_ignored(self) -> None:
        assert render_markdown("```python\nx = 1\n```") == "<pre><code>x = 1</code></pre>"

    def test_fence_closes_open_list(self) -> None:
        html = render_markdown("- a\n```\ncode\n```")
        assert html == "<ul><li>a</li></ul><pre><code>code</code></pre>"

    def test_list_markers_inside_fence_are_literal(self) -> None:
        assert render_markdown("```\n- a\n# b\n```") == "<pre><code>- a\n# b</code></pre>"

    def test_unterminated_fence_is_flushed(self) -> None:
        html = render_markdown("intro\n```\nline1\n\nline2")
        assert html == "<p>intro</p><pre><code>line1\n\nline2</code></pre>"

    def test_lone_marker_renders_empty_block(self) -> None:
        assert render_markdown("```") == "<pre><code></code></pre>"

    def test_indented_marker_toggles_fence(self) -> None:
        assert render_markdown("  ```\nx\n  ```") == "<pre><code>x</code></pre>"

    def test_text_after_fence_is_paragraph(self) -> None:
        assert render_markdown("```\nx\n```\nafter") == "<pre><code>x</code></pre><p>after</p>"


class TestParagraphsAndInline:
    def test_bold(self) -> None:
        assert render_markdown("**hi**") == "<p><strong>hi</strong></p>"

    def test_italic_and_code(self) -> None:
        assert render_markdown("*it* and `c`") == "<p><em>it</em> and <code>c</code></p>"

    def test_code_inside_bold_is_formatted(self) -> None:
        assert render_markdown("**`x`**") == "<p><strong><code>x</code></strong></p>"

    def test_escaping_precedes_formatting(self) -> None:
        assert render_markdown("a < b & c > d") == "<p>a &lt; b &amp; c &gt; d</p>"

    def test_quotes_not_escaped(self) -> None:
        assert escape_html("say \"hi\" 'there'") == "say \"hi\" 'there'"

    def test_unmatched_markers_left_alone(self) -> None:
        assert format_inline("2 * 3 and `open") == "2 * 3 and `open"

    def test_each_line_is_its_own_paragraph(self) -> None:
        assert render_markdown("one\ntwo") == "<p>one</p><p>two</p>"

    def test_crlf_and_cr_line_endings(self) -> None:
        assert render_markdown("# T\r\n\r\npara\rnext") == "<h1>T</h1><p>para</p><p>next</p>"

    def test_blank_lines_emit_nothing(self) -> None:
        assert render_markdown("\n   \n\t\n") == ""


class TestTotality:
    @pytest.mark.parametrize(
        "source",
        ["", "*", "**", "***", "`", "[[", "- ", "#", "``` ```", "\x00", "<script>", "**a*b**c*"],
    )
    def test_never_raises(self, source: str) -> None:
        assert isinstance(render_markdown(source), str)

    def test_none_renders_empty(self) -> None:
        assert render_markdown(None) == ""

    def test_renderer_instance_reusable(self) -> None:
        renderer = MarkdownRenderer()
        assert renderer.render("```\nopen") == "<pre><code>open</code></pre>"
        assert renderer.render("plain") == "<p>plain</p>"


class TestRunRender:
    def test_links_references_by_default(self) -> None:
        result = run_render(RenderMarkdownInput(markdown="see [[abc]]"))
        assert result.success is True
        assert 'data-post-reference="abc"' in result.html

    def test_linking_can_be_disabled(self) -> None:
        result = run_render(RenderMarkdownInput(markdown="see [[abc]]", link_references=False))
        assert result.html == "<p>see [[abc]]</p>"

    def test_generic_entry_point(self) -> None:
        assert run(RenderMarkdownInput(markdown="# Hi")).html == "<h1>Hi</h1>"
