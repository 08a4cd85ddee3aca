"""Reference linker tests."""

from __future__ import annotations

from enzo_blog.components.markdown import render_markdown
from enzo_blog.components.references import (
    extract_references,
    linkify_references,
    reference_anchor,
)


def test_token_becomes_anchor() -> None:
    assert linkify_references("see [[abc]]") == (
        'see <a href="#post-abc" data-post-reference="abc">[abc]</a>'
    )


def test_text_without_tokens_unchanged() -> None:
    text = "<p>no [refs] here [[ or ]] there</p>"
    assert linkify_references(text) == text


def test_invalid_characters_not_linked() -> None:
    assert linkify_references("[[bad id]]") == "[[bad id]]"
    assert linkify_references("[[]]") == "[[]]"


def test_multiple_tokens() -> None:
    html = linkify_references("[[a]][[b-2_c]]")
    assert html == reference_anchor("a") + reference_anchor("b-2_c")


def test_leftmost_scan_with_extra_brackets() -> None:
    assert linkify_references("[[[x]]]") == "[" + reference_anchor("x") + "]"


def test_uuid_style_ids() -> None:
    post_id = "3f2b8c1e-7a4d-4e2f-9b1c-0d5e6f7a8b9c"
    assert f'href="#post-{post_id}"' in linkify_references(f"[[{post_id}]]")


def test_works_on_rendered_markdown() -> None:
    html = linkify_references(render_markdown("- see [[abc]]"))
    assert html == f"<ul><li>see {reference_anchor('abc')}</li></ul>"


def test_extract_references_dedupes_in_order() -> None:
    assert extract_references("[[b]] then [[a]] and [[b]] [[bad id]]") == ["b", "a"]


def test_extract_references_empty() -> None:
    assert extract_references("nothing") == []
