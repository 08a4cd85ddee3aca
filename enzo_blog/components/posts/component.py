"""
Posts component - post lifecycle at the API boundary.

Validates and normalises caller input, delegates to PostStore, and turns
validation and not-found failures into operation outputs carrying error
codes. Storage failures are not caught here: they propagate to the
transport layer as failed operations.

Error codes:
- title_required / content_required: field empty after trimming
- invalid_type: field supplied but not a string
- post_not_found: no record with the id
"""

from __future__ import annotations

from enzo_blog.components.markdown import render_markdown
from enzo_blog.components.references import extract_references, linkify_references
from enzo_blog.domain.entities import Post, normalize_format

from ._impl import PostStore, validate_post_fields
from .models import (
    CreatePostInput,
    DeletePostInput,
    GetPostInput,
    ListPostsInput,
    PostListOutput,
    PostNotFoundError,
    PostOperationOutput,
    PostOutput,
    PostValidationError,
    PostValidationIssue,
    RenderPostInput,
    RenderPostOutput,
    UpdatePostInput,
)


def _not_found(post_id: str) -> PostValidationIssue:
    return PostValidationIssue(
        code="post_not_found",
        message=f"Post {post_id} not found",
    )


# --- Component Entry Points ---


def run_list(inp: ListPostsInput, store: PostStore) -> PostListOutput:
    """List posts, most recently updated first."""
    posts = store.list()
    total = len(posts)
    if inp.limit is not None:
        posts = posts[: max(inp.limit, 0)]
    return PostListOutput(posts=posts, total=total)


def run_get(inp: GetPostInput, store: PostStore) -> PostOutput:
    """Get a post by id."""
    try:
        post = store.get(inp.post_id)
    except PostNotFoundError:
        return PostOutput(post=None, errors=[_not_found(inp.post_id)], success=False)
    return PostOutput(post=post)


def run_create(inp: CreatePostInput, store: PostStore) -> PostOperationOutput:
    """
    Create a post.

    Title is trimmed, format is normalised (unknown or missing values become
    markdown). Content is stored as given.
    """
    errors = validate_post_fields(inp.title, inp.content, require_all=True)
    if errors:
        return PostOperationOutput(errors=errors, success=False)

    try:
        post = store.create(
            title=inp.title.strip(),
            content=inp.content,
            format=normalize_format(inp.format),
        )
    except PostValidationError as e:
        return PostOperationOutput(errors=e.errors, success=False)

    return PostOperationOutput(post=post)


def run_update(inp: UpdatePostInput, store: PostStore) -> PostOperationOutput:
    """Update title, content and/or format of an existing post."""
    changes = {}
    if inp.title is not None:
        changes["title"] = inp.title
    if inp.content is not None:
        changes["content"] = inp.content
    if inp.format is not None:
        changes["format"] = inp.format

    try:
        post = store.update(inp.post_id, changes)
    except PostNotFoundError:
        return PostOperationOutput(errors=[_not_found(inp.post_id)], success=False)
    except PostValidationError as e:
        return PostOperationOutput(errors=e.errors, success=False)

    return PostOperationOutput(post=post)


def run_delete(inp: DeletePostInput, store: PostStore) -> PostOperationOutput:
    """Delete a post."""
    try:
        store.delete(inp.post_id)
    except PostNotFoundError:
        return PostOperationOutput(errors=[_not_found(inp.post_id)], success=False)
    return PostOperationOutput()


def render_post_body(post: Post, *, link_references: bool = True) -> str:
    """HTML for a post: markdown is rendered, html is used verbatim."""
    body = post.content if post.format == "html" else render_markdown(post.content)
    if link_references:
        body = linkify_references(body)
    return body


def run_render(inp: RenderPostInput, store: PostStore) -> RenderPostOutput:
    """
    Render a stored post and report its references.

    References to ids with no stored post are listed in
    ``missing_references``; they are still rendered as links.
    """
    try:
        post = store.get(inp.post_id)
    except PostNotFoundError:
        return RenderPostOutput(errors=[_not_found(inp.post_id)], success=False)

    references = extract_references(post.content)
    missing = [ref for ref in references if not store.exists(ref)]

    return RenderPostOutput(
        post=post,
        html=render_post_body(post, link_references=inp.link_references),
        references=references,
        missing_references=missing,
    )
