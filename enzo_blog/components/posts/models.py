"""
Posts component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from enzo_blog.domain.entities import Post

# --- Validation Error ---


@dataclass(frozen=True)
class PostValidationIssue:
    """A single validation problem."""

    code: str
    message: str
    field: str | None = None


class PostValidationError(Exception):
    """Raised when a post would be stored with missing or malformed fields."""

    def __init__(self, errors: list[PostValidationIssue]) -> None:
        self.errors = errors
        super().__init__("; ".join(e.message for e in errors))


class PostNotFoundError(Exception):
    """Raised when an operation targets an id with no record."""

    def __init__(self, post_id: str) -> None:
        self.post_id = post_id
        super().__init__(f"Post {post_id} not found")


# --- Input Models ---


@dataclass(frozen=True)
class CreatePostInput:
    """Input for creating a post. Values arrive as parsed, unvalidated data."""

    title: Any
    content: Any
    format: Any = None


@dataclass(frozen=True)
class UpdatePostInput:
    """Input for updating a post. ``None`` means leave the field unchanged."""

    post_id: str
    title: Any = None
    content: Any = None
    format: Any = None


@dataclass(frozen=True)
class GetPostInput:
    """Input for retrieving a post."""

    post_id: str


@dataclass(frozen=True)
class DeletePostInput:
    """Input for deleting a post."""

    post_id: str


@dataclass(frozen=True)
class ListPostsInput:
    """Input for listing posts."""

    limit: int | None = None


@dataclass(frozen=True)
class RenderPostInput:
    """Input for rendering a stored post to HTML."""

    post_id: str
    link_references: bool = True


# --- Output Models ---


@dataclass(frozen=True)
class PostOutput:
    """Output containing a single post."""

    post: Post | None
    errors: list[PostValidationIssue] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class PostListOutput:
    """Output containing posts, most recently updated first."""

    posts: list[Post]
    total: int


@dataclass(frozen=True)
class PostOperationOutput:
    """Output for create, update and delete."""

    post: Post | None = None
    errors: list[PostValidationIssue] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class RenderPostOutput:
    """Rendered post body plus the references it contains."""

    post: Post | None = None
    html: str = ""
    references: list[str] = field(default_factory=list)
    missing_references: list[str] = field(default_factory=list)
    errors: list[PostValidationIssue] = field(default_factory=list)
    success: bool = True
