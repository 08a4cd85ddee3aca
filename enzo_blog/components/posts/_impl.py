"""
PostStore - owner of the authoritative post collection.

Handles id assignment, timestamping, validation and ordering. Durability
is delegated to the injected record store; every mutation is persisted
before the call returns.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any
from uuid import uuid4

from enzo_blog.adapters.clock import SystemClock
from enzo_blog.domain.entities import (
    DEFAULT_FORMAT,
    Post,
    PostFormat,
    is_valid_post_id,
    normalize_format,
)

from .models import PostNotFoundError, PostValidationError, PostValidationIssue
from .ports import PostRepoPort, StorageError, TimePort

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "content", "format")

MAX_ID_ATTEMPTS = 5


# --- Validation Functions ---


def validate_post_fields(
    title: Any = None,
    content: Any = None,
    *,
    require_all: bool = False,
) -> list[PostValidationIssue]:
    """
    Validate title and content.

    With ``require_all`` both fields must be present; otherwise ``None``
    means "not supplied" and is not checked.
    """
    errors: list[PostValidationIssue] = []

    for name, value in (("title", title), ("content", content)):
        if value is None and not require_all:
            continue
        if value is not None and not isinstance(value, str):
            errors.append(
                PostValidationIssue(
                    code="invalid_type",
                    message=f"{name.capitalize()} must be a string",
                    field=name,
                )
            )
        elif not value or not value.strip():
            errors.append(
                PostValidationIssue(
                    code=f"{name}_required",
                    message=f"{name.capitalize()} is required",
                    field=name,
                )
            )

    return errors


def _new_post_id() -> str:
    return str(uuid4())


# --- Post Store ---


class PostStore:
    """
    Post store.

    All reads and mutations of posts go through this class.
    """

    def __init__(
        self,
        repo: PostRepoPort,
        time: TimePort | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        """Initialize store."""
        self._repo = repo
        self._time = time or SystemClock()
        self._id_factory = id_factory or _new_post_id

    def list(self) -> list[Post]:
        """All posts, most recently updated first; ties ordered by id."""
        posts = sorted(self._repo.list_all(), key=lambda p: p.id)
        posts.sort(key=lambda p: p.updated_at, reverse=True)
        return posts

    def get(self, post_id: str) -> Post:
        post = self._repo.get_by_id(post_id)
        if post is None:
            raise PostNotFoundError(post_id)
        return post

    def exists(self, post_id: str) -> bool:
        return self._repo.exists(post_id)

    def create(
        self,
        title: str,
        content: str,
        format: PostFormat | str | None = DEFAULT_FORMAT,
    ) -> Post:
        """
        Create and persist a new post.

        Raises:
            PostValidationError: If title or content is empty after trimming.
            StorageError: If the record cannot be written.
        """
        errors = validate_post_fields(title, content, require_all=True)
        if errors:
            raise PostValidationError(errors)

        now = self._time.now_utc()
        post = Post(
            id=self._allocate_id(),
            title=title.strip(),
            content=content,
            format=normalize_format(format),
            created_at=now,
            updated_at=now,
        )

        saved = self._repo.save(post)
        logger.info("Created post %s", saved.id)
        return saved

    def update(self, post_id: str, changes: Mapping[str, Any]) -> Post:
        """
        Merge caller-settable fields over the stored post and persist.

        Keys other than title, content and format are ignored, as are
        ``None`` values. An unrecognised format keeps the stored one.

        Raises:
            PostNotFoundError: If no post has this id.
            PostValidationError: If the merged title or content is empty.
            StorageError: If the record cannot be read or written.
        """
        existing = self.get(post_id)

        updates = {
            key: value
            for key, value in changes.items()
            if key in EDITABLE_FIELDS and value is not None
        }

        errors = validate_post_fields(updates.get("title"), updates.get("content"))
        if errors:
            raise PostValidationError(errors)

        title = updates["title"].strip() if "title" in updates else existing.title
        content = updates.get("content", existing.content)
        format = (
            normalize_format(updates["format"], default=existing.format)
            if "format" in updates
            else existing.format
        )

        # A clock step backwards must not put updatedAt before createdAt
        now = max(self._time.now_utc(), existing.created_at)

        updated = existing.model_copy(
            update={
                "title": title,
                "content": content,
                "format": format,
                "updated_at": now,
            }
        )

        saved = self._repo.save(updated)
        logger.info("Updated post %s", saved.id)
        return saved

    def delete(self, post_id: str) -> None:
        """
        Hard-delete a post.

        Raises:
            PostNotFoundError: If no post has this id.
            StorageError: If the record cannot be removed.
        """
        if not self._repo.delete(post_id):
            raise PostNotFoundError(post_id)
        logger.info("Deleted post %s", post_id)

    def _allocate_id(self) -> str:
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = self._id_factory()
            if is_valid_post_id(candidate) and not self._repo.exists(candidate):
                return candidate
        raise StorageError(f"Could not allocate a unique post id after {MAX_ID_ATTEMPTS} attempts")

