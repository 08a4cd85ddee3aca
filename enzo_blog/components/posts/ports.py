"""
Posts component port definitions.

The record store is injected so the store logic runs unchanged against the
per-file adapter, the single-blob adapter, or an in-memory fake.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from enzo_blog.domain.entities import Post


class PostRepoPort(Protocol):
    """Durable record store keyed by post id."""

    def get_by_id(self, post_id: str) -> Post | None:
        """
        Get a post by id.

        Returns None if no record exists.

        Raises:
            StorageError: If the record exists but cannot be read or parsed.
        """
        ...

    def exists(self, post_id: str) -> bool:
        """Check whether a record exists for the id."""
        ...

    def save(self, post: Post) -> Post:
        """Create or replace the record for ``post.id``. Durable on return."""
        ...

    def delete(self, post_id: str) -> bool:
        """
        Delete the record.

        Returns:
            True if deleted, False if no record existed.
        """
        ...

    def list_all(self) -> list[Post]:
        """All readable records, unordered. Unreadable records are skipped."""
        ...


class TimePort(Protocol):
    """Port for time operations."""

    def now_utc(self) -> datetime:
        """Get current UTC time."""
        ...


class StorageError(Exception):
    """Base class for record store failures."""


class CorruptRecordError(StorageError):
    """Raised when a stored record is not a valid post."""

    def __init__(self, post_id: str, reason: str) -> None:
        self.post_id = post_id
        self.reason = reason
        super().__init__(f"Stored post {post_id} is invalid: {reason}")


class InvalidPostIdError(StorageError):
    """Raised when an id is not usable as a storage key."""

    def __init__(self, post_id: str) -> None:
        self.post_id = post_id
        super().__init__(f"Invalid post id: {post_id!r}")
