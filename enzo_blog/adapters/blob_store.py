"""
Single-blob record store.

All posts live in one JSON array (``posts.json`` by default), mirroring a
client-side persisted store. The blob is loaded once and cached; every
mutation rewrites the whole blob through a temp file and ``os.replace``
while holding a lock, so a failed write leaves both the file and the cache
as they were.

Loading is forgiving:
- a missing blob is an empty collection
- an unparseable blob is moved aside to ``<name>.corrupt`` and treated as
  empty, so the next write cannot silently destroy it
- records that cannot be normalised into a post are hidden from reads but
  written back unchanged, so no write drops data the store did not understand
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from enzo_blog.components.posts.ports import InvalidPostIdError, StorageError
from enzo_blog.domain.entities import Post, is_valid_post_id

logger = logging.getLogger(__name__)

CORRUPT_SUFFIX = ".corrupt"


def split_records(
    records: list[Any], now: datetime | None = None
) -> tuple[list[Post], list[Any]]:
    """
    Turn raw blob entries into posts.

    Missing (or null) ids become the 1-based position, missing titles
    ``post-N``, missing timestamps the load time. Entries that still fail
    validation, or repeat an earlier id, are returned untouched as the
    second element so they can be written back.
    """
    timestamp = now or datetime.now(UTC)
    posts: dict[str, Post] = {}
    skipped: list[Any] = []

    for index, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning("Skipping blob entry %d: not an object", index)
            skipped.append(record)
            continue

        data = dict(record)
        if data.get("id") is None:
            data["id"] = str(index + 1)
        elif isinstance(data["id"], int):
            data["id"] = str(data["id"])
        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            data["title"] = f"post-{index + 1}"
        if data.get("createdAt") is None:
            data["createdAt"] = timestamp
        if data.get("updatedAt") is None:
            data["updatedAt"] = data["createdAt"]

        try:
            post = Post.model_validate(data)
        except ValidationError as e:
            logger.warning("Skipping blob entry %d: %s", index, e)
            skipped.append(record)
            continue

        if not is_valid_post_id(post.id) or not post.content.strip():
            logger.warning("Skipping blob entry %d: invalid id or empty content", index)
            skipped.append(record)
            continue
        if post.id in posts:
            logger.warning("Skipping blob entry %d: duplicate id %s", index, post.id)
            skipped.append(record)
            continue
        posts[post.id] = post

    return list(posts.values()), skipped


def normalize_records(records: list[Any], now: datetime | None = None) -> list[Post]:
    """Usable posts from raw blob entries; see ``split_records``."""
    return split_records(records, now)[0]


class BlobPostRepo:
    """Single-file JSON array implementation of PostRepoPort."""

    def __init__(self, path: str | Path, *, create_dirs: bool = True) -> None:
        self.path = Path(path).resolve()
        self._lock = threading.Lock()
        self._cache: dict[str, Post] | None = None
        self._skipped: list[Any] = []

        if create_dirs:
            self.path.parent.mkdir(parents=True, exist_ok=True)

    # --- Loading ---

    def _load(self) -> dict[str, Post]:
        """Return the cached collection, reading the blob on first use."""
        if self._cache is not None:
            return self._cache

        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self._cache = {}
            self._skipped = []
            return self._cache
        except OSError as e:
            raise StorageError(f"Unable to read post blob {self.path}: {e}") from e

        try:
            parsed = json.loads(raw) if raw.strip() else []
        except json.JSONDecodeError as e:
            self._quarantine(f"invalid JSON ({e})")
            parsed = []

        if not isinstance(parsed, list):
            self._quarantine("top-level value is not an array")
            parsed = []

        posts, self._skipped = split_records(parsed)
        self._cache = {p.id: p for p in posts}
        return self._cache

    def _quarantine(self, reason: str) -> None:
        backup = self.path.with_name(self.path.name + CORRUPT_SUFFIX)
        logger.warning(
            "Unable to read posts from %s (%s); moved to %s and starting empty",
            self.path,
            reason,
            backup,
        )
        try:
            os.replace(self.path, backup)
        except OSError as e:
            raise StorageError(f"Unable to move aside corrupt blob {self.path}: {e}") from e

    # --- Writing ---

    def _write(self, posts: dict[str, Post]) -> None:
        records = [p.to_record() for p in posts.values()] + self._skipped
        payload = json.dumps(records, indent=4, ensure_ascii=False) + "\n"

        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Unable to write post blob {self.path}: {e}") from e

    # --- Port ---

    def get_by_id(self, post_id: str) -> Post | None:
        with self._lock:
            post = self._load().get(post_id)
        return post.model_copy() if post else None

    def exists(self, post_id: str) -> bool:
        with self._lock:
            return post_id in self._load()

    def save(self, post: Post) -> Post:
        if not is_valid_post_id(post.id):
            raise InvalidPostIdError(post.id)
        with self._lock:
            current = self._load()
            updated = {**current, post.id: post.model_copy()}
            self._write(updated)
            self._cache = updated
        return post

    def delete(self, post_id: str) -> bool:
        with self._lock:
            current = self._load()
            if post_id not in current:
                return False
            updated = {k: v for k, v in current.items() if k != post_id}
            self._write(updated)
            self._cache = updated
        return True

    def list_all(self) -> list[Post]:
        with self._lock:
            return [p.model_copy() for p in self._load().values()]

    def reload(self) -> None:
        """Drop the cache so the next access re-reads the blob."""
        with self._lock:
            self._cache = None
            self._skipped = []
