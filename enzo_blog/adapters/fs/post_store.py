"""
Per-record file store.

One indented JSON file per post: ``{base_path}/{id}.json``. Writes go to a
temp file in the same directory and are moved into place with
``os.replace`` so readers never see a partially written record. A failure
writing one record leaves every other file untouched.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from enzo_blog.components.posts.ports import (
    CorruptRecordError,
    InvalidPostIdError,
    StorageError,
)
from enzo_blog.domain.entities import Post, is_valid_post_id

logger = logging.getLogger(__name__)

RECORD_SUFFIX = ".json"
TEMP_SUFFIX = ".tmp"


class FilePostRepo:
    """File-per-post implementation of PostRepoPort."""

    def __init__(self, base_path: str | Path, *, create_dirs: bool = True) -> None:
        self.base_path = Path(base_path).resolve()
        if create_dirs:
            self.base_path.mkdir(parents=True, exist_ok=True)

    def _record_path(self, post_id: str) -> Path:
        # Ids are restricted to [A-Za-z0-9_-], which also rules out traversal
        if not is_valid_post_id(post_id):
            raise InvalidPostIdError(post_id)
        return self.base_path / f"{post_id}{RECORD_SUFFIX}"

    def get_by_id(self, post_id: str) -> Post | None:
        if not is_valid_post_id(post_id):
            return None
        path = self._record_path(post_id)

        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Unable to read post {post_id}: {e}") from e

        return self._parse(post_id, raw)

    def exists(self, post_id: str) -> bool:
        if not is_valid_post_id(post_id):
            return False
        return self._record_path(post_id).is_file()

    def save(self, post: Post) -> Post:
        target = self._record_path(post.id)
        payload = json.dumps(post.to_record(), indent=4, ensure_ascii=False) + "\n"

        fd, tmp_name = tempfile.mkstemp(
            dir=self.base_path, prefix=f".{post.id}.", suffix=TEMP_SUFFIX
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, target)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Unable to write post {post.id}: {e}") from e

        return post

    def delete(self, post_id: str) -> bool:
        if not is_valid_post_id(post_id):
            return False
        try:
            self._record_path(post_id).unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Unable to delete post {post_id}: {e}") from e
        return True

    def list_all(self) -> list[Post]:
        try:
            entries = sorted(self.base_path.iterdir())
        except OSError as e:
            raise StorageError(f"Unable to list posts in {self.base_path}: {e}") from e

        posts: list[Post] = []
        for entry in entries:
            if entry.name.startswith(".") or entry.suffix != RECORD_SUFFIX:
                continue
            post_id = entry.stem
            if not is_valid_post_id(post_id) or not entry.is_file():
                continue
            try:
                post = self.get_by_id(post_id)
            except StorageError as e:
                logger.warning("Unable to read post %s: %s", entry.name, e)
                continue
            # Deleted between listing and reading
            if post is not None:
                posts.append(post)
        return posts

    def _parse(self, post_id: str, raw: str) -> Post:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptRecordError(post_id, f"invalid JSON ({e})") from e

        if not isinstance(data, dict):
            raise CorruptRecordError(post_id, "record is not a JSON object")

        # The file name is the record's identity
        data["id"] = post_id
        try:
            return Post.model_validate(data)
        except ValidationError as e:
            raise CorruptRecordError(post_id, str(e)) from e
