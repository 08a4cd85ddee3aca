"""
In-memory record store.

Dict-backed implementation of PostRepoPort for tests and throwaway
instances. Nothing survives the process.
"""

from __future__ import annotations

import threading

from enzo_blog.domain.entities import Post


class InMemoryPostRepo:
    """In-memory post repository."""

    def __init__(self, posts: list[Post] | None = None) -> None:
        self._lock = threading.Lock()
        self._posts: dict[str, Post] = {p.id: p for p in posts or []}

    def get_by_id(self, post_id: str) -> Post | None:
        with self._lock:
            post = self._posts.get(post_id)
        return post.model_copy() if post else None

    def exists(self, post_id: str) -> bool:
        with self._lock:
            return post_id in self._posts

    def save(self, post: Post) -> Post:
        with self._lock:
            self._posts[post.id] = post.model_copy()
        return post

    def delete(self, post_id: str) -> bool:
        with self._lock:
            return self._posts.pop(post_id, None) is not None

    def list_all(self) -> list[Post]:
        with self._lock:
            return [p.model_copy() for p in self._posts.values()]
