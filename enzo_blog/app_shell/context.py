from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from enzo_blog.adapters.blob_store import BlobPostRepo
from enzo_blog.adapters.clock import SystemClock
from enzo_blog.adapters.fs.post_store import FilePostRepo
from enzo_blog.components.posts import PostRepoPort, PostStore, TimePort
from enzo_blog.rules.models import Rules


def build_post_repo(rules: Rules, data_dir: str | Path | None = None) -> PostRepoPort:
    """Pick the record store named by ``storage.backend``."""
    storage = rules.storage
    root = Path(data_dir or storage.data_dir)

    if storage.backend == "blob":
        return BlobPostRepo(root / storage.blob_file)
    return FilePostRepo(root / storage.posts_dir)


@dataclass
class BlogContext:
    post_store: PostStore
    post_repo: PostRepoPort
    rules: Rules

    @classmethod
    def create(
        cls,
        rules: Rules,
        data_dir: str | Path | None = None,
        clock: TimePort | None = None,
    ) -> BlogContext:
        repo = build_post_repo(rules, data_dir)
        store = PostStore(repo=repo, time=clock or SystemClock())
        return cls(post_store=store, post_repo=repo, rules=rules)
