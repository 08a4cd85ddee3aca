import logging
import os
import threading
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from enzo_blog.app_shell.context import BlogContext
from enzo_blog.components.posts import PostStore
from enzo_blog.rules.loader import load_rules
from enzo_blog.rules.models import Rules

logger = logging.getLogger(__name__)


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.rules_path = Path(os.environ.get("BLOG_RULES_PATH", self.base_dir / "rules.yaml"))
        # Overrides storage.data_dir from the rules file when set
        self.data_dir: str | None = os.environ.get("BLOG_DATA_DIR")


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def _rules_for(rules_path: Path) -> Rules:
    if not rules_path.exists():
        logger.warning("Rules file %s not found; using defaults", rules_path)
        return Rules()
    return load_rules(rules_path)


def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return _rules_for(settings.rules_path)


# --- Context ---
# One context per (rules, data dir) so every request shares the same
# record store instance and its lock.
_contexts: dict[tuple[int, str | None], BlogContext] = {}
_contexts_lock = threading.Lock()


def get_context(
    settings: Settings = Depends(get_settings),
    rules: Rules = Depends(get_rules),
) -> BlogContext:
    key = (id(rules), settings.data_dir)
    with _contexts_lock:
        ctx = _contexts.get(key)
        if ctx is None:
            ctx = BlogContext.create(rules, data_dir=settings.data_dir)
            _contexts[key] = ctx
    return ctx


def get_post_store(ctx: BlogContext = Depends(get_context)) -> PostStore:
    return ctx.post_store
