"""
Reader/editor view state.

Everything the front end needs to draw the post list and detail pane, held
in one immutable value. ``update`` is the only way to move between states:
it takes the current state and an event and returns a new state.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Any, Literal

from enzo_blog.domain.entities import Post

EditorMode = Literal["list", "create", "edit"]

FRAGMENT_RE = re.compile(r"^#post-(.+)$")


# --- Events ---


@dataclass(frozen=True)
class PostsLoaded:
    posts: tuple[Post, ...]
    fragment: str = ""


@dataclass(frozen=True)
class PostsLoadFailed:
    message: str


@dataclass(frozen=True)
class PostSelected:
    post_id: str


@dataclass(frozen=True)
class HashChanged:
    fragment: str


@dataclass(frozen=True)
class EditorOpened:
    post_id: str | None = None


@dataclass(frozen=True)
class EditorClosed:
    pass


@dataclass(frozen=True)
class PostSaved:
    post: Post


@dataclass(frozen=True)
class PostRemoved:
    post_id: str


ViewEvent = (
    PostsLoaded
    | PostsLoadFailed
    | PostSelected
    | HashChanged
    | EditorOpened
    | EditorClosed
    | PostSaved
    | PostRemoved
)


# --- State ---


@dataclass(frozen=True)
class ViewState:
    posts: tuple[Post, ...] = field(default_factory=tuple)
    selected_id: str | None = None
    editing_id: str | None = None
    mode: EditorMode = "list"
    is_loading: bool = True
    load_error: str | None = None

    @property
    def selected(self) -> Post | None:
        return next((p for p in self.posts if p.id == self.selected_id), None)

    @property
    def fragment(self) -> str:
        """URL fragment for the current selection."""
        return f"#post-{self.selected_id}" if self.selected_id else ""

    def sorted_posts(self) -> list[Post]:
        return sorted(self.posts, key=lambda p: p.updated_at, reverse=True)

    def to_dict(self) -> dict[str, Any]:
        return {
            "posts": [p.to_record() for p in self.posts],
            "selectedId": self.selected_id,
            "editingId": self.editing_id,
            "mode": self.mode,
            "isLoading": self.is_loading,
            "loadError": self.load_error,
        }


def _has_post(state: ViewState, post_id: str | None) -> bool:
    return post_id is not None and any(p.id == post_id for p in state.posts)


def _ensure_selection(state: ViewState) -> ViewState:
    """Keep the selection if it still exists, else fall back to the newest post."""
    if _has_post(state, state.selected_id):
        return state
    ordered = state.sorted_posts()
    return replace(state, selected_id=ordered[0].id if ordered else None)


def _fragment_id(fragment: str) -> str | None:
    match = FRAGMENT_RE.match(fragment)
    return match.group(1) if match else None


# --- Transitions ---


def update(state: ViewState, event: ViewEvent) -> ViewState:
    """Return the state that follows ``event``. Unknown ids leave selection alone."""
    if isinstance(event, PostsLoaded):
        loaded = replace(state, posts=tuple(event.posts), is_loading=False, load_error=None)
        wanted = _fragment_id(event.fragment)
        if _has_post(loaded, wanted):
            return replace(loaded, selected_id=wanted)
        return _ensure_selection(loaded)

    if isinstance(event, PostsLoadFailed):
        return replace(state, posts=(), selected_id=None, is_loading=False, load_error=event.message)

    if isinstance(event, PostSelected):
        if not _has_post(state, event.post_id):
            return state
        return replace(state, selected_id=event.post_id)

    if isinstance(event, HashChanged):
        wanted = _fragment_id(event.fragment)
        if not _has_post(state, wanted):
            return state
        return replace(state, selected_id=wanted)

    if isinstance(event, EditorOpened):
        if event.post_id is None:
            return replace(state, mode="create", editing_id=None)
        if not _has_post(state, event.post_id):
            return state
        return replace(state, mode="edit", editing_id=event.post_id)

    if isinstance(event, EditorClosed):
        return replace(state, mode="list", editing_id=None)

    if isinstance(event, PostSaved):
        others = tuple(p for p in state.posts if p.id != event.post.id)
        return replace(
            state,
            posts=others + (event.post,),
            selected_id=event.post.id,
            mode="list",
            editing_id=None,
        )

    if isinstance(event, PostRemoved):
        remaining = tuple(p for p in state.posts if p.id != event.post_id)
        editing_id = None if state.editing_id == event.post_id else state.editing_id
        mode: EditorMode = "list" if editing_id is None and state.mode == "edit" else state.mode
        return _ensure_selection(
            replace(state, posts=remaining, editing_id=editing_id, mode=mode)
        )

    raise TypeError(f"Unknown view event: {event!r}")
