import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from enzo_blog.api.deps import get_post_store, get_rules
from enzo_blog.api.schemas import (
    PostCreateRequest,
    PostResponse,
    PostUpdateRequest,
    RenderedPostResponse,
)
from enzo_blog.components.posts import (
    CreatePostInput,
    DeletePostInput,
    GetPostInput,
    ListPostsInput,
    PostStore,
    PostValidationIssue,
    RenderPostInput,
    UpdatePostInput,
    run_create,
    run_delete,
    run_get,
    run_list,
    run_render,
    run_update,
)
from enzo_blog.domain.entities import is_valid_post_id
from enzo_blog.rules.models import Rules

logger = logging.getLogger(__name__)

router = APIRouter()


async def enforce_body_limit(request: Request, rules: Rules = Depends(get_rules)) -> None:
    """Reject request bodies larger than ``api.max_body_bytes``."""
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > rules.api.max_body_bytes:
        raise HTTPException(status_code=413, detail="Payload too large.")
    body = await request.body()
    if len(body) > rules.api.max_body_bytes:
        raise HTTPException(status_code=413, detail="Payload too large.")


def _clean_id(post_id: str) -> str:
    trimmed = post_id.strip()
    if not trimmed or not is_valid_post_id(trimmed):
        raise HTTPException(status_code=400, detail="Invalid post id.")
    return trimmed


def _raise_for_errors(errors: list[PostValidationIssue]) -> None:
    if any(e.code == "post_not_found" for e in errors):
        raise HTTPException(status_code=404, detail="Post not found.")
    raise HTTPException(status_code=400, detail=" ".join(e.message + "." for e in errors))


def _body(post: Any) -> dict[str, Any]:
    return post.to_record()


@router.get("", response_model=list[PostResponse])
def list_posts(store: PostStore = Depends(get_post_store)) -> list[dict[str, Any]]:
    """List all posts, most recently updated first."""
    result = run_list(ListPostsInput(), store)
    return [_body(p) for p in result.posts]


@router.post(
    "",
    response_model=PostResponse,
    status_code=201,
    dependencies=[Depends(enforce_body_limit)],
)
def create_post(
    req: PostCreateRequest | None = None,
    store: PostStore = Depends(get_post_store),
) -> dict[str, Any]:
    """Create a post."""
    req = req or PostCreateRequest()
    inp = CreatePostInput(title=req.title, content=req.content, format=req.format)
    result = run_create(inp, store)

    if not result.success or result.post is None:
        _raise_for_errors(result.errors)

    return _body(result.post)


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: str, store: PostStore = Depends(get_post_store)) -> dict[str, Any]:
    """Get a single post."""
    result = run_get(GetPostInput(post_id=_clean_id(post_id)), store)

    if not result.success or result.post is None:
        _raise_for_errors(result.errors)

    return _body(result.post)


@router.get("/{post_id}/rendered", response_model=RenderedPostResponse)
def get_rendered_post(
    post_id: str,
    store: PostStore = Depends(get_post_store),
    rules: Rules = Depends(get_rules),
) -> dict[str, Any]:
    """Render a post body to HTML with reference links."""
    inp = RenderPostInput(
        post_id=_clean_id(post_id),
        link_references=rules.render.link_references,
    )
    result = run_render(inp, store)

    if not result.success or result.post is None:
        _raise_for_errors(result.errors)

    return {
        "id": result.post.id,
        "title": result.post.title,
        "format": result.post.format,
        "html": result.html,
        "references": result.references,
        "missingReferences": result.missing_references,
    }


@router.put(
    "/{post_id}",
    response_model=PostResponse,
    dependencies=[Depends(enforce_body_limit)],
)
def update_post(
    post_id: str,
    req: PostUpdateRequest | None = None,
    store: PostStore = Depends(get_post_store),
) -> dict[str, Any]:
    """Update title, content and/or format of a post."""
    req = req or PostUpdateRequest()
    inp = UpdatePostInput(
        post_id=_clean_id(post_id),
        title=req.title,
        content=req.content,
        format=req.format,
    )
    result = run_update(inp, store)

    if not result.success or result.post is None:
        _raise_for_errors(result.errors)

    return _body(result.post)


@router.delete("/{post_id}", status_code=204)
def delete_post(post_id: str, store: PostStore = Depends(get_post_store)) -> Response:
    """Delete a post."""
    result = run_delete(DeletePostInput(post_id=_clean_id(post_id)), store)

    if not result.success:
        _raise_for_errors(result.errors)

    return Response(status_code=204)
