"""
Posts component - post lifecycle, storage ports and rendering.
"""

from ._impl import EDITABLE_FIELDS, PostStore, validate_post_fields
from .component import (
    render_post_body,
    run_create,
    run_delete,
    run_get,
    run_list,
    run_render,
    run_update,
)
from .models import (
    CreatePostInput,
    DeletePostInput,
    GetPostInput,
    ListPostsInput,
    PostListOutput,
    PostNotFoundError,
    PostOperationOutput,
    PostOutput,
    PostValidationError,
    PostValidationIssue,
    RenderPostInput,
    RenderPostOutput,
    UpdatePostInput,
)
from .ports import (
    CorruptRecordError,
    InvalidPostIdError,
    PostRepoPort,
    StorageError,
    TimePort,
)

__all__ = [
    # Entry points
    "run_create",
    "run_delete",
    "run_get",
    "run_list",
    "run_render",
    "run_update",
    "render_post_body",
    # Input models
    "CreatePostInput",
    "DeletePostInput",
    "GetPostInput",
    "ListPostsInput",
    "RenderPostInput",
    "UpdatePostInput",
    # Output models
    "PostListOutput",
    "PostOperationOutput",
    "PostOutput",
    "RenderPostOutput",
    # Errors
    "CorruptRecordError",
    "InvalidPostIdError",
    "PostNotFoundError",
    "PostValidationError",
    "PostValidationIssue",
    "StorageError",
    # Ports
    "PostRepoPort",
    "TimePort",
    # Store
    "EDITABLE_FIELDS",
    "PostStore",
    "validate_post_fields",
]
