from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from enzo_blog.domain.entities import PostFormat


# --- Posts ---
class PostCreateRequest(BaseModel):
    # Loosely typed: the service layer owns validation and defaulting
    title: Any = None
    content: Any = None
    format: Any = None


class PostUpdateRequest(BaseModel):
    title: Any = None
    content: Any = None
    format: Any = None


class PostResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    title: str
    content: str
    format: PostFormat
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class RenderedPostResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    format: PostFormat
    html: str
    references: list[str] = []
    missing_references: list[str] = Field(default_factory=list, alias="missingReferences")
