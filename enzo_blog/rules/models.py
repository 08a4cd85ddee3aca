from typing import Literal

from pydantic import BaseModel, Field

StorageBackend = Literal["files", "blob"]


class StorageRules(BaseModel):
    backend: StorageBackend = "files"
    data_dir: str = "./data"
    posts_dir: str = "posts"
    blob_file: str = "posts.json"


class ApiRules(BaseModel):
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    max_body_bytes: int = Field(default=1_000_000, gt=0)


class RenderRules(BaseModel):
    link_references: bool = True


class Rules(BaseModel):
    storage: StorageRules = Field(default_factory=StorageRules)
    api: ApiRules = Field(default_factory=ApiRules)
    render: RenderRules = Field(default_factory=RenderRules)
