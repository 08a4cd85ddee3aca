import re
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# --- Enums / Literals ---
PostFormat = Literal["markdown", "html"]

POST_FORMATS: tuple[PostFormat, ...] = ("markdown", "html")
DEFAULT_FORMAT: PostFormat = "markdown"

POST_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def normalize_format(value: Any, default: PostFormat = DEFAULT_FORMAT) -> PostFormat:
    """Map any client-supplied value onto a known format."""
    if value in POST_FORMATS:
        return value
    return default


def is_valid_post_id(value: str) -> bool:
    return bool(POST_ID_PATTERN.match(value))


def utc_now() -> datetime:
    return datetime.now(UTC)


# --- Posts ---

class Post(BaseModel):
    """A blog post as stored and served.

    Attribute names are snake_case; serialized names match the wire format
    (``createdAt``/``updatedAt``) via aliases.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    content: str
    format: PostFormat = DEFAULT_FORMAT
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")
    updated_at: datetime = Field(default_factory=utc_now, alias="updatedAt")

    @field_validator("format", mode="before")
    @classmethod
    def _normalize_format(cls, value: Any) -> PostFormat:
        return normalize_format(value)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Naive timestamps from older records are treated as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    def to_record(self) -> dict[str, Any]:
        """JSON-ready dict using wire field names."""
        return self.model_dump(mode="json", by_alias=True)
