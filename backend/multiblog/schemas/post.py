"""Post Schemas — create/update payloads and owner-facing responses.

Invariants:
    - PostCreate.title: 1-255 chars, stripped, non-empty
    - slug optional: derived from title when omitted
    - tags keep submission order
    - PostUpdate: only fields actually sent are applied (exclude_unset);
      a sent title is stripped like on create
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PostCreate(BaseModel):
    """Post creation under an owned project."""
    title: str = Field(min_length=1, max_length=255)
    slug: str | None = Field(None, min_length=1, max_length=255)
    content: str = Field(min_length=1)
    image: str | None = Field(None, max_length=2000)
    tags: list[str] | None = None
    project_id: UUID

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v


class PostUpdate(BaseModel):
    """Partial post update; project_id moves the post to another owned project."""
    title: str | None = Field(None, min_length=1, max_length=255)
    slug: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = Field(None, min_length=1)
    image: str | None = Field(None, max_length=2000)
    tags: list[str] | None = None
    project_id: UUID | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v


class PostResponse(BaseModel):
    """Post as seen by its owner."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    slug: str
    content: str
    image: str | None = None
    tags: list[str] | None = None
    project_id: UUID
    created_at: datetime
    updated_at: datetime
