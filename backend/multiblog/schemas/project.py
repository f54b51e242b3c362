"""Project Schemas — create/update payloads and responses.

Invariants:
    - name: 3-100 chars after stripping, on create and on update
    - slug optional on create: derived from name when omitted
    - ProjectUpdate fields are all optional; unset fields are left untouched
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectCreate(BaseModel):
    """Project creation; slug derived from name if omitted."""
    name: str = Field(min_length=3, max_length=100)
    slug: str | None = Field(None, min_length=3, max_length=120)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("name must be at least 3 characters after trimming")
        return v


class ProjectUpdate(BaseModel):
    """Partial project update."""
    name: str | None = Field(None, min_length=3, max_length=100)
    slug: str | None = Field(None, min_length=3, max_length=120)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if len(v) < 3:
            raise ValueError("name must be at least 3 characters after trimming")
        return v


class ProjectResponse(BaseModel):
    """Project as seen by its owner."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    slug: str
    owner_id: UUID
    created_at: datetime
    updated_at: datetime
    post_count: int | None = None


class ProjectRemoved(BaseModel):
    message: str
    removed_id: UUID
