"""Public Schemas — read-only projections for anonymous readers.

Invariants:
    - No owner identity, no project foreign key, no password material
    - A missing blogger and a blogger without posts serialize identically
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class PublicPost(BaseModel):
    """Public-safe post fields; project_slug kept for front-end routing."""
    id: UUID
    title: str
    slug: str
    content: str
    image: str | None = None
    tags: list[str] | None = None
    created_at: datetime
    project_slug: str


class PublicProject(BaseModel):
    id: UUID
    name: str
    slug: str


class PublicPostList(BaseModel):
    username: str
    posts: list[PublicPost]
    count: int


class PublicPostDetail(BaseModel):
    username: str
    project: PublicProject
    post: PublicPost
