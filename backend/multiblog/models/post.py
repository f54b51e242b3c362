"""Post ORM — persists an article published under a project.

Invariants:
    - Always belongs to a Project (project_id FK, ON DELETE CASCADE)
    - (project_id, slug) is unique: the storage-level backstop for the
      slug allocator's write-time check
    - tags keep their submitted order

Design Decisions:
    - JSON column for tags: ordered list without a join table
    - No owner column: ownership is always resolved through the project
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    String, Text, DateTime, JSON, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from multiblog.db.base import Base


class Post(Base):
    """Post entity: slug unique within its project."""
    __tablename__ = "posts"
    __table_args__ = (
        UniqueConstraint("project_id", "slug", name="uq_posts_project_slug"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    tags: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    project_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    project: Mapped["Project"] = relationship(
        "Project", back_populates="posts",
    )
