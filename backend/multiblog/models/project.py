"""Project ORM — persists a blog owned by exactly one user.

Invariants:
    - Always belongs to a User (owner_id FK, ON DELETE CASCADE)
    - slug is globally unique
    - Deleting a project cascades to its posts at the storage level

Design Decisions:
    - owner_id indexed: every authenticated listing filters on it
    - updated_at maintained by onupdate, never set by services
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from multiblog.db.base import Base


class Project(Base):
    """Project entity: a blog that owns posts."""
    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(
        String(120), nullable=False, unique=True,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
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
    owner: Mapped["User"] = relationship(
        "User", back_populates="projects",
    )
    posts: Mapped[list["Post"]] = relationship(
        "Post", back_populates="project",
        cascade="all, delete-orphan", passive_deletes=True,
    )
