"""User ORM — persists a blogger account, the root of the ownership chain.

Invariants:
    - username and email are each globally unique
    - password_hash is never serialized by any response schema
    - Deleting a user cascades to projects (and transitively posts) at the storage level

Design Decisions:
    - passive_deletes=True: the database ON DELETE CASCADE does the work, the ORM
      never loads children just to delete them
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from multiblog.db.base import Base


class User(Base):
    """User entity: owns zero or more projects."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    username: Mapped[str] = mapped_column(
        String(50), nullable=False, unique=True,
    )
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    projects: Mapped[list["Project"]] = relationship(
        "Project", back_populates="owner",
        cascade="all, delete-orphan", passive_deletes=True,
    )
