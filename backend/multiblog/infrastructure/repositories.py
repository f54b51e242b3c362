"""SQL Repositories — SQLAlchemy implementations of core/repository_protocols.py.

Invariants:
    - Every write commits immediately; there is no unit of work spanning calls
    - Unique-constraint violations on write become the same domain errors the
      write-time checks raise (SlugConflictError, DuplicateAccountError)
    - A post write whose project vanished (foreign-key violation) and an update
      whose row vanished both surface as ResourceNotFoundError
    - "Many by id set" queries short-circuit to [] for an empty set
    - Listings are ordered newest first (created_at DESC)

Design Decisions:
    - One class per aggregate, constructed with the request's AsyncSession
    - delete() returns the affected row count: callers decide what zero means
    - update() re-reads with populate_existing so callers never see stale rows
    - get() always queries instead of session.get(): the identity map can still
      hold rows that a storage-level cascade already removed
"""

import logging
from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from multiblog.core.domain_types import UserId, ProjectId, PostId
from multiblog.core.errors import (
    DuplicateAccountError, ResourceNotFoundError, SlugConflictError,
)
from multiblog.models.post import Post
from multiblog.models.project import Project
from multiblog.models.user import User

logger = logging.getLogger(__name__)

_FOREIGN_KEY_VIOLATION = "23503"


class SqlUserRepository:
    """User persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: UserId) -> User | None:
        result = await self.db.execute(
            select(User).where(User.id == user_id),
        )
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.username == username),
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.email == email),
        )
        return result.scalar_one_or_none()

    async def create(
        self, username: str, email: str, password_hash: str,
    ) -> User:
        user = User(
            username=username, email=email, password_hash=password_hash,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning(f"Registration race on username={username!r}")
            raise DuplicateAccountError(
                "username", "Username or email is already registered",
            )
        await self.db.refresh(user)
        return user


class SqlProjectRepository:
    """Project persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, project_id: ProjectId) -> Project | None:
        result = await self.db.execute(
            select(Project).where(Project.id == project_id),
        )
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Project | None:
        result = await self.db.execute(
            select(Project).where(Project.slug == slug),
        )
        return result.scalar_one_or_none()

    async def list_by_owner(self, owner_id: UserId) -> list[Project]:
        result = await self.db.execute(
            select(Project)
            .where(Project.owner_id == owner_id)
            .order_by(Project.created_at.desc()),
        )
        return list(result.scalars().all())

    async def list_ids_by_owner(self, owner_id: UserId) -> list[ProjectId]:
        result = await self.db.execute(
            select(Project.id).where(Project.owner_id == owner_id),
        )
        return list(result.scalars().all())

    async def count_posts(
        self, project_ids: list[ProjectId],
    ) -> dict[ProjectId, int]:
        """Post count per project; projects without posts are absent from the dict."""
        if not project_ids:
            return {}
        result = await self.db.execute(
            select(Post.project_id, func.count(Post.id))
            .where(Post.project_id.in_(project_ids))
            .group_by(Post.project_id),
        )
        return {project_id: count for project_id, count in result.all()}

    async def create(
        self, owner_id: UserId, name: str, slug: str,
    ) -> Project:
        project = Project(owner_id=owner_id, name=name, slug=slug)
        self.db.add(project)
        await self._commit_or_conflict(slug)
        await self.db.refresh(project)
        return project

    async def update(
        self, project_id: ProjectId, fields: dict[str, Any],
    ) -> Project:
        """Apply fields and re-read; NotFound when the row is already gone."""
        if fields:
            await self._commit_or_conflict(
                fields.get("slug", ""),
                update(Project).where(Project.id == project_id).values(**fields),
            )
        result = await self.db.execute(
            select(Project)
            .where(Project.id == project_id)
            .execution_options(populate_existing=True),
        )
        project = result.scalar_one_or_none()
        if project is None:
            raise ResourceNotFoundError("Project", str(project_id))
        return project

    async def delete(self, project_id: ProjectId) -> int:
        result = await self.db.execute(
            delete(Project).where(Project.id == project_id),
        )
        await self.db.commit()
        return result.rowcount

    async def _commit_or_conflict(self, slug: str, statement=None) -> None:
        try:
            if statement is not None:
                await self.db.execute(statement)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning(f"Project slug constraint hit for slug={slug!r}")
            raise SlugConflictError("Project", slug)


class SqlPostRepository:
    """Post persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, post_id: PostId) -> Post | None:
        result = await self.db.execute(
            select(Post).where(Post.id == post_id),
        )
        return result.scalar_one_or_none()

    async def get_by_scope_and_slug(
        self, project_id: ProjectId, slug: str,
    ) -> Post | None:
        result = await self.db.execute(
            select(Post)
            .where(Post.project_id == project_id)
            .where(Post.slug == slug),
        )
        return result.scalar_one_or_none()

    async def find_by_slug_in_projects(
        self, project_ids: list[ProjectId], slug: str,
    ) -> Post | None:
        """Newest post with this slug across the given projects."""
        if not project_ids:
            return None
        result = await self.db.execute(
            select(Post)
            .where(Post.project_id.in_(project_ids))
            .where(Post.slug == slug)
            .order_by(Post.created_at.desc())
            .limit(1),
        )
        return result.scalar_one_or_none()

    async def list_by_projects(
        self, project_ids: list[ProjectId],
    ) -> list[Post]:
        if not project_ids:
            return []
        result = await self.db.execute(
            select(Post)
            .where(Post.project_id.in_(project_ids))
            .order_by(Post.created_at.desc()),
        )
        return list(result.scalars().all())

    async def create(self, fields: dict[str, Any]) -> Post:
        post = Post(**fields)
        self.db.add(post)
        await self._commit_or_conflict(fields["slug"], fields["project_id"])
        await self.db.refresh(post)
        return post

    async def update(self, post_id: PostId, fields: dict[str, Any]) -> Post:
        """Apply fields and re-read; NotFound when the row is already gone."""
        if fields:
            await self._commit_or_conflict(
                fields.get("slug", ""),
                fields.get("project_id"),
                update(Post).where(Post.id == post_id).values(**fields),
            )
        result = await self.db.execute(
            select(Post)
            .where(Post.id == post_id)
            .execution_options(populate_existing=True),
        )
        post = result.scalar_one_or_none()
        if post is None:
            raise ResourceNotFoundError("Post", str(post_id))
        return post

    async def delete(self, post_id: PostId) -> int:
        result = await self.db.execute(
            delete(Post).where(Post.id == post_id),
        )
        await self.db.commit()
        return result.rowcount

    async def _commit_or_conflict(
        self, slug: str, project_id: ProjectId | None, statement=None,
    ) -> None:
        try:
            if statement is not None:
                await self.db.execute(statement)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if _is_foreign_key_violation(e):
                # Target project deleted after the ownership check
                logger.warning(f"Post write lost its project {project_id}")
                raise ResourceNotFoundError("Project", str(project_id))
            logger.warning(f"Post slug constraint hit for slug={slug!r}")
            raise SlugConflictError("Post", slug)


def _is_foreign_key_violation(exc: IntegrityError) -> bool:
    """23503 on PostgreSQL; SQLite only reports it in the message."""
    orig = exc.orig
    if getattr(orig, "sqlstate", None) == _FOREIGN_KEY_VIOLATION:
        return True
    if getattr(orig, "pgcode", None) == _FOREIGN_KEY_VIOLATION:
        return True
    return "foreign key" in str(orig).lower()
