"""Boundary Protocols — contracts between core services and the shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via constructor injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Entity protocols (UserLike, ProjectLike, PostLike) give services real
      type information without importing the ORM models
    - Credential and token collaborators are protocols too: services never
      touch passlib or jose directly
"""

from datetime import datetime, timedelta
from typing import Any, Protocol

from multiblog.core.domain_types import UserId, ProjectId, PostId


class UserLike(Protocol):
    """Structural contract for User rows."""
    id: UserId
    username: str
    email: str
    password_hash: str
    created_at: datetime


class ProjectLike(Protocol):
    """Structural contract for Project rows."""
    id: ProjectId
    name: str
    slug: str
    owner_id: UserId
    created_at: datetime
    updated_at: datetime


class PostLike(Protocol):
    """Structural contract for Post rows."""
    id: PostId
    title: str
    slug: str
    content: str
    image: str | None
    tags: list[str] | None
    project_id: ProjectId
    created_at: datetime
    updated_at: datetime


class UserRepository(Protocol):
    """Contract for user persistence, implemented by shell."""
    async def get(self, user_id: UserId) -> UserLike | None: ...
    async def get_by_username(self, username: str) -> UserLike | None: ...
    async def get_by_email(self, email: str) -> UserLike | None: ...
    async def create(
        self, username: str, email: str, password_hash: str,
    ) -> UserLike: ...


class ProjectRepository(Protocol):
    """Contract for project persistence, implemented by shell."""
    async def get(self, project_id: ProjectId) -> ProjectLike | None: ...
    async def get_by_slug(self, slug: str) -> ProjectLike | None: ...
    async def list_by_owner(self, owner_id: UserId) -> list[ProjectLike]: ...
    async def list_ids_by_owner(self, owner_id: UserId) -> list[ProjectId]: ...
    async def count_posts(
        self, project_ids: list[ProjectId],
    ) -> dict[ProjectId, int]: ...
    async def create(
        self, owner_id: UserId, name: str, slug: str,
    ) -> ProjectLike: ...
    async def update(
        self, project_id: ProjectId, fields: dict[str, Any],
    ) -> ProjectLike: ...
    async def delete(self, project_id: ProjectId) -> int: ...


class PostRepository(Protocol):
    """Contract for post persistence, implemented by shell."""
    async def get(self, post_id: PostId) -> PostLike | None: ...
    async def get_by_scope_and_slug(
        self, project_id: ProjectId, slug: str,
    ) -> PostLike | None: ...
    async def find_by_slug_in_projects(
        self, project_ids: list[ProjectId], slug: str,
    ) -> PostLike | None: ...
    async def list_by_projects(
        self, project_ids: list[ProjectId],
    ) -> list[PostLike]: ...
    async def create(self, fields: dict[str, Any]) -> PostLike: ...
    async def update(self, post_id: PostId, fields: dict[str, Any]) -> PostLike: ...
    async def delete(self, post_id: PostId) -> int: ...


class CredentialStore(Protocol):
    """Password hashing contract, implemented by infrastructure/security.py."""
    def hash(self, plaintext: str) -> str: ...
    def verify(self, plaintext: str, digest: str) -> bool: ...


class TokenService(Protocol):
    """Bearer token contract: verify() raises AuthenticationError."""
    def sign(self, claims: dict[str, Any], ttl: timedelta | None = None) -> str: ...
    def verify(self, token: str) -> dict[str, Any]: ...
