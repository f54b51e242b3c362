"""Request Dependencies — per-request service wiring and bearer authentication.

Invariants:
    - Services are constructed per request around the request's AsyncSession
    - get_current_user raises AuthenticationError (401) for a missing, invalid,
      or orphaned token, never a bare HTTPException
    - Hasher and token service are process-wide (cached), built from settings

Design Decisions:
    - Explicit factories over a DI container: every collaborator visible here
    - HTTPBearer(auto_error=False): missing credentials go through the same
      error envelope as bad ones
"""

from datetime import timedelta
from functools import lru_cache

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from multiblog.config import get_settings
from multiblog.core.errors import AuthenticationError
from multiblog.infrastructure.database import get_db
from multiblog.infrastructure.repositories import (
    SqlPostRepository, SqlProjectRepository, SqlUserRepository,
)
from multiblog.infrastructure.security import JWTTokenService, PasswordHasher
from multiblog.models.user import User
from multiblog.services.auth_service import AuthService
from multiblog.services.ownership import OwnershipResolver
from multiblog.services.post_lifecycle import PostLifecycle
from multiblog.services.project_lifecycle import ProjectLifecycle
from multiblog.services.public_resolver import PublicResolver
from multiblog.services.slug_allocator import SlugAllocator

_bearer = HTTPBearer(auto_error=False)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(get_settings().password_hash_scheme)


@lru_cache
def get_token_service() -> JWTTokenService:
    settings = get_settings()
    return JWTTokenService(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        default_ttl=timedelta(seconds=settings.jwt_expiration_seconds),
    )


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(
        SqlUserRepository(db), get_password_hasher(), get_token_service(),
    )


def get_post_lifecycle(db: AsyncSession = Depends(get_db)) -> PostLifecycle:
    posts = SqlPostRepository(db)
    projects = SqlProjectRepository(db)
    return PostLifecycle(
        posts, projects,
        OwnershipResolver(projects, posts),
        SlugAllocator(posts, projects),
    )


def get_project_lifecycle(db: AsyncSession = Depends(get_db)) -> ProjectLifecycle:
    posts = SqlPostRepository(db)
    projects = SqlProjectRepository(db)
    return ProjectLifecycle(
        projects,
        OwnershipResolver(projects, posts),
        SlugAllocator(posts, projects),
    )


def get_public_resolver(db: AsyncSession = Depends(get_db)) -> PublicResolver:
    return PublicResolver(
        SqlUserRepository(db), SqlProjectRepository(db), SqlPostRepository(db),
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """Resolve the bearer token to a User row or fail 401."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Not authenticated")
    return await auth.resolve_user(credentials.credentials)
