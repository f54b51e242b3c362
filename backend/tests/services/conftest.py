"""Service test fixtures — async DB, repositories, services, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys ON
    - get_db dependency overridden to use the test DB
    - Services built exactly like api/dependencies.py builds them

Design Decisions:
    - SQLite in-memory: fast, no external dependency; FK pragma keeps the
      ON DELETE CASCADE behaviour PostgreSQL gives in production
    - Users seeded with a fixed hash: password hashing is covered separately
      in test_auth_service.py and would only slow these tests down
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from multiblog.api.dependencies import get_token_service
from multiblog.db.base import Base
from multiblog.infrastructure.database import enable_sqlite_foreign_keys, get_db
from multiblog.infrastructure.repositories import (
    SqlPostRepository, SqlProjectRepository, SqlUserRepository,
)
from multiblog.main import app
from multiblog.schemas.post import PostCreate
from multiblog.schemas.project import ProjectCreate
from multiblog.services.ownership import OwnershipResolver
from multiblog.services.post_lifecycle import PostLifecycle
from multiblog.services.project_lifecycle import ProjectLifecycle
from multiblog.services.public_resolver import PublicResolver
from multiblog.services.slug_allocator import SlugAllocator


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


# ─── Repositories & services ────────────────────────────────────

@pytest.fixture
def users_repo(test_db):
    return SqlUserRepository(test_db)


@pytest.fixture
def projects_repo(test_db):
    return SqlProjectRepository(test_db)


@pytest.fixture
def posts_repo(test_db):
    return SqlPostRepository(test_db)


@pytest.fixture
def ownership(projects_repo, posts_repo):
    return OwnershipResolver(projects_repo, posts_repo)


@pytest.fixture
def slugs(posts_repo, projects_repo):
    return SlugAllocator(posts_repo, projects_repo)


@pytest.fixture
def post_lifecycle(posts_repo, projects_repo, ownership, slugs):
    return PostLifecycle(posts_repo, projects_repo, ownership, slugs)


@pytest.fixture
def project_lifecycle(projects_repo, ownership, slugs):
    return ProjectLifecycle(projects_repo, ownership, slugs)


@pytest.fixture
def public_resolver(users_repo, projects_repo, posts_repo):
    return PublicResolver(users_repo, projects_repo, posts_repo)


# ─── Seed helpers ───────────────────────────────────────────────

@pytest.fixture
def make_user(users_repo):
    """Insert a user directly (fixed hash, no password hashing)."""
    async def _make(username: str):
        return await users_repo.create(
            username=username,
            email=f"{username}@example.com",
            password_hash="not-a-real-hash",
        )
    return _make


@pytest.fixture
def make_project(project_lifecycle):
    async def _make(owner, name: str, slug: str | None = None):
        return await project_lifecycle.create(
            owner.id, ProjectCreate(name=name, slug=slug),
        )
    return _make


@pytest.fixture
def make_post(post_lifecycle):
    async def _make(owner, project, title: str, **fields):
        dto = PostCreate(
            title=title,
            content=fields.pop("content", f"Body of {title}"),
            project_id=project.id,
            **fields,
        )
        return await post_lifecycle.create(owner.id, dto)
    return _make


@pytest.fixture
async def alice(make_user):
    return await make_user("alice")


@pytest.fixture
async def bob(make_user):
    return await make_user("bob")


# ─── HTTP ───────────────────────────────────────────────────────

@pytest.fixture
async def client(test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Build a bearer header for a seeded user."""
    def _headers(user) -> dict[str, str]:
        token = get_token_service().sign({
            "sub": str(user.id),
            "username": user.username,
            "email": user.email,
        })
        return {"Authorization": f"Bearer {token}"}
    return _headers
