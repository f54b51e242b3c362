"""Slug Allocator — derives a slug and checks it is free within its scope.

Invariants:
    - Post slugs are unique per project; project slugs are unique globally
    - A slug held by the excluded entity itself is never a conflict
    - Derivation rules live in core/slugs.py; this module only adds the store check

Design Decisions:
    - Check-then-write is a fast path for a readable 409; the storage unique
      constraints remain the real guarantee under concurrent writers
"""

from multiblog.core.domain_types import ProjectId, PostId
from multiblog.core.errors import SlugConflictError
from multiblog.core.repository_protocols import PostRepository, ProjectRepository
from multiblog.core.slugs import derive_slug


class SlugAllocator:
    """Allocates post slugs (project-scoped) and project slugs (global)."""

    def __init__(self, posts: PostRepository, projects: ProjectRepository):
        self.posts = posts
        self.projects = projects

    async def allocate(
        self,
        candidate: str | None,
        title: str,
        scope_id: ProjectId,
        exclude_post_id: PostId | None = None,
    ) -> str:
        """Derive a post slug and fail SlugConflictError if taken in scope_id."""
        slug = derive_slug(candidate, title)
        await self.ensure_post_slug_free(slug, scope_id, exclude_post_id)
        return slug

    async def ensure_post_slug_free(
        self,
        slug: str,
        scope_id: ProjectId,
        exclude_post_id: PostId | None = None,
    ) -> None:
        existing = await self.posts.get_by_scope_and_slug(scope_id, slug)
        if existing is not None and (
            exclude_post_id is None or existing.id != exclude_post_id
        ):
            raise SlugConflictError("Post", slug)

    async def allocate_project_slug(
        self,
        candidate: str | None,
        name: str,
        exclude_project_id: ProjectId | None = None,
    ) -> str:
        """Derive a project slug and fail SlugConflictError if taken anywhere."""
        slug = derive_slug(candidate, name)
        existing = await self.projects.get_by_slug(slug)
        if existing is not None and (
            exclude_project_id is None or existing.id != exclude_project_id
        ):
            raise SlugConflictError("Project", slug)
        return slug
