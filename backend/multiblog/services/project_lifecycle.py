"""Project Lifecycle — create, read, update, delete and list projects for their owner.

Invariants:
    - Project slugs are globally unique (SlugAllocator.allocate_project_slug)
    - get/update/delete re-verify ownership on every call
    - Deleting a project removes its posts through the storage cascade

Design Decisions:
    - Slug derived from the name only at creation; renaming keeps the URL
      stable, the slug changes only when a new one is sent explicitly
    - list_by_owner pairs each project with its post count in one grouped query
"""

import logging

from multiblog.core.domain_types import UserId, ProjectId
from multiblog.core.errors import ResourceNotFoundError
from multiblog.core.repository_protocols import ProjectLike, ProjectRepository
from multiblog.schemas.project import ProjectCreate, ProjectUpdate
from multiblog.services.ownership import OwnershipResolver
from multiblog.services.slug_allocator import SlugAllocator

logger = logging.getLogger(__name__)


class ProjectLifecycle:
    """Owner-facing project operations."""

    def __init__(
        self,
        projects: ProjectRepository,
        ownership: OwnershipResolver,
        slugs: SlugAllocator,
    ):
        self.projects = projects
        self.ownership = ownership
        self.slugs = slugs

    async def create(self, owner_id: UserId, dto: ProjectCreate) -> ProjectLike:
        slug = await self.slugs.allocate_project_slug(dto.slug, dto.name)
        project = await self.projects.create(owner_id, dto.name, slug)
        logger.info(
            f"Project created with slug '{slug}'",
            extra={"project_id": project.id, "user_id": owner_id},
        )
        return project

    async def list_by_owner(
        self, owner_id: UserId,
    ) -> list[tuple[ProjectLike, int]]:
        projects = await self.projects.list_by_owner(owner_id)
        counts = await self.projects.count_posts([p.id for p in projects])
        return [(p, counts.get(p.id, 0)) for p in projects]

    async def find_one(
        self, project_id: ProjectId, user_id: UserId,
    ) -> ProjectLike:
        return await self.ownership.verify_project_ownership(project_id, user_id)

    async def update(
        self, project_id: ProjectId, user_id: UserId, dto: ProjectUpdate,
    ) -> ProjectLike:
        project = await self.ownership.verify_project_ownership(project_id, user_id)
        changes = {
            key: value
            for key, value in dto.model_dump(exclude_unset=True).items()
            if value is not None
        }
        if "slug" in changes:
            slug = await self.slugs.allocate_project_slug(
                changes["slug"], project.name, exclude_project_id=project.id,
            )
            if slug == project.slug:
                changes.pop("slug")
            else:
                changes["slug"] = slug
        return await self.projects.update(project.id, changes)

    async def remove(self, project_id: ProjectId, user_id: UserId) -> ProjectId:
        await self.ownership.verify_project_ownership(project_id, user_id)
        deleted = await self.projects.delete(project_id)
        if deleted == 0:
            raise ResourceNotFoundError("Project", str(project_id))
        logger.info(
            "Project deleted", extra={"project_id": project_id, "user_id": user_id},
        )
        return project_id
