"""Post Lifecycle — create, read, update, delete and list posts for their owner.

Invariants:
    - Every operation starts with an ownership check (OwnershipResolver)
    - A slug is re-derived only from an explicit slug or a title that differs
      from the stored one, and checked only when it changes (or the post moves)
    - Moving a post requires owning the destination project as well
    - remove() reports NotFound when the row vanished between verify and delete
    - list_by_owner() is newest first; an owner without projects gets []

Design Decisions:
    - Updates apply only fields the client sent (exclude_unset); explicit nulls
      are ignored for NOT NULL columns so a partial payload cannot blank them
    - No transaction spans verify-then-write: the (project_id, slug) unique
      constraint catches the race and surfaces the same SlugConflictError
"""

import logging
from typing import Any

from multiblog.core.domain_types import UserId, PostId
from multiblog.core.errors import ResourceNotFoundError
from multiblog.core.repository_protocols import (
    PostLike, PostRepository, ProjectRepository,
)
from multiblog.core.slugs import derive_slug
from multiblog.schemas.post import PostCreate, PostUpdate
from multiblog.services.ownership import OwnershipResolver
from multiblog.services.slug_allocator import SlugAllocator

logger = logging.getLogger(__name__)

# Columns a client may explicitly clear with null
_NULLABLE_FIELDS = frozenset({"image", "tags"})


class PostLifecycle:
    """Owner-facing post operations."""

    def __init__(
        self,
        posts: PostRepository,
        projects: ProjectRepository,
        ownership: OwnershipResolver,
        slugs: SlugAllocator,
    ):
        self.posts = posts
        self.projects = projects
        self.ownership = ownership
        self.slugs = slugs

    async def create(self, author_id: UserId, dto: PostCreate) -> PostLike:
        project = await self.ownership.verify_project_ownership(
            dto.project_id, author_id,
        )
        slug = await self.slugs.allocate(dto.slug, dto.title, project.id)
        post = await self.posts.create({
            "title": dto.title,
            "slug": slug,
            "content": dto.content,
            "image": dto.image,
            "tags": list(dto.tags) if dto.tags is not None else None,
            "project_id": project.id,
        })
        logger.info(
            f"Post created with slug '{slug}'",
            extra={"post_id": post.id, "project_id": project.id, "user_id": author_id},
        )
        return post

    async def find_one(self, post_id: PostId, user_id: UserId) -> PostLike:
        return await self.ownership.verify_post_ownership(post_id, user_id)

    async def update(
        self, post_id: PostId, user_id: UserId, dto: PostUpdate,
    ) -> PostLike:
        post = await self.ownership.verify_post_ownership(post_id, user_id)
        changes = _sent_fields(dto)

        target_project_id = post.project_id
        new_project_id = changes.pop("project_id", None)
        if new_project_id is not None and new_project_id != post.project_id:
            await self.ownership.verify_project_ownership(new_project_id, user_id)
            target_project_id = new_project_id
            changes["project_id"] = new_project_id
        moved = target_project_id != post.project_id

        new_slug = _requested_slug(post, changes)
        if new_slug != post.slug:
            await self.slugs.ensure_post_slug_free(
                new_slug, target_project_id, post.id,
            )
            changes["slug"] = new_slug
        elif moved:
            await self.slugs.ensure_post_slug_free(
                post.slug, target_project_id, post.id,
            )

        updated = await self.posts.update(post.id, changes)
        logger.info(
            f"Post updated ({', '.join(sorted(changes)) or 'no changes'})",
            extra={"post_id": post.id, "user_id": user_id},
        )
        return updated

    async def remove(self, post_id: PostId, user_id: UserId) -> None:
        await self.ownership.verify_post_ownership(post_id, user_id)
        deleted = await self.posts.delete(post_id)
        if deleted == 0:
            raise ResourceNotFoundError("Post", str(post_id))
        logger.info("Post deleted", extra={"post_id": post_id, "user_id": user_id})

    async def list_by_owner(self, user_id: UserId) -> list[PostLike]:
        project_ids = await self.projects.list_ids_by_owner(user_id)
        if not project_ids:
            return []
        return await self.posts.list_by_projects(project_ids)


def _sent_fields(dto: PostUpdate) -> dict[str, Any]:
    """Fields the client actually sent, minus nulls for NOT NULL columns."""
    return {
        key: value
        for key, value in dto.model_dump(exclude_unset=True).items()
        if value is not None or key in _NULLABLE_FIELDS
    }


def _requested_slug(post: PostLike, changes: dict[str, Any]) -> str:
    """Slug the update asks for; the current one when nothing slug-relevant changed.

    Pops "slug" from changes. An explicit slug wins over the title; a title
    equal to the stored one (full-body PUT) never re-derives.
    """
    sent_slug = changes.pop("slug", None)
    if sent_slug is not None:
        return derive_slug(sent_slug, post.title)
    title = changes.get("title")
    if title is not None and title != post.title:
        return derive_slug(None, title)
    return post.slug
