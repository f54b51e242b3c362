"""Ownership Resolver — confirms the User → Project → Post chain or fails NotFound.

Invariants:
    - "Does not exist" and "exists but belongs to someone else" raise the same
      ResourceNotFoundError with the same message
    - Post ownership is transitive through the post's project
    - No side effects: read-only lookups

Design Decisions:
    - A failed project check during verify_post_ownership is re-raised as a
      Post not-found error, so the caller never learns the project id
    - Rejections logged at WARNING with ids for operators, never returned
"""

import logging

from multiblog.core.domain_types import UserId, ProjectId, PostId
from multiblog.core.errors import ResourceNotFoundError
from multiblog.core.repository_protocols import (
    PostLike, PostRepository, ProjectLike, ProjectRepository,
)

logger = logging.getLogger(__name__)


class OwnershipResolver:
    """Verifies that a user owns a project, or a post through its project."""

    def __init__(self, projects: ProjectRepository, posts: PostRepository):
        self.projects = projects
        self.posts = posts

    async def verify_project_ownership(
        self, project_id: ProjectId, user_id: UserId,
    ) -> ProjectLike:
        project = await self.projects.get(project_id)
        if project is None or project.owner_id != user_id:
            if project is not None:
                logger.warning(
                    "Project ownership rejected",
                    extra={"project_id": project_id, "user_id": user_id},
                )
            raise ResourceNotFoundError("Project", str(project_id))
        return project

    async def verify_post_ownership(
        self, post_id: PostId, user_id: UserId,
    ) -> PostLike:
        post = await self.posts.get(post_id)
        if post is None:
            raise ResourceNotFoundError("Post", str(post_id))
        try:
            await self.verify_project_ownership(post.project_id, user_id)
        except ResourceNotFoundError:
            raise ResourceNotFoundError("Post", str(post_id))
        return post
