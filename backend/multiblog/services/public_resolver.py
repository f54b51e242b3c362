"""Public Resolver — username → projects → posts for anonymous readers.

Invariants:
    - Never checks identity; read-only
    - Unknown blogger and blogger-without-posts return the same empty listing
    - get_public_post_by_slug reports an unknown blogger as a missing post
    - Projections carry no owner id and no project foreign key

Design Decisions:
    - Two explicit repository calls (owner's projects, then posts in that id
      set) instead of a three-table join: same contract, reuses the owner queries
    - Slug collisions across a blogger's projects resolve to the newest post
"""

from multiblog.core.errors import ResourceNotFoundError
from multiblog.core.repository_protocols import (
    PostLike, PostRepository, ProjectLike, ProjectRepository, UserRepository,
)
from multiblog.schemas.public import (
    PublicPost, PublicPostDetail, PublicPostList, PublicProject,
)


class PublicResolver:
    """Unauthenticated read access to a blogger's posts."""

    def __init__(
        self,
        users: UserRepository,
        projects: ProjectRepository,
        posts: PostRepository,
    ):
        self.users = users
        self.projects = projects
        self.posts = posts

    async def list_public_posts(self, username: str) -> PublicPostList:
        user = await self.users.get_by_username(username)
        if user is None:
            return PublicPostList(username=username, posts=[], count=0)
        projects = await self.projects.list_by_owner(user.id)
        slugs_by_project = {p.id: p.slug for p in projects}
        posts = await self.posts.list_by_projects(list(slugs_by_project))
        public = [
            _project_post(post, slugs_by_project[post.project_id])
            for post in posts
        ]
        return PublicPostList(username=username, posts=public, count=len(public))

    async def get_public_post_by_slug(
        self, username: str, slug: str,
    ) -> PublicPostDetail:
        user = await self.users.get_by_username(username)
        if user is None:
            raise ResourceNotFoundError("Post", slug)
        projects = await self.projects.list_by_owner(user.id)
        post = await self.posts.find_by_slug_in_projects(
            [p.id for p in projects], slug,
        )
        if post is None:
            raise ResourceNotFoundError("Post", slug)
        project = next(p for p in projects if p.id == post.project_id)
        return PublicPostDetail(
            username=user.username,
            project=_public_project(project),
            post=_project_post(post, project.slug),
        )


def _project_post(post: PostLike, project_slug: str) -> PublicPost:
    return PublicPost(
        id=post.id,
        title=post.title,
        slug=post.slug,
        content=post.content,
        image=post.image,
        tags=post.tags,
        created_at=post.created_at,
        project_slug=project_slug,
    )


def _public_project(project: ProjectLike) -> PublicProject:
    return PublicProject(id=project.id, name=project.name, slug=project.slug)
