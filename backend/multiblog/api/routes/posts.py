"""Post Routes — owner-only CRUD; ownership resolved through the post's project.

Invariants:
    - Every route requires a bearer token
    - Another user's post answers 404, exactly like a missing one
    - Slug collisions inside a project answer 409
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from multiblog.api.dependencies import get_current_user, get_post_lifecycle
from multiblog.models.user import User
from multiblog.schemas.post import PostCreate, PostResponse, PostUpdate
from multiblog.services.post_lifecycle import PostLifecycle

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])


@router.post(
    "", response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    body: PostCreate,
    user: User = Depends(get_current_user),
    posts: PostLifecycle = Depends(get_post_lifecycle),
):
    post = await posts.create(user.id, body)
    return PostResponse.model_validate(post)


@router.get("", response_model=list[PostResponse])
async def list_posts(
    user: User = Depends(get_current_user),
    posts: PostLifecycle = Depends(get_post_lifecycle),
):
    """All posts across the caller's projects, newest first."""
    return [PostResponse.model_validate(p) for p in await posts.list_by_owner(user.id)]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: UUID,
    user: User = Depends(get_current_user),
    posts: PostLifecycle = Depends(get_post_lifecycle),
):
    post = await posts.find_one(post_id, user.id)
    return PostResponse.model_validate(post)


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: UUID,
    body: PostUpdate,
    user: User = Depends(get_current_user),
    posts: PostLifecycle = Depends(get_post_lifecycle),
):
    post = await posts.update(post_id, user.id, body)
    return PostResponse.model_validate(post)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: UUID,
    user: User = Depends(get_current_user),
    posts: PostLifecycle = Depends(get_post_lifecycle),
):
    await posts.remove(post_id, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
