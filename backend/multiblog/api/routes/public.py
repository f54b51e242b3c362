"""Public Routes — anonymous, read-only access to a blogger's posts.

Invariants:
    - No authentication dependency on any route here
    - Unknown blogger → 200 with an empty list (listing) or 404 (single post)
"""

from fastapi import APIRouter, Depends

from multiblog.api.dependencies import get_public_resolver
from multiblog.schemas.public import PublicPostDetail, PublicPostList
from multiblog.services.public_resolver import PublicResolver

router = APIRouter(prefix="/api/v1/public", tags=["public"])


@router.get("/{username}/posts", response_model=PublicPostList)
async def list_public_posts(
    username: str, resolver: PublicResolver = Depends(get_public_resolver),
):
    return await resolver.list_public_posts(username)


@router.get("/{username}/posts/{slug}", response_model=PublicPostDetail)
async def get_public_post(
    username: str,
    slug: str,
    resolver: PublicResolver = Depends(get_public_resolver),
):
    return await resolver.get_public_post_by_slug(username, slug)
