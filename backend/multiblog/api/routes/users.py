"""User Routes — authenticated profile lookup."""

from fastapi import APIRouter, Depends

from multiblog.api.dependencies import get_current_user
from multiblog.models.user import User
from multiblog.schemas.auth import UserProfile

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("/profile", response_model=UserProfile)
async def get_profile(user: User = Depends(get_current_user)):
    """Profile of the authenticated user (password hash omitted)."""
    return UserProfile.model_validate(user)
