"""Auth Routes — register, login, and the caller's own profile.

Invariants:
    - register/login are anonymous; /me requires a bearer token
    - Responses never include the password hash
"""

from fastapi import APIRouter, Depends, status

from multiblog.api.dependencies import get_auth_service, get_current_user
from multiblog.models.user import User
from multiblog.schemas.auth import (
    LoginRequest, RegisterRequest, RegisterResponse, TokenResponse, UserProfile,
)
from multiblog.services.auth_service import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/register", response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest, auth: AuthService = Depends(get_auth_service),
):
    """Create an account. 409 when username or email is taken."""
    user = await auth.register(body.username, body.email, body.password)
    return RegisterResponse(username=user.username, email=user.email)


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest, auth: AuthService = Depends(get_auth_service),
):
    """Exchange email + password for a bearer token."""
    token, user = await auth.login(body.email, body.password)
    return TokenResponse(
        access_token=token, id=user.id,
        username=user.username, email=user.email,
    )


@router.get("/me", response_model=UserProfile)
async def me(user: User = Depends(get_current_user)):
    return UserProfile.model_validate(user)
