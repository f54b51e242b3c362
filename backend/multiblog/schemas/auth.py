"""Auth Schemas — registration, login, token and profile payloads.

Invariants:
    - username: 3-50 chars of letters, digits, '_', '.', '-'
    - email lowercased and stripped before reaching the service
    - UserProfile never carries the password hash
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(BaseModel):
    """Account registration."""
    username: str = Field(min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")
    email: str = Field(max_length=255, pattern=_EMAIL_PATTERN)
    password: str = Field(min_length=8, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class LoginRequest(BaseModel):
    """Email + password login."""
    email: str = Field(max_length=255, pattern=_EMAIL_PATTERN)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class RegisterResponse(BaseModel):
    message: str = "User registered successfully"
    username: str
    email: str


class TokenResponse(BaseModel):
    """Issued bearer token plus the identity it carries."""
    access_token: str
    token_type: str = "bearer"
    id: UUID
    username: str
    email: str


class UserProfile(BaseModel):
    """Public-facing view of the authenticated user."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str
    created_at: datetime
