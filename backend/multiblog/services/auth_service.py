"""Auth Service — registration, login, and bearer-token → user resolution.

Invariants:
    - Username and email uniqueness checked before hashing (409 on collision)
    - Login failures never say whether the email or the password was wrong
    - A valid token whose user no longer exists is rejected (401)

Design Decisions:
    - Email is the login identifier; username is the public handle
    - Hasher and token service injected: no passlib/jose imports here
"""

import logging
from uuid import UUID

from multiblog.core.domain_types import UserId
from multiblog.core.errors import AuthenticationError, DuplicateAccountError
from multiblog.core.repository_protocols import (
    CredentialStore, TokenService, UserLike, UserRepository,
)

logger = logging.getLogger(__name__)


class AuthService:
    """Account registration and token issuance."""

    def __init__(
        self,
        users: UserRepository,
        hasher: CredentialStore,
        tokens: TokenService,
    ):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    async def register(self, username: str, email: str, password: str) -> UserLike:
        if await self.users.get_by_username(username) is not None:
            raise DuplicateAccountError("username", "Username is already taken")
        if await self.users.get_by_email(email) is not None:
            raise DuplicateAccountError("email", "Email is already registered")
        user = await self.users.create(
            username=username,
            email=email,
            password_hash=self.hasher.hash(password),
        )
        logger.info("User registered", extra={"user_id": user.id, "username": username})
        return user

    async def login(self, email: str, password: str) -> tuple[str, UserLike]:
        """Return (access_token, user) or raise AuthenticationError."""
        user = await self.users.get_by_email(email)
        if user is None or not self.hasher.verify(password, user.password_hash):
            raise AuthenticationError("Invalid credentials")
        token = self.tokens.sign({
            "sub": str(user.id),
            "username": user.username,
            "email": user.email,
        })
        return token, user

    async def resolve_user(self, token: str) -> UserLike:
        """Verify a bearer token and load the user it names."""
        claims = self.tokens.verify(token)
        try:
            user_id = UserId(UUID(claims["sub"]))
        except ValueError:
            raise AuthenticationError("Invalid or expired token")
        user = await self.users.get(user_id)
        if user is None:
            raise AuthenticationError("Invalid or expired token")
        return user
