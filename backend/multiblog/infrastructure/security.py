"""Security Adapters — password hashing (passlib) and bearer tokens (python-jose).

Invariants:
    - Plaintext passwords never leave PasswordHasher.hash / .verify
    - Tokens always carry sub (user id as str), username, email, exp
    - JWTTokenService.verify raises AuthenticationError for any bad token
      (bad signature, expired, malformed, missing claims), never JWTError

Design Decisions:
    - pbkdf2_sha256 default scheme: pure-python, no native bcrypt build needed
    - CryptContext(deprecated="auto"): old hashes still verify after a scheme change
    - HS256 shared secret from settings; algorithm pinned on decode
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from multiblog.core.errors import AuthenticationError

logger = logging.getLogger(__name__)

_REQUIRED_CLAIMS = ("sub", "username", "email")


class PasswordHasher:
    """CredentialStore backed by a passlib CryptContext."""

    def __init__(self, scheme: str = "pbkdf2_sha256"):
        self._context = CryptContext(schemes=[scheme], deprecated="auto")

    def hash(self, plaintext: str) -> str:
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, digest: str) -> bool:
        try:
            return self._context.verify(plaintext, digest)
        except ValueError:
            # Unrecognized or corrupt digest
            return False


class JWTTokenService:
    """TokenService backed by python-jose."""

    def __init__(
        self, secret: str, algorithm: str = "HS256",
        default_ttl: timedelta = timedelta(hours=1),
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._default_ttl = default_ttl

    def sign(self, claims: dict[str, Any], ttl: timedelta | None = None) -> str:
        """Sign claims with an exp of now + ttl (default_ttl when omitted)."""
        payload = dict(claims)
        payload["exp"] = datetime.now(timezone.utc) + (ttl or self._default_ttl)
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        try:
            claims = jwt.decode(
                token, self._secret, algorithms=[self._algorithm],
            )
        except JWTError as e:
            logger.warning(f"Rejected bearer token: {e}")
            raise AuthenticationError("Invalid or expired token")
        if any(not claims.get(name) for name in _REQUIRED_CLAIMS):
            raise AuthenticationError("Invalid or expired token")
        return claims
