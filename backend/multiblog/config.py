"""Settings — every tunable read from the environment (or .env) via pydantic-settings.

Invariants:
    - get_settings() returns one cached instance per process
    - A production environment refuses to start with the placeholder JWT secret
    - postgresql:// URLs are rewritten to the asyncpg driver form

Design Decisions:
    - Non-secret defaults match docker-compose, so local runs need no .env
    - Token lifetime in seconds (int) to keep env values plain numbers
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_PLACEHOLDER_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    environment: str = "development"

    # Storage
    database_url: str = "postgresql+asyncpg://multiblog:multiblog@db:5432/multiblog"
    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Credentials and tokens
    jwt_secret: str = _PLACEHOLDER_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expiration_seconds: int = 3600
    password_hash_scheme: str = "pbkdf2_sha256"

    # HTTP
    cors_origins: list[str] = ["http://localhost:5173"]

    # Logging: "json" or "text"
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_asyncpg_driver(cls, v):
        if isinstance(v, str) and v.startswith("postgresql://"):
            return "postgresql+asyncpg://" + v[len("postgresql://"):]
        return v

    @model_validator(mode="after")
    def require_real_secret_in_production(self):
        if self.environment == "production" and self.jwt_secret == _PLACEHOLDER_SECRET:
            raise ValueError("JWT_SECRET must be set in production")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
