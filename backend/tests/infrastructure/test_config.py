"""Settings tests — environment parsing and production guards."""

import pytest
from pydantic import ValidationError

from multiblog.config import Settings


def test_postgres_url_rewritten_for_asyncpg():
    settings = Settings(database_url="postgresql://u:p@host:5432/blog")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/blog"


def test_sqlite_url_left_alone():
    settings = Settings(database_url="sqlite+aiosqlite:///:memory:")
    assert settings.database_url == "sqlite+aiosqlite:///:memory:"


def test_production_rejects_placeholder_secret():
    with pytest.raises(ValidationError):
        Settings(environment="production", jwt_secret="change-me-in-production")


def test_production_with_real_secret(monkeypatch):
    monkeypatch.setenv("JWT_EXPIRATION_SECONDS", "900")
    settings = Settings(environment="production", jwt_secret="s3cr3t")
    assert settings.jwt_expiration_seconds == 900
