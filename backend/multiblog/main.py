"""Multiblog API — FastAPI app assembly.

Invariants:
    - Routers are included one by one below; nothing is auto-discovered
    - MultiblogError and validation failures leave as the JSON error envelope
    - Allowed CORS origins come from Settings.cors_origins
    - Every request passes through the access-log middleware
    - The engine exists only between lifespan startup and shutdown

Design Decisions:
    - Lifespan context manager owns logging setup and the database engine
    - Handlers live in api/error_handlers.py; this module only wires them
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from multiblog.api.error_handlers import register_error_handlers
from multiblog.api.routes import auth, health, posts, projects, public, users
from multiblog.config import get_settings
from multiblog.infrastructure import database
from multiblog.infrastructure.observability import (
    REQUEST_ID_HEADER, log_requests, setup_logging,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and open the engine; dispose it on shutdown."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(f"Multiblog API ready ({settings.environment})")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Multiblog API stopped")


app = FastAPI(
    title="Multiblog API", version="1.0.0", lifespan=lifespan,
)

# Browser clients: origins from settings, request id readable by JS
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)
app.middleware("http")(log_requests)

# Routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(projects.router)
app.include_router(posts.router)
app.include_router(public.router)

register_error_handlers(app)
