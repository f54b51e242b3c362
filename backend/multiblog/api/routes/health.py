"""Health Probes — liveness and database-backed readiness.

Invariants:
    - GET /health/ answers 200 whenever the process can serve requests
    - GET /health/ready answers 503 until the database responds to a ping
    - Neither probe requires authentication

Design Decisions:
    - db_manager read through the module at call time: it is created in the
      lifespan, after this router is imported
    - Version reported from the FastAPI app itself, single source in main.py
"""

import time

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from multiblog.infrastructure import database

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness(request: Request):
    return {
        "status": "healthy",
        "service": "multiblog-api",
        "version": request.app.version,
    }


@router.get("/ready")
async def readiness():
    """503 with a reason when the database is down or not yet initialized."""
    manager = database.db_manager
    if manager is None:
        return _not_ready("database_not_initialized")

    started = time.perf_counter()
    if not await manager.health_check():
        return _not_ready("database_unavailable")
    return {
        "status": "ready",
        "checks": {
            "database": {
                "status": "healthy",
                "latency_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        },
    }


def _not_ready(reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason},
    )
