"""Health Routes — liveness and readiness for the invoicing API.

Invariants:
    - GET /api/v1/health/ answers 200 while the process serves requests; it never
      touches the database
    - GET /api/v1/health/ready answers 503 until init_db has run and a SELECT 1 succeeds
    - Service name and version come from Settings, version from the installed package

Design Decisions:
    - db_manager read through the module at call time: it is assigned on startup
"""

import time

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from invoicing.config import get_settings
from invoicing.infrastructure import database

router = APIRouter(prefix="/api/v1/health", tags=["health"])

_STARTED = time.monotonic()


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    settings = get_settings()
    return {
        "status": "healthy",
        "service": settings.service_name,
        "version": settings.service_version,
        "uptime_seconds": round(time.monotonic() - _STARTED, 1),
    }


@router.get("/ready")
async def readiness():
    """Ready when the invoice store answers."""
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy"},
        "database": manager.engine.dialect.name,
    }
