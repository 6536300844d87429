"""Health Probes - liveness for the process, readiness for the games store."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import punchlines.infrastructure.database as database

router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_INFO = {"service": "punchlines-api", "version": "1.0.0"}


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "healthy", **SERVICE_INFO}


@router.get("/ready")
async def readiness_check():
    """503 until the games database answers a trivial query."""
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
