"""Health Probes — liveness at /health, database readiness at /health/ready.

Invariants:
    - /health answers 200 while the process serves requests, database or not
    - /health/ready answers 503 until db_manager exists and SELECT 1 succeeds
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from user_service.infrastructure import database

router = APIRouter(prefix="/health", tags=["health"])

NOT_READY = {"status": "not_ready", "reason": "database_unavailable"}


@router.get("")
async def liveness():
    return {"status": "ok"}


@router.get("/ready")
async def readiness():
    """Reports whether the database accepts queries."""
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=NOT_READY)
    return {"status": "ready", "checks": {"database": "healthy"}}
