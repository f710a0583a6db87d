"""Health Probes — liveness and readiness for container orchestration.

Invariants:
    - GET /health/ answers 200 whenever the process can serve requests
    - GET /health/ready answers 503 only when the SQL repository is selected
      and the database does not answer SELECT 1
    - The in-memory repository has no dependency to check, so it is always ready
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from habit_tracking import __version__
from habit_tracking.config import get_settings
from habit_tracking.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


async def _database_state() -> str:
    if not get_settings().uses_sql:
        return "not_configured"
    manager = database.db_manager
    if manager and await manager.health_check():
        return "healthy"
    return "unavailable"


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {
        "status": "healthy",
        "service": "habit-tracking-api",
        "version": __version__,
    }


@router.get("/ready")
async def readiness():
    db_state = await _database_state()
    if db_state == "unavailable":
        logger.warning("Readiness failed: database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": {"database": db_state}},
        )
    return {"status": "ready", "checks": {"database": db_state}}
