"""Health & Readiness Probes: liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health and GET /api/v1/health/ always return 200 if the process is up
    - GET /api/v1/health/ready returns 503 if the database is unreachable
    - A degraded cache is reported but never fails readiness

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import app.infrastructure.database as db_module
from app.infrastructure.cache import cache_layer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])
root_router = APIRouter(tags=["health"])

SERVICE_NAME = "GetEmpStatus API"
SERVICE_VERSION = "1.0.0"


def _liveness() -> dict:
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@root_router.get("/health", status_code=status.HTTP_200_OK)
async def root_health_check():
    return _liveness()


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return _liveness()


@router.get("/ready")
async def readiness_check():
    """Readiness probe: database required, cache optional."""
    cache_state = "available" if cache_layer.is_available() else "degraded"
    manager = db_module.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
                "checks": {"database": "unavailable", "cache": cache_state},
            },
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy", "cache": cache_state},
    }
