"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /healthz always returns 200 {"ok": true} if the process is up (liveness)
    - GET /api/health/ready returns 503 if storage is unreachable (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from
      the load balancer
    - Readiness asks the repository, so it works for both storage backends
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.core.repository_protocols import ScheduleRepository
from app.infrastructure.storage import get_repository

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/healthz", status_code=status.HTTP_200_OK)
async def liveness():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {"ok": True}


@router.get("/api/health/ready")
async def readiness_check(repo: ScheduleRepository = Depends(get_repository)):
    """Readiness probe — includes storage connectivity."""
    if not await repo.health_check():
        logger.warning("Readiness check failed: storage unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "storage_unavailable",
            },
        )
    return {"status": "ready", "checks": {"storage": "healthy"}}
