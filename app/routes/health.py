"""
Student Records API — Health Check Route
==========================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings the database through the injected store and reports status.
Who:   Called by Docker health checks, load balancers, and monitoring systems.

Status levels:
    - healthy:   Database reachable
    - unhealthy: Database unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response, status

from app import __version__
from app.database import get_student_store
from app.schemas.student import HealthResponse
from app.services.student_store import StudentStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    response: Response,
    store: StudentStore = Depends(get_student_store),
) -> HealthResponse:
    """
    Probe the database with a ping and return aggregate status.

    A ping is used rather than a real query: health checks run every
    few seconds and must stay cheap.
    """
    db_status = "connected"
    overall = "healthy"

    if not await store.ping():
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
