"""
Jokebox — Health Check Route
=============================

What:  Health check endpoint for monitoring and container liveness checks.
How:   Pings MongoDB and reports the result with version and uptime.
Who:   Called by Docker health checks, load balancers, and monitoring systems.

Status levels:
    - healthy:   store answers ping (HTTP 200)
    - unhealthy: store unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from jokebox import __version__
from jokebox.database import JokeStore, get_store
from jokebox.schemas.joke import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns 200 when MongoDB answers a ping, 503 otherwise.",
)
async def health_check(
    response: Response,
    store: JokeStore = Depends(get_store),
) -> HealthResponse:
    if await store.ping():
        db_status, overall = "connected", "healthy"
    else:
        db_status, overall = "disconnected", "unhealthy"
        response.status_code = 503
        logger.warning("Health check: MongoDB unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
