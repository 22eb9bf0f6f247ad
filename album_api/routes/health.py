"""
Album API - Health Check Route
===============================

What:  Health check endpoint for monitoring and container probes.
How:   Pings the database through the AlbumStore and reports the result
       together with the version and uptime.
Who:   Docker health checks, load balancers, monitoring.

Status levels:
    - healthy:   database reachable
    - unhealthy: database unreachable (still HTTP 200; the body carries the state)
"""

import logging
import time

from fastapi import APIRouter, Request

from album_api import __version__
from album_api.schemas.album import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    """
    Runs SELECT 1 against the database and returns aggregate status.

    Reads the store straight from app state so that a process with no
    database attached still answers 200 (as unhealthy).
    """
    store = getattr(request.app.state, "album_store", None)
    if store is not None and await store.ping():
        db_status, overall = "connected", "healthy"
    else:
        db_status, overall = "disconnected", "unhealthy"
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
