"""
Fleet API — Health Check & Root Routes
=======================================

What:  GET /health for monitoring/load balancer probes, GET / welcome message.
How:   The health check runs `SELECT 1` through the application's Database.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Request, Response, status

from fleet_api import __version__
from fleet_api.schemas.common import HealthResponse, WelcomeResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Module-level: initialized once when the module loads
_start_time = time.time()


@router.get(
    "/",
    response_model=WelcomeResponse,
    summary="Welcome message",
)
async def root() -> WelcomeResponse:
    return WelcomeResponse(message="Welcome to the Fleet API!")


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
    description=(
        "Returns the health status of the service and its database. "
        "Used by container health checks and load balancers."
    ),
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    """
    Check the health of the service and its store.

    Why a real query: a process that cannot reach its database cannot serve
    any CRUD request, so "process is up" alone is not healthy.
    """
    database = request.app.state.database
    if await database.ping():
        db_status, overall = "connected", "healthy"
    else:
        db_status, overall = "disconnected", "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
