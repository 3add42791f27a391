"""
Food Ordering Backend — Health Check Routes
=============================================

What:  GET /health for monitoring and load balancer probes, and GET / as a
       plain-text liveness banner.
How:   /health runs SELECT 1 against the database handle on app.state.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from food_ordering import __version__
from food_ordering.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def root() -> str:
    return "Food Ordering Backend API is running!"


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request):
    database = getattr(request.app.state, "database", None)
    db_ok = database is not None and await database.ping()

    body = HealthResponse(
        status="healthy" if db_ok else "unhealthy",
        version=__version__,
        database="connected" if db_ok else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if not db_ok:
        logger.warning("Health check: database unreachable")
        return JSONResponse(status_code=503, content=body.model_dump(by_alias=True))
    return body
