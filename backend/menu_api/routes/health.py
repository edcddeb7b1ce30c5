"""
Menu API — Health Check Route
=============================

What:  Liveness/readiness probe for load balancers and uptime monitors.
How:   One trivial `SELECT 1` round trip through the app's engine.

    200 {"status": "ok",    "db": true,  "version": ..., "uptime_seconds": ...}
    500 {"status": "error", "db": false, "version": ..., "uptime_seconds": ...}
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from menu_api import __version__
from menu_api.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={500: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request) -> JSONResponse:
    db_ok = False
    try:
        db_ok = await request.app.state.database.ping()
    except Exception as e:
        # Any failure to reach the database means "not ready"
        logger.warning("Health check: database unreachable: %s", str(e))

    payload = HealthResponse(
        status="ok" if db_ok else "error",
        db=db_ok,
        version=__version__,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    return JSONResponse(status_code=200 if db_ok else 500, content=payload.model_dump())
