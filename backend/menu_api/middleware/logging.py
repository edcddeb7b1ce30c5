"""
Menu API — Request Logging Middleware
=====================================

What:  One access log line per request: method, path, status, duration.
How:   Level follows the status class (5xx ERROR, 4xx WARNING, else INFO).
       `/health` is skipped; probes hit it every few seconds.

Example:
    2024-05-01T10:00:00 [INFO] menu_api.access [3f2a9c1d]: POST /api/productos 201 4.2ms from 127.0.0.1
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("menu_api.access")

SKIP_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in SKIP_PATHS:
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        client_ip = request.client.host if request.client else "unknown"
        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms from %s",
            request.method,
            path,
            response.status_code,
            duration_ms,
            client_ip,
        )
        return response
