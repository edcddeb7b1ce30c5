"""
Menu API — Request ID Middleware
================================

What:  Tags every request with a short id, echoes it in `X-Request-ID` and
       exposes it to log records.
How:   The id is stored in a ContextVar (coroutine-local), on
       `request.state`, and injected into log records by `RequestIdFilter`.
When:  Outermost application middleware, so every later log line of the
       request carries the id.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    """Adds `record.request_id` so formats can use `%(request_id)s`."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get()
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Reuses a client-supplied `X-Request-ID` or generates an 8-char one.

    The ContextVar is reset once the response is produced so the id does not
    leak into log lines emitted outside the request.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
