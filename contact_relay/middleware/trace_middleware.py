"""
Trace ID Middleware for Request Tracking

Binds a per-request trace ID into the structlog context so the relay's
log lines for one submission can be correlated.
"""

import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

TRACE_HEADER = "X-Trace-Id"


class TraceMiddleware(BaseHTTPMiddleware):
    """
    - Reuses X-Trace-Id from the request when present, else generates one
    - Binds trace_id, method and path to the structlog context
    - Echoes X-Trace-Id on the response
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        trace_id = request.headers.get(TRACE_HEADER) or uuid.uuid4().hex

        structlog.contextvars.bind_contextvars(
            trace_id=trace_id,
            http_method=request.method,
            http_path=request.url.path,
        )
        try:
            response = await call_next(request)
            response.headers[TRACE_HEADER] = trace_id
            return response
        finally:
            structlog.contextvars.unbind_contextvars("trace_id", "http_method", "http_path")
