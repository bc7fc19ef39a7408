"""
Server-side throttle for the relay endpoint.

The client cooldown only covers well-behaved browsers; this limiter keys on
the caller's IP so a scripted sender cannot flood the mailbox.
"""

import structlog
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse

from contact_relay.core.config import settings

logger = structlog.get_logger()

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def contact_rate_limit() -> str:
    return settings.contact_rate_limit


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Render slowapi's 429 in the relay's {"error": ...} shape."""
    logger.warning(
        "rate_limit_exceeded",
        path=request.url.path,
        client=get_remote_address(request),
        limit=str(exc.detail),
    )
    return JSONResponse(
        status_code=429,
        content={"error": f"Rate limit exceeded: {exc.detail}"},
    )
