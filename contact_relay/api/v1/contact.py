"""
Contact form endpoint for the portfolio site.
Accepts contact form submissions and relays them by email over SMTP.
"""
import json
from typing import Any

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from contact_relay.api.dependencies import get_relay_handler
from contact_relay.core.rate_limit import contact_rate_limit, limiter
from contact_relay.services.contact import RelayHandler

logger = structlog.get_logger()

router = APIRouter()

# Non-POST methods are routed here too so the handler answers them with its
# own 405 body instead of the framework default.
CONTACT_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


async def read_json_body(request: Request) -> Any:
    """Parse the request body; an empty or malformed body reads as {}."""
    raw = await request.body()
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("contact_body_not_json", error=str(e), size=len(raw))
        return {}


@router.api_route("/contact", methods=CONTACT_METHODS)
@limiter.limit(contact_rate_limit)
async def relay_contact_form(
    request: Request,
    handler: RelayHandler = Depends(get_relay_handler),
) -> JSONResponse:
    """
    Relay a contact form submission as an email.

    Responses:
        200 {"message": ...} on dispatch
        400 {"error": "Missing required fields"}
        405 {"error": "Method not allowed"}
        500 {"error": ...} on configuration or delivery failure
    """
    body = await read_json_body(request) if request.method == "POST" else {}
    result = await handler.handle(request.method, body)
    return JSONResponse(status_code=result.status_code, content=result.to_body())
