"""Last-resort error responses for the HTTP server.

A failing turn answers the channel with a generic body and an ``ERR-``
reference; the traceback is logged under that reference together with the
conversation the inbound activity belonged to.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from weatherbot.core.errors import create_error_reference

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "An internal error occurred. Please try again later."
SUPPORT_MESSAGE = "If this problem persists, contact support with the reference code."


async def conversation_id_of(request: Request) -> str:
    """Conversation id of the posted activity, or ``"-"`` when it can't be read."""
    try:
        body = await request.json()
    except (ValueError, RuntimeError):
        return "-"
    conversation = body.get("conversation") if isinstance(body, dict) else None
    if isinstance(conversation, dict) and conversation.get("id"):
        return str(conversation["id"])
    return "-"


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    error_ref = create_error_reference()
    conversation_id = await conversation_id_of(request)

    logger.error(
        "[%s] %s %s failed: %s: %s",
        error_ref,
        request.method,
        request.url.path,
        type(exc).__name__,
        exc,
        exc_info=exc,
        extra={"error_reference": error_ref, "conversation_id": conversation_id},
    )

    return JSONResponse(
        status_code=500,
        content={"error": DEFAULT_ERROR_MESSAGE, "reference": error_ref, "message": SUPPORT_MESSAGE},
    )
