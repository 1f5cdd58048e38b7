"""Request dependencies for the messaging endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import Depends, HTTPException, Request

if TYPE_CHECKING:
    from weatherbot.runtime.loop import RuntimeLoop

STARTING_UP_DETAIL = {
    "error": "Bot temporarily unavailable",
    "message": "The runtime has not finished starting or no config was given.",
}


def get_runtime(request: Request) -> RuntimeLoop:
    """Runtime attached to the app by the lifespan; 503 until it exists."""
    runtime: RuntimeLoop | None = getattr(request.app.state, "runtime", None)
    if runtime is None:
        raise HTTPException(status_code=503, detail=STARTING_UP_DETAIL)
    return runtime


RuntimeDep = Annotated["RuntimeLoop", Depends(get_runtime)]
