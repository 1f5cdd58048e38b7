"""WeatherBot FastAPI Application.

Hosts the Bot Framework messaging endpoint plus health probes. Activities
are processed by the RuntimeLoop created in the application lifespan.
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from weatherbot import __version__
from weatherbot.config import WeatherBotConfig
from weatherbot.core.activity import Activity
from weatherbot.server.dependencies import RuntimeDep
from weatherbot.server.errors import global_exception_handler
from weatherbot.server.models import (
    ActivitiesResponse,
    ComponentStatus,
    HealthResponse,
    HealthStatus,
    ReadinessResponse,
    VersionResponse,
)

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "WEATHERBOT_CONFIG_PATH"
DEFAULT_CONFIG_PATH = "weatherbot.yaml"


def _resolve_config(app: FastAPI) -> WeatherBotConfig | None:
    config = getattr(app.state, "config", None)
    if config is not None:
        return config

    config_path = os.environ.get(CONFIG_PATH_ENV)
    if not config_path and os.path.exists(DEFAULT_CONFIG_PATH):
        config_path = DEFAULT_CONFIG_PATH

    if not config_path:
        logger.warning(
            f"{CONFIG_PATH_ENV} not set and {DEFAULT_CONFIG_PATH} not found. "
            "App will start unconfigured."
        )
        return None

    from weatherbot.config.loader import ConfigLoader

    logger.info(f"Reading bot config {config_path}")
    return ConfigLoader.load(config_path)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the runtime for the app's lifetime; without config the app stays unconfigured."""
    from dotenv import load_dotenv

    load_dotenv()

    try:
        config = _resolve_config(app)
    except Exception as e:
        logger.error(f"Bot config could not be loaded: {e}")
        config = None

    if config is None:
        yield
        return

    from weatherbot.observability.logging import setup_logging
    from weatherbot.runtime.loop import RuntimeLoop

    setup_logging(config.logging.level, config.logging.file)

    logger.info("Opening runtime")
    runtime = RuntimeLoop(config)
    try:
        await runtime.__aenter__()
    except Exception as e:
        logger.error(f"Runtime failed to open storage or HTTP clients: {e}")
        yield
        return

    app.state.runtime = runtime
    app.state.config = config
    logger.info(f"Runtime open, serving weather for {config.weather.city_name}")
    try:
        yield
    finally:
        logger.info("Closing runtime")
        app.state.runtime = None
        await runtime.__aexit__(None, None, None)


app = FastAPI(
    title="WeatherBot",
    description="Bot Framework weather bot backed by LUIS and OpenWeatherMap",
    version=__version__,
    lifespan=lifespan,
)

app.add_exception_handler(Exception, global_exception_handler)


@app.post("/api/messages", response_model=None)
async def messages(request: Request, runtime: RuntimeDep) -> Response:
    """Bot Framework messaging endpoint."""
    content_type = request.headers.get("content-type", "")
    if "application/json" not in content_type:
        return Response(status_code=415)

    try:
        body = await request.json()
    except ValueError as e:
        raise HTTPException(status_code=400, detail="Request body is not valid JSON") from e

    try:
        activity = Activity.model_validate(body)
    except ValidationError as e:
        return JSONResponse(
            status_code=422,
            content={"detail": e.errors(include_url=False, include_context=False, include_input=False)},
        )

    replies = await runtime.process_activity(activity)

    if activity.expects_replies():
        payload = ActivitiesResponse(activities=[reply.to_wire() for reply in replies])
        return JSONResponse(status_code=200, content=payload.model_dump())
    return Response(status_code=201)


@app.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Liveness probe."""
    runtime = getattr(request.app.state, "runtime", None)
    config: WeatherBotConfig | None = getattr(request.app.state, "config", None)
    city = config.weather.city_name if config else None

    if not runtime:
        return HealthResponse(status="starting", version=__version__, city=city)

    components = {"runtime": ComponentStatus(status="healthy")}
    if getattr(runtime, "storage", None) is None:
        components["storage"] = ComponentStatus(status="unhealthy", detail="not opened")
    else:
        components["storage"] = ComponentStatus(status="healthy")

    status: HealthStatus = (
        "healthy" if all(c.status == "healthy" for c in components.values()) else "degraded"
    )
    return HealthResponse(status=status, version=__version__, city=city, components=components)


@app.get("/ready", response_model=ReadinessResponse)
async def readiness_check(request: Request) -> ReadinessResponse:
    """Readiness probe."""
    runtime = getattr(request.app.state, "runtime", None)

    if not runtime:
        return ReadinessResponse(
            ready=False, message="Runtime not open", checks={"runtime": False}
        )

    return ReadinessResponse(ready=True, message="Service is ready", checks={"runtime": True})


@app.get("/version", response_model=VersionResponse)
def get_version() -> VersionResponse:
    return VersionResponse.parse(__version__)


def create_app(config: WeatherBotConfig | None = None) -> FastAPI:
    """Return the app, preloading ``config`` so the lifespan skips file lookup."""
    if config:
        app.state.config = config
    return app
