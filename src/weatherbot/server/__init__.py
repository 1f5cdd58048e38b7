"""WeatherBot Server Module.

Provides the FastAPI messaging endpoint for the weather bot.
"""

from weatherbot.server.api import app, create_app
from weatherbot.server.models import (
    ActivitiesResponse,
    HealthResponse,
    ReadinessResponse,
    VersionResponse,
)

__all__ = [
    "app",
    "create_app",
    "ActivitiesResponse",
    "HealthResponse",
    "ReadinessResponse",
    "VersionResponse",
]
