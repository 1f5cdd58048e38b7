"""Response bodies for the HTTP surface of the bot."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

HealthStatus = Literal["healthy", "starting", "degraded", "unhealthy"]


class ActivitiesResponse(BaseModel):
    """Replies returned inline for channels that expect them."""

    activities: list[dict[str, Any]] = Field(
        default_factory=list, description="Reply activities in Bot Framework wire format"
    )


class ComponentStatus(BaseModel):
    status: Literal["healthy", "degraded", "unhealthy"]
    detail: str | None = None


class HealthResponse(BaseModel):
    """Liveness body; ``city`` is the forecast city of the loaded config."""

    status: HealthStatus
    version: str
    city: str | None = None
    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())
    components: dict[str, ComponentStatus] = Field(default_factory=dict)


class ReadinessResponse(BaseModel):
    ready: bool
    message: str
    checks: dict[str, bool] | None = None


class VersionResponse(BaseModel):
    version: str
    major: int
    minor: int
    patch: str = Field(description="Patch component, suffix included")

    @classmethod
    def parse(cls, version: str) -> "VersionResponse":
        """Split a ``major.minor.patch`` string; missing numeric parts become 0."""
        parts = version.split(".")

        def number(index: int) -> int:
            return int(parts[index]) if len(parts) > index and parts[index].isdigit() else 0

        patch = parts[2] if len(parts) > 2 else "0"
        return cls(version=version, major=number(0), minor=number(1), patch=patch)
