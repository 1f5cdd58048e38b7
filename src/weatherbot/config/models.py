"""Configuration models for WeatherBot."""

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from weatherbot.config.responses import ResponsesConfig


class LuisConfig(BaseModel):
    """Hosted intent recognizer (LUIS) configuration."""

    app_id: str | None = Field(default=None, description="LUIS application id")
    endpoint_key: str | None = Field(default=None, description="Subscription/endpoint key")
    endpoint: str | None = Field(
        default=None, description="Full endpoint URL, e.g. https://westus.api.cognitive.microsoft.com"
    )
    region: str = Field(default="westus", description="Region used when no endpoint is set")
    verbose: bool = Field(default=True, description="Ask LUIS for all intent scores")

    @property
    def resolved_endpoint(self) -> str:
        """Endpoint URL, derived from the region when not given explicitly."""
        if self.endpoint:
            return self.endpoint.rstrip("/")
        if self.region.startswith("https://"):
            return self.region.rstrip("/")
        return f"https://{self.region}.api.cognitive.microsoft.com"


class WeatherConfig(BaseModel):
    """Weather provider (OpenWeatherMap) configuration."""

    api_key: str | None = Field(default=None, description="OpenWeatherMap APPID")
    base_url: str = Field(default="https://api.openweathermap.org/data/2.5")
    city_id: int = Field(default=5809844, description="OpenWeatherMap city id (Seattle)")
    city_name: str = Field(default="Seattle", description="City name used in messages")
    cache_ttl_seconds: float = Field(
        default=600, gt=0, description="How long fetched weather stays fresh"
    )
    cache_max_cities: int = Field(default=16, ge=1)
    http_timeout_seconds: float = Field(default=10.0, gt=0)


class StorageConfig(BaseModel):
    """State storage configuration."""

    backend: Literal["memory", "sqlite"] = Field(default="memory")
    path: str | None = Field(default=None, description="SQLite file path")

    @model_validator(mode="after")
    def _sqlite_needs_path(self) -> "StorageConfig":
        if self.backend == "sqlite" and not self.path:
            raise ValueError("storage.path is required when backend is 'sqlite'")
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    file: str | None = Field(default=None, description="Optional rotating JSON log file")


class WeatherBotConfig(BaseModel):
    """Root configuration."""

    luis: LuisConfig = Field(default_factory=LuisConfig)
    weather: WeatherConfig = Field(default_factory=WeatherConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    responses: ResponsesConfig = Field(default_factory=ResponsesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
