"""OpenWeatherMap HTTP client."""

import logging
from typing import Any

import httpx

from weatherbot.config.models import WeatherConfig
from weatherbot.core.errors import ConfigError, WeatherPayloadError, WeatherProviderError
from weatherbot.weather.models import Forecast, WeatherSnapshot, parse_forecast, parse_snapshot

logger = logging.getLogger(__name__)


class OpenWeatherClient:
    """Fetches current conditions and the 5 day / 3 hour forecast for a city id.

    Requests are made once; there is no retry or backoff.
    """

    def __init__(self, config: WeatherConfig, http_client: httpx.AsyncClient | None = None):
        if not config.api_key:
            raise ConfigError(
                "Missing weather provider key. Set weather.api_key (OPENWEATHER_API_KEY)."
            )
        self._config = config
        self._base_url = config.base_url.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout=config.http_timeout_seconds)
        )

    async def _get(self, path: str, params: dict[str, Any]) -> Any:
        url = f"{self._base_url}/{path.lstrip('/')}"
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise WeatherProviderError(f"Weather request to {path} failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise WeatherPayloadError(f"Weather response from {path} is not JSON") from e

    def _params(self, city_id: int) -> dict[str, Any]:
        return {"id": city_id, "APPID": self._config.api_key}

    async def fetch_current(self, city_id: int | None = None) -> WeatherSnapshot:
        city = city_id or self._config.city_id
        logger.debug(f"Fetching current weather for city {city}")
        return parse_snapshot(await self._get("weather", self._params(city)))

    async def fetch_forecast(self, city_id: int | None = None) -> Forecast:
        city = city_id or self._config.city_id
        logger.debug(f"Fetching forecast for city {city}")
        return parse_forecast(await self._get("forecast", self._params(city)))

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "OpenWeatherClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
