"""Weather cache with per-city freshness.

Reports are keyed by city id and expire after a configurable TTL. A member
joining a conversation forces a refresh; weather questions read the cached
report and fetch only on a miss or after expiry.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from cachetools import TTLCache

from weatherbot.weather.client import OpenWeatherClient
from weatherbot.weather.models import Forecast, WeatherSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeatherReport:
    """Current conditions and forecast fetched together."""

    city_id: int
    current: WeatherSnapshot
    forecast: Forecast
    fetched_at: datetime


class WeatherCache:
    """TTL cache of weather reports in front of the provider client."""

    def __init__(
        self,
        client: OpenWeatherClient,
        ttl_seconds: float = 600,
        maxsize: int = 16,
        timer: Callable[[], float] = time.monotonic,
    ):
        self._client = client
        self._reports: TTLCache[int, WeatherReport] = TTLCache(
            maxsize=maxsize, ttl=ttl_seconds, timer=timer
        )

    async def refresh(self, city_id: int) -> WeatherReport:
        """Fetch current conditions and forecast, replacing any cached report."""
        current = await self._client.fetch_current(city_id)
        forecast = await self._client.fetch_forecast(city_id)
        report = WeatherReport(
            city_id=city_id, current=current, forecast=forecast, fetched_at=datetime.now()
        )
        self._reports[city_id] = report
        logger.info(f"Weather for city {city_id} refreshed ({len(forecast.entries)} forecast slots)")
        return report

    async def get(self, city_id: int) -> WeatherReport:
        """Return a fresh report, fetching one if none is cached."""
        report = self._reports.get(city_id)
        if report is None:
            logger.debug(f"Weather cache miss for city {city_id}")
            report = await self.refresh(city_id)
        return report

    def peek(self, city_id: int) -> WeatherReport | None:
        """Return the cached report without fetching."""
        return self._reports.get(city_id)

    def invalidate(self, city_id: int | None = None) -> None:
        if city_id is None:
            self._reports.clear()
        else:
            self._reports.pop(city_id, None)
