"""Weather payload models.

Validated views over the OpenWeatherMap current-conditions and 5 day / 3 hour
forecast payloads. Only the fields the bot reads are declared; everything
else in the payload is ignored.
"""

import math
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from weatherbot.core.errors import WeatherPayloadError


def kelvin_to_fahrenheit(kelvin: float) -> int:
    """Convert Kelvin to whole degrees Fahrenheit.

    Uses 273 as the 0 °C reference and rounds halves up, so results match
    the figures the bot has always reported.
    """
    return math.floor((9 / 5) * (kelvin - 273) + 32 + 0.5)


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class WeatherCondition(_Payload):
    """One entry of the provider's ``weather`` array."""

    main: str = Field(description="Weather category, e.g. Clouds, Rain, Clear")
    description: str


class MainReadings(_Payload):
    temp: float = Field(description="Temperature in Kelvin")


class WeatherSnapshot(_Payload):
    """Current conditions for a city."""

    main: MainReadings
    weather: list[WeatherCondition] = Field(min_length=1)
    name: str | None = None

    @property
    def condition(self) -> WeatherCondition:
        return self.weather[0]

    @property
    def temperature_f(self) -> int:
        return kelvin_to_fahrenheit(self.main.temp)


class ForecastEntry(WeatherSnapshot):
    """A single 3-hour forecast slot."""

    dt_txt: datetime = Field(description="Slot start, naive local time")


class Forecast(_Payload):
    """Ordered list of forecast slots."""

    entries: list[ForecastEntry] = Field(alias="list")

    def find(self, when: datetime) -> ForecastEntry | None:
        """Return the slot whose timestamp equals ``when`` exactly."""
        match = None
        for entry in self.entries:
            if entry.dt_txt == when:
                match = entry
        return match


def parse_snapshot(payload: Any) -> WeatherSnapshot:
    """Validate a current-conditions payload.

    Raises:
        WeatherPayloadError: If required fields are missing or malformed
    """
    try:
        return WeatherSnapshot.model_validate(payload)
    except ValidationError as e:
        raise WeatherPayloadError(f"Malformed current weather payload: {e}") from e


def parse_forecast(payload: Any) -> Forecast:
    """Validate a forecast payload.

    Raises:
        WeatherPayloadError: If required fields are missing or malformed
    """
    try:
        return Forecast.model_validate(payload)
    except ValidationError as e:
        raise WeatherPayloadError(f"Malformed forecast payload: {e}") from e
