"""Weather provider client, payload models and cache."""

from weatherbot.weather.cache import WeatherCache, WeatherReport
from weatherbot.weather.client import OpenWeatherClient
from weatherbot.weather.models import (
    Forecast,
    ForecastEntry,
    WeatherCondition,
    WeatherSnapshot,
    kelvin_to_fahrenheit,
    parse_forecast,
    parse_snapshot,
)

__all__ = [
    "OpenWeatherClient",
    "WeatherCache",
    "WeatherReport",
    "WeatherSnapshot",
    "WeatherCondition",
    "Forecast",
    "ForecastEntry",
    "kelvin_to_fahrenheit",
    "parse_snapshot",
    "parse_forecast",
]
