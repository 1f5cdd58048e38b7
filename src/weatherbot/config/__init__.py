"""Configuration module for WeatherBot."""

from weatherbot.config.models import (
    LoggingConfig,
    LuisConfig,
    StorageConfig,
    WeatherBotConfig,
    WeatherConfig,
)
from weatherbot.config.responses import ConditionImage, ResponsesConfig

__all__ = [
    "WeatherBotConfig",
    "LuisConfig",
    "WeatherConfig",
    "StorageConfig",
    "LoggingConfig",
    "ResponsesConfig",
    "ConditionImage",
]
