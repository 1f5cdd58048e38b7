"""WeatherBot - a Bot Framework weather bot.

Classifies utterances with a hosted LUIS application, collects the user's
name and city in a greeting dialog, and answers questions about today's
weather and the coming days from cached OpenWeatherMap data.

Quick start:
    from weatherbot import RuntimeLoop
    from weatherbot.config.loader import ConfigLoader

    async with RuntimeLoop(ConfigLoader.load("weatherbot.yaml")) as runtime:
        replies = await runtime.process_activity(activity)
"""

__version__ = "0.1.0"

from weatherbot.bot import WeatherBot
from weatherbot.config import WeatherBotConfig
from weatherbot.core.errors import (
    ChannelError,
    ConfigError,
    DialogError,
    RecognizerError,
    StorageError,
    WeatherBotError,
    WeatherPayloadError,
    WeatherProviderError,
)
from weatherbot.runtime.loop import RuntimeLoop

__all__ = [
    "__version__",
    "WeatherBot",
    "WeatherBotConfig",
    "RuntimeLoop",
    "WeatherBotError",
    "ConfigError",
    "RecognizerError",
    "WeatherProviderError",
    "WeatherPayloadError",
    "StorageError",
    "DialogError",
    "ChannelError",
]
