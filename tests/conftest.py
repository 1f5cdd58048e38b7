"""Shared fixtures for WeatherBot tests.

The recognizer and the weather provider are replaced by in-process fakes so
tests run without LUIS or OpenWeatherMap. ``TODAY`` pins the date used to
resolve day names; it is a Monday.
"""

import pytest

from tests.factories import TODAY
from tests.mocks import FakeRecognizer, FakeWeatherClient
from weatherbot.bot import WeatherBot
from weatherbot.config.models import WeatherBotConfig
from weatherbot.core.activity import Activity
from weatherbot.core.activity_sink import BufferedActivitySink
from weatherbot.core.state import ConversationState, UserState
from weatherbot.core.storage import MemoryStorage
from weatherbot.core.turn_context import TurnContext
from weatherbot.weather.cache import WeatherCache



@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def conversation_state(storage) -> ConversationState:
    return ConversationState(storage)


@pytest.fixture
def user_state(storage) -> UserState:
    return UserState(storage)


@pytest.fixture
def recognizer() -> FakeRecognizer:
    return FakeRecognizer()


@pytest.fixture
def weather_client() -> FakeWeatherClient:
    return FakeWeatherClient()


@pytest.fixture
def weather_cache(weather_client) -> WeatherCache:
    return WeatherCache(weather_client, ttl_seconds=600)


@pytest.fixture
def bot_config() -> WeatherBotConfig:
    return WeatherBotConfig()


@pytest.fixture
def bot(conversation_state, user_state, recognizer, weather_cache, bot_config) -> WeatherBot:
    return WeatherBot(
        conversation_state,
        user_state,
        recognizer,
        weather_cache,
        config=bot_config,
        today=lambda: TODAY,
    )


@pytest.fixture
def sink() -> BufferedActivitySink:
    return BufferedActivitySink()


@pytest.fixture
def run_turn(bot, sink):
    """Run one activity through the bot and return the replies it sent."""

    async def _run(activity: Activity) -> list[Activity]:
        sink.clear()
        await bot.on_turn(TurnContext(activity, sink))
        return list(sink.activities)

    return _run
