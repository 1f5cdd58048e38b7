"""RuntimeLoop: wires storage, recognizer, weather data and the bot from config."""

import logging
from collections.abc import Callable
from datetime import date
from typing import Any

import httpx

from weatherbot.bot import WeatherBot
from weatherbot.config.models import WeatherBotConfig
from weatherbot.core.activity import Activity
from weatherbot.core.activity_sink import ActivitySink, BufferedActivitySink
from weatherbot.core.state import ConversationState, UserState
from weatherbot.core.storage import Storage, create_storage
from weatherbot.nlu.recognizer import IntentRecognizer, LuisRecognizer
from weatherbot.runtime.adapter import BotAdapter
from weatherbot.runtime.connector import ConnectorActivitySink, ConnectorClient
from weatherbot.weather.cache import WeatherCache
from weatherbot.weather.client import OpenWeatherClient

logger = logging.getLogger(__name__)


class RuntimeLoop:
    """Owns everything a running bot needs for its lifetime.

    Collaborators not passed in are built from the config on entry and
    closed on exit.
    """

    def __init__(
        self,
        config: WeatherBotConfig,
        storage: Storage | None = None,
        recognizer: IntentRecognizer | None = None,
        weather_client: OpenWeatherClient | None = None,
        connector: ConnectorClient | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.config = config
        self._storage = storage
        self._recognizer = recognizer
        self._weather_client = weather_client
        self._connector = connector
        self._today = today
        self._http: httpx.AsyncClient | None = None

        self.storage: Storage | None = None
        self.bot: WeatherBot | None = None
        self.adapter: BotAdapter | None = None
        self.connector: ConnectorClient | None = None
        self.weather_cache: WeatherCache | None = None

    async def __aenter__(self) -> "RuntimeLoop":
        """Build storage, state, recognizer, weather cache, bot and adapter."""
        self._http = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout=self.config.weather.http_timeout_seconds)
        )
        try:
            self.storage = self._storage or create_storage(
                self.config.storage.backend, path=self.config.storage.path
            )
            conversation_state = ConversationState(self.storage)
            user_state = UserState(self.storage)

            recognizer = self._recognizer or LuisRecognizer(self.config.luis, self._http)
            weather_client = self._weather_client or OpenWeatherClient(
                self.config.weather, self._http
            )
            self.weather_cache = WeatherCache(
                weather_client,
                ttl_seconds=self.config.weather.cache_ttl_seconds,
                maxsize=self.config.weather.cache_max_cities,
            )

            self.bot = WeatherBot(
                conversation_state,
                user_state,
                recognizer,
                self.weather_cache,
                config=self.config,
                today=self._today,
            )
            self.adapter = BotAdapter(conversation_state, self.config.responses)
            self.connector = self._connector or ConnectorClient(self._http)
        except Exception:
            await self._http.aclose()
            self._http = None
            raise

        logger.info("RuntimeLoop initialized")
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Close storage and HTTP connections."""
        if self.storage is not None:
            await self.storage.close()
        if self._http is not None:
            await self._http.aclose()
            self._http = None
        self.bot = None
        self.adapter = None

    async def process_activity(
        self, activity: Activity, sink: ActivitySink | None = None
    ) -> list[Activity]:
        """Run one turn.

        Returns the replies when the channel expects them in the response
        (or has no service URL); otherwise replies are posted back to the
        channel and an empty list is returned. An explicit ``sink`` takes
        precedence over both.
        """
        if self.bot is None or self.adapter is None:
            raise RuntimeError("RuntimeLoop not initialized. Use 'async with' context.")

        if sink is not None:
            await self.adapter.process_activity(activity, self.bot.on_turn, sink)
            return []

        if activity.expects_replies():
            buffer = BufferedActivitySink()
            await self.adapter.process_activity(activity, self.bot.on_turn, buffer)
            return buffer.activities

        await self.adapter.process_activity(
            activity, self.bot.on_turn, ConnectorActivitySink(self.connector)
        )
        return []
