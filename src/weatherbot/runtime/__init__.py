"""Runtime module for WeatherBot."""

from weatherbot.runtime.adapter import BotAdapter
from weatherbot.runtime.connector import ConnectorActivitySink, ConnectorClient
from weatherbot.runtime.loop import RuntimeLoop

__all__ = ["BotAdapter", "ConnectorClient", "ConnectorActivitySink", "RuntimeLoop"]
