"""Outbound delivery of replies to a channel's service URL."""

import logging

import httpx

from weatherbot.core.activity import Activity
from weatherbot.core.activity_sink import ActivitySink
from weatherbot.core.errors import ChannelError

logger = logging.getLogger(__name__)


class ConnectorClient:
    """Posts activities to the Bot Framework connector REST API.

    Requests are unauthenticated.
    """

    def __init__(self, http_client: httpx.AsyncClient | None = None, timeout: float = 10.0):
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout=timeout))

    @staticmethod
    def activities_url(activity: Activity) -> str:
        if not activity.service_url:
            raise ChannelError("Cannot deliver activity without a service_url")
        if activity.conversation is None or not activity.conversation.id:
            raise ChannelError("Cannot deliver activity without a conversation id")

        url = f"{activity.service_url.rstrip('/')}/v3/conversations/{activity.conversation.id}/activities"
        if activity.reply_to_id:
            url = f"{url}/{activity.reply_to_id}"
        return url

    async def send(self, activity: Activity) -> None:
        url = self.activities_url(activity)
        try:
            response = await self._client.post(url, json=activity.to_wire())
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ChannelError(f"Delivering activity to {url} failed: {e}") from e
        logger.debug(f"Delivered {activity.type} activity to {url}")

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class ConnectorActivitySink(ActivitySink):
    """Sink that delivers each reply through a ConnectorClient."""

    def __init__(self, connector: ConnectorClient):
        self.connector = connector

    async def send(self, activity: Activity) -> None:
        await self.connector.send(activity)
