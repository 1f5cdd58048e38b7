"""Tests for connector delivery."""

import httpx
import pytest

from weatherbot.core.activity import Activity, ConversationAccount
from weatherbot.core.errors import ChannelError
from weatherbot.runtime.connector import ConnectorActivitySink, ConnectorClient


def reply(**overrides) -> Activity:
    fields = {
        "text": "hello",
        "service_url": "https://smba.test/amer/",
        "conversation": ConversationAccount(id="conv-1"),
        "reply_to_id": "act-7",
    }
    return Activity(**{**fields, **overrides})


class TestActivitiesUrl:
    def test_reply_url(self):
        assert ConnectorClient.activities_url(reply()) == (
            "https://smba.test/amer/v3/conversations/conv-1/activities/act-7"
        )

    def test_new_activity_url(self):
        assert ConnectorClient.activities_url(reply(reply_to_id=None)) == (
            "https://smba.test/amer/v3/conversations/conv-1/activities"
        )

    def test_missing_service_url(self):
        with pytest.raises(ChannelError, match="service_url"):
            ConnectorClient.activities_url(reply(service_url=None))

    def test_missing_conversation(self):
        with pytest.raises(ChannelError, match="conversation"):
            ConnectorClient.activities_url(reply(conversation=None))


@pytest.mark.asyncio
async def test_sink_posts_camel_case_activity():
    # Arrange
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"id": "sent-1"})

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    sink = ConnectorActivitySink(ConnectorClient(http))

    # Act
    await sink.send(reply())

    # Assert
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/amer/v3/conversations/conv-1/activities/act-7"
    body = httpx.Response(200, content=request.content).json()
    assert body["text"] == "hello"
    assert body["replyToId"] == "act-7"
    assert body["serviceUrl"] == "https://smba.test/amer/"
    await http.aclose()


@pytest.mark.asyncio
async def test_http_failure_is_channel_error():
    http = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(502)))
    client = ConnectorClient(http)

    with pytest.raises(ChannelError, match="failed"):
        await client.send(reply())
    await http.aclose()


@pytest.mark.asyncio
async def test_injected_client_is_not_closed():
    http = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(201)))
    client = ConnectorClient(http)

    await client.aclose()

    assert not http.is_closed
    await http.aclose()
