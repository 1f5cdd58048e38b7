"""Tests for TurnContext and BufferedActivitySink."""

import pytest

from tests.factories import make_activity
from weatherbot.core.activity import Activity
from weatherbot.core.activity_sink import BufferedActivitySink
from weatherbot.core.turn_context import TurnContext


class TestTurnContext:
    @pytest.mark.asyncio
    async def test_send_text_creates_reply(self):
        # Arrange
        sink = BufferedActivitySink()
        incoming = make_activity("hello")
        ctx = TurnContext(incoming, sink)

        # Act
        reply = await ctx.send_activity("Hi there")

        # Assert
        assert sink.texts == ["Hi there"]
        assert reply.reply_to_id == incoming.id
        assert reply.recipient.id == "user-1"

    @pytest.mark.asyncio
    async def test_responded_tracks_messages(self):
        ctx = TurnContext(make_activity("hello"), BufferedActivitySink())
        assert not ctx.responded

        await ctx.send_activity("one")

        assert ctx.responded

    @pytest.mark.asyncio
    async def test_trace_does_not_count_as_response(self):
        ctx = TurnContext(make_activity("hello"), BufferedActivitySink())

        await ctx.send_activity(Activity.create_trace("debug", value=1))

        assert not ctx.responded

    @pytest.mark.asyncio
    async def test_send_activities_preserves_order(self):
        sink = BufferedActivitySink()
        ctx = TurnContext(make_activity("hello"), sink)

        await ctx.send_activities(["a", Activity.create_message("b"), "c"])

        assert sink.texts == ["a", "b", "c"]


class TestBufferedActivitySink:
    @pytest.mark.asyncio
    async def test_clear_empties_buffer(self):
        # Arrange
        sink = BufferedActivitySink()
        await sink.send(Activity.create_message("x"))

        # Act
        sink.clear()

        # Assert
        assert sink.activities == []
