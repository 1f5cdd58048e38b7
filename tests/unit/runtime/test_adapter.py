"""Tests for BotAdapter turn error handling."""

from unittest.mock import AsyncMock, patch

import pytest

from tests.factories import make_activity
from weatherbot.core.activity import ActivityTypes
from weatherbot.core.activity_sink import BufferedActivitySink
from weatherbot.core.errors import StorageError
from weatherbot.runtime.adapter import TURN_ERROR_VALUE_TYPE, BotAdapter


async def failing_logic(turn_context):
    await turn_context.send_activity("partial reply")
    raise ValueError("weather exploded")


@pytest.mark.asyncio
async def test_successful_turn_passes_through(conversation_state):
    # Arrange
    adapter = BotAdapter(conversation_state)
    sink = BufferedActivitySink()

    async def logic(turn_context):
        await turn_context.send_activity("hello")

    # Act
    turn_context = await adapter.process_activity(make_activity("hi"), logic, sink)

    # Assert
    assert sink.texts == ["hello"]
    assert turn_context.responded is True


@pytest.mark.asyncio
async def test_error_sends_apology(conversation_state):
    adapter = BotAdapter(conversation_state)
    sink = BufferedActivitySink()

    with patch("weatherbot.runtime.adapter.logger") as mock_logger:
        await adapter.process_activity(make_activity("hi"), failing_logic, sink)

    assert sink.texts == ["partial reply", "The bot encountered an error or bug."]
    message = mock_logger.error.call_args.args[0]
    assert "weather exploded" in message
    assert message.startswith("[ERR-")
    assert mock_logger.error.call_args.kwargs["extra"]["exception_type"] == "ValueError"


@pytest.mark.asyncio
async def test_emulator_gets_trace(conversation_state):
    adapter = BotAdapter(conversation_state)
    sink = BufferedActivitySink()

    await adapter.process_activity(
        make_activity("hi", channel_id="emulator"), failing_logic, sink
    )

    trace = sink.activities[-1]
    assert trace.type == ActivityTypes.TRACE.value
    assert trace.name == "OnTurnError Trace"
    assert trace.label == "TurnError"
    assert trace.value == "weather exploded"
    assert trace.value_type == TURN_ERROR_VALUE_TYPE


@pytest.mark.asyncio
async def test_other_channels_get_no_trace(conversation_state):
    adapter = BotAdapter(conversation_state)
    sink = BufferedActivitySink()

    await adapter.process_activity(make_activity("hi", channel_id="webchat"), failing_logic, sink)

    assert all(activity.type == ActivityTypes.MESSAGE.value for activity in sink.activities)


@pytest.mark.asyncio
async def test_error_deletes_conversation_state(conversation_state, storage):
    # Arrange
    key = "test/conversations/conv-1"
    await storage.write({key: {"dialogState": {"dialog_stack": [{"id": "greetingDialog"}]}}})
    adapter = BotAdapter(conversation_state)

    # Act
    await adapter.process_activity(make_activity("hi"), failing_logic, BufferedActivitySink())

    # Assert
    assert await storage.read([key]) == {}


@pytest.mark.asyncio
async def test_state_delete_failure_is_logged(conversation_state):
    conversation_state.delete = AsyncMock(side_effect=StorageError("disk gone"))
    adapter = BotAdapter(conversation_state)
    sink = BufferedActivitySink()

    with patch("weatherbot.runtime.adapter.logger") as mock_logger:
        await adapter.process_activity(make_activity("hi"), failing_logic, sink)

    assert sink.texts[-1] == "The bot encountered an error or bug."
    assert "Could not clear conversation state" in mock_logger.warning.call_args.args[0]


@pytest.mark.asyncio
async def test_without_conversation_state():
    adapter = BotAdapter()
    sink = BufferedActivitySink()

    await adapter.process_activity(make_activity("hi"), failing_logic, sink)

    assert sink.texts[-1] == "The bot encountered an error or bug."
