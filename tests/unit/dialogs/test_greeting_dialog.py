"""Tests for the greeting dialog."""

import pytest

from tests.factories import make_activity
from weatherbot.core.activity_sink import BufferedActivitySink
from weatherbot.core.errors import ConfigError
from weatherbot.core.turn_context import TurnContext
from weatherbot.dialogs import (
    GREETING_DIALOG,
    DialogSet,
    DialogState,
    DialogTurnStatus,
    GreetingDialog,
    UserProfile,
)


class GreetingHarness:
    """Runs message turns through a dialog set holding only the greeting dialog."""

    def __init__(self, conversation_state, user_state):
        self.conversation_state = conversation_state
        self.user_state = user_state
        self.profile = user_state.create_property("userProfileProperty", UserProfile)
        self.dialogs = DialogSet(conversation_state.create_property("dialogState", DialogState))
        self.dialogs.add(GreetingDialog(GREETING_DIALOG, self.profile))

    async def turn(self, text: str, profile: UserProfile | None = None):
        sink = BufferedActivitySink()
        turn_context = TurnContext(make_activity(text), sink)
        if profile is not None:
            await self.profile.set(turn_context, profile)
        dc = await self.dialogs.create_context(turn_context)
        result = await dc.continue_dialog()
        if result.status == DialogTurnStatus.EMPTY:
            result = await dc.begin_dialog(GREETING_DIALOG)
        stored = await self.profile.get(turn_context)
        await self.conversation_state.save_changes(turn_context)
        await self.user_state.save_changes(turn_context)
        return result, sink.texts, stored


@pytest.fixture
def harness(conversation_state, user_state) -> GreetingHarness:
    return GreetingHarness(conversation_state, user_state)


def test_requires_profile_accessor():
    with pytest.raises(ConfigError, match="user_profile_accessor"):
        GreetingDialog(GREETING_DIALOG, None)


@pytest.mark.asyncio
async def test_asks_for_name_then_city(harness):
    # Act
    _, first, _ = await harness.turn("hi")
    _, second, _ = await harness.turn("maria")
    result, third, profile = await harness.turn("seattle")

    # Assert
    assert first == ["What is your name?"]
    assert second == ["Hello Maria, what city do you live in?"]
    assert third == ["Hi Maria, from Seattle, nice to meet you!"]
    assert result.status == DialogTurnStatus.COMPLETE
    assert profile == UserProfile(name="Maria", city="Seattle")


@pytest.mark.asyncio
async def test_short_name_is_rejected(harness):
    await harness.turn("hi")

    result, texts, profile = await harness.turn("al")

    assert result.status == DialogTurnStatus.WAITING
    assert texts == ["Names need to be at least 3 characters long."]
    assert profile.name is None


@pytest.mark.asyncio
async def test_short_city_is_rejected(harness):
    await harness.turn("hi")
    await harness.turn("maria")

    result, texts, profile = await harness.turn("  ny ")

    assert result.status == DialogTurnStatus.WAITING
    assert texts == ["City names needs to be at least 3 characters long."]
    assert profile.city is None


@pytest.mark.asyncio
async def test_name_is_trimmed(harness):
    await harness.turn("hi")

    _, texts, profile = await harness.turn("   jo ann  ")

    assert profile.name == "Jo ann"
    assert texts == ["Hello Jo ann, what city do you live in?"]


@pytest.mark.asyncio
async def test_known_name_is_not_asked_again(harness):
    _, texts, _ = await harness.turn("hi", profile=UserProfile(name="Maria"))

    assert texts == ["Hello Maria, what city do you live in?"]


@pytest.mark.asyncio
async def test_complete_profile_greets_immediately(harness):
    result, texts, _ = await harness.turn("hi", profile=UserProfile(name="Maria", city="Seattle"))

    assert texts == ["Hi Maria, from Seattle, nice to meet you!"]
    assert result.status == DialogTurnStatus.COMPLETE
