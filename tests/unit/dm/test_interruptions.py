"""Tests for interruption handlers."""

from datetime import date

import pytest

from tests.factories import (
    TODAY,
    current_payload,
    forecast_entry,
    forecast_payload,
    make_activity,
    make_intent,
)
from tests.mocks import FakeWeatherClient
from weatherbot.config.responses import ResponsesConfig
from weatherbot.core.activity_sink import BufferedActivitySink
from weatherbot.core.turn_context import TurnContext
from weatherbot.dialogs import DialogSet, DialogState, PromptOptions, TextPrompt
from weatherbot.dm.interruptions import (
    INTERRUPTION_HANDLERS,
    InterruptionContext,
    check_interruption,
    condition_reply,
)
from weatherbot.nlu.models import Intent
from weatherbot.weather.cache import WeatherCache
from weatherbot.weather.models import parse_snapshot

WEDNESDAY = {"type": "date", "timex": ["XXXX-WXX-3"]}


@pytest.fixture
def interruptions(weather_cache) -> InterruptionContext:
    return InterruptionContext(weather=weather_cache, city_id=5809844, today=lambda: TODAY)


@pytest.fixture
def dialogs(conversation_state) -> DialogSet:
    dialogs = DialogSet(conversation_state.create_property("dialogState", DialogState))
    dialogs.add(TextPrompt("ask"))
    return dialogs


async def interrupt(dialogs, interruptions, result, with_active_dialog=False):
    sink = BufferedActivitySink()
    dc = await dialogs.create_context(TurnContext(make_activity(result.text), sink))
    if with_active_dialog:
        await dc.prompt("ask", PromptOptions(prompt="What is your name?"))
        sink.clear()
    handled = await check_interruption(dc, result, interruptions)
    return handled, sink.activities, dc


def test_registry_covers_interrupting_intents():
    assert set(INTERRUPTION_HANDLERS) == {
        Intent.WEATHER_TODAY,
        Intent.WEATHER_LATER,
        Intent.CANCEL,
        Intent.HELP,
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("intent", ["Greeting", "None", "BookFlight"])
async def test_other_intents_do_not_interrupt(dialogs, interruptions, intent):
    handled, replies, _ = await interrupt(dialogs, interruptions, make_intent(intent, text="x"))

    assert handled is False
    assert replies == []


class TestWeatherToday:
    @pytest.mark.asyncio
    async def test_reports_current_conditions(self, dialogs, interruptions, weather_client):
        # Act
        handled, replies, _ = await interrupt(
            dialogs, interruptions, make_intent("WeatherToday", text="how is the weather")
        )

        # Assert
        assert handled is True
        assert [reply.text for reply in replies[:2]] == [
            "The weather for today is showing that there should be broken clouds.",
            "The temperature should be around 81 degrees fahrenheit.",
        ]
        image = replies[2].attachments[0]
        assert image.name == "clouds"
        assert image.content_type == "image/png"
        assert weather_client.current_calls == 1

    @pytest.mark.asyncio
    async def test_uses_cached_report(self, dialogs, interruptions, weather_client):
        await interrupt(dialogs, interruptions, make_intent("WeatherToday"))
        await interrupt(dialogs, interruptions, make_intent("WeatherToday"))

        assert weather_client.current_calls == 1


class TestWeatherForecast:
    @pytest.mark.asyncio
    async def test_reports_noon_slot_for_named_day(self, dialogs, interruptions):
        # Act
        handled, replies, _ = await interrupt(
            dialogs,
            interruptions,
            make_intent("WeatherLater", text="what about wednesday", datetime=WEDNESDAY),
        )

        # Assert
        assert handled is True
        assert replies[0].text == (
            "The weather for Wednesday is showing that there should be light rain."
        )
        assert replies[1].text == "The temperature should be around 63 degrees fahrenheit."
        assert replies[2].attachments[0].name == "rain"

    @pytest.mark.asyncio
    async def test_thursday_uses_its_own_slot(self, dialogs, interruptions):
        _, replies, _ = await interrupt(
            dialogs,
            interruptions,
            make_intent("WeatherLater", datetime={"type": "date", "timex": ["XXXX-WXX-4"]}),
        )

        assert replies[0].text == "The weather for Thursday is showing that there should be clear sky."
        assert replies[2].attachments[0].name == "clear"

    @pytest.mark.asyncio
    async def test_day_without_noon_slot_apologizes(self, dialogs, interruptions):
        _, replies, _ = await interrupt(
            dialogs,
            interruptions,
            make_intent("WeatherLater", datetime={"type": "date", "timex": ["XXXX-WXX-6"]}),
        )

        assert [reply.text for reply in replies] == [
            "Sorry, I can only give you the weather for the next 5 days."
        ]

    @pytest.mark.asyncio
    async def test_missing_datetime_apologizes(self, dialogs, interruptions, weather_client):
        _, replies, _ = await interrupt(
            dialogs, interruptions, make_intent("WeatherLater", text="what about later")
        )

        assert [reply.text for reply in replies] == [
            "Sorry, I can only give you the weather for the next 5 days."
        ]
        assert weather_client.forecast_calls == 0

    @pytest.mark.asyncio
    async def test_unsupported_timex_apologizes(self, dialogs, interruptions):
        _, replies, _ = await interrupt(
            dialogs,
            interruptions,
            make_intent("WeatherLater", datetime={"type": "daterange", "timex": ["XXXX-WXX-WE"]}),
        )

        assert len(replies) == 1
        assert replies[0].text.startswith("Sorry")

    @pytest.mark.asyncio
    async def test_unknown_category_has_no_image(self, dialogs):
        client = FakeWeatherClient(
            forecast=forecast_payload(
                forecast_entry("2026-10-21 12:00:00", main="Snow", description="light snow")
            )
        )
        interruptions = InterruptionContext(
            weather=WeatherCache(client), city_id=1, today=lambda: TODAY
        )

        _, replies, _ = await interrupt(
            dialogs, interruptions, make_intent("WeatherLater", datetime=WEDNESDAY)
        )

        assert len(replies) == 3
        assert replies[2].attachments is None
        assert replies[2].text is None

    @pytest.mark.asyncio
    async def test_today_is_resolved_lazily(self, dialogs, weather_cache):
        days = iter([date(2026, 10, 19), date(2026, 10, 22)])
        interruptions = InterruptionContext(
            weather=weather_cache, city_id=1, today=lambda: next(days)
        )
        result = make_intent("WeatherLater", datetime=WEDNESDAY)

        _, first, _ = await interrupt(dialogs, interruptions, result)
        _, second, _ = await interrupt(dialogs, interruptions, result)

        assert first[0].text.startswith("The weather for Wednesday")
        # From Thursday, Wednesday is six days out and has no slot
        assert second[0].text.startswith("Sorry")


class TestCancel:
    @pytest.mark.asyncio
    async def test_cancels_active_dialog(self, dialogs, interruptions):
        handled, replies, dc = await interrupt(
            dialogs, interruptions, make_intent("Cancel", text="cancel"), with_active_dialog=True
        )

        assert handled is True
        assert [reply.text for reply in replies] == ["Ok.  I've cancelled our last activity."]
        assert dc.stack == []

    @pytest.mark.asyncio
    async def test_nothing_to_cancel(self, dialogs, interruptions):
        handled, replies, _ = await interrupt(
            dialogs, interruptions, make_intent("Cancel", text="cancel")
        )

        assert handled is True
        assert [reply.text for reply in replies] == ["I don't have anything to cancel."]


class TestHelp:
    @pytest.mark.asyncio
    async def test_sends_three_messages(self, dialogs, interruptions):
        handled, replies, dc = await interrupt(
            dialogs, interruptions, make_intent("Help", text="help"), with_active_dialog=True
        )

        assert handled is True
        assert [reply.text for reply in replies] == ResponsesConfig().help
        assert len(replies) == 3
        # Help leaves the active dialog in place
        assert dc.active_dialog.id == "ask"


def test_condition_reply_uses_configured_image():
    responses = ResponsesConfig()
    snapshot = parse_snapshot(current_payload(main="Clear", description="clear sky"))

    reply = condition_reply(snapshot, responses)

    assert reply.attachments[0].content_url == responses.condition_images["Clear"].content_url
