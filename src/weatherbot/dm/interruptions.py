"""Interruption handlers - answer direct questions mid-dialog.

Each handler reacts to a single intent. ``INTERRUPTION_HANDLERS`` maps the
intent to its handler; intents without an entry do not interrupt the active
dialog.
"""

import calendar
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Protocol

from weatherbot.config.responses import ResponsesConfig
from weatherbot.core.activity import Activity, Attachment
from weatherbot.core.turn_context import TurnContext
from weatherbot.dialogs.context import DialogContext
from weatherbot.nlu.models import Intent, IntentResult
from weatherbot.nlu.timex import resolve_date, week_from_today
from weatherbot.weather.cache import WeatherCache
from weatherbot.weather.models import WeatherSnapshot

logger = logging.getLogger(__name__)

FORECAST_HOUR = time(12, 0)


@dataclass
class InterruptionContext:
    """Services the handlers draw on."""

    weather: WeatherCache
    city_id: int
    responses: ResponsesConfig = field(default_factory=ResponsesConfig)
    today: Callable[[], date] = date.today


class InterruptionHandler(Protocol):
    """Handles one interrupting intent by sending replies."""

    async def handle(
        self, dc: DialogContext, result: IntentResult, context: InterruptionContext
    ) -> None: ...


def condition_reply(snapshot: WeatherSnapshot, responses: ResponsesConfig) -> Activity:
    """Message carrying the image for the snapshot's weather category, if any."""
    image = responses.condition_images.get(snapshot.condition.main)
    if image is None:
        return Activity.create_message()
    return Activity.create_message(
        attachments=[
            Attachment(name=image.name, content_type=image.content_type, content_url=image.content_url)
        ]
    )


async def send_report(
    turn_context: TurnContext, snapshot: WeatherSnapshot, summary: str, responses: ResponsesConfig
) -> None:
    await turn_context.send_activity(summary)
    await turn_context.send_activity(
        responses.temperature.format(temperature=snapshot.temperature_f)
    )
    await turn_context.send_activity(condition_reply(snapshot, responses))


class WeatherTodayHandler:
    """Reports the current conditions."""

    async def handle(
        self, dc: DialogContext, result: IntentResult, context: InterruptionContext
    ) -> None:
        report = await context.weather.get(context.city_id)
        current = report.current
        summary = context.responses.weather_today.format(
            description=current.condition.description
        )
        await send_report(dc.context, current, summary, context.responses)


class WeatherForecastHandler:
    """Reports the forecast for a day within the coming week."""

    async def handle(
        self, dc: DialogContext, result: IntentResult, context: InterruptionContext
    ) -> None:
        target = self._target_date(result, context)
        if target is None:
            logger.debug("Forecast date could not be resolved")
            await dc.context.send_activity(context.responses.forecast_unavailable)
            return

        report = await context.weather.get(context.city_id)
        entry = report.forecast.find(datetime.combine(target, FORECAST_HOUR))
        if entry is None:
            logger.debug(f"No forecast slot for {target.isoformat()} at noon")
            await dc.context.send_activity(context.responses.forecast_unavailable)
            return

        summary = context.responses.weather_on_day.format(
            day=calendar.day_name[target.weekday()],
            description=entry.condition.description,
        )
        await send_report(dc.context, entry, summary, context.responses)

    @staticmethod
    def _target_date(result: IntentResult, context: InterruptionContext) -> date | None:
        entity = result.first_entity("datetime")
        if not isinstance(entity, dict) or not entity.get("timex"):
            return None
        timex = str(entity["timex"][0])
        return resolve_date(timex, week_from_today(context.today()))


class CancelHandler:
    """Clears the dialog stack."""

    async def handle(
        self, dc: DialogContext, result: IntentResult, context: InterruptionContext
    ) -> None:
        if dc.active_dialog is not None:
            await dc.cancel_all_dialogs()
            await dc.context.send_activity(context.responses.cancelled)
        else:
            await dc.context.send_activity(context.responses.nothing_to_cancel)


class HelpHandler:
    async def handle(
        self, dc: DialogContext, result: IntentResult, context: InterruptionContext
    ) -> None:
        for message in context.responses.help:
            await dc.context.send_activity(message)


# Registry of handlers by intent
INTERRUPTION_HANDLERS: dict[Intent, InterruptionHandler] = {
    Intent.WEATHER_TODAY: WeatherTodayHandler(),
    Intent.WEATHER_LATER: WeatherForecastHandler(),
    Intent.CANCEL: CancelHandler(),
    Intent.HELP: HelpHandler(),
}


async def check_interruption(
    dc: DialogContext, result: IntentResult, context: InterruptionContext
) -> bool:
    """Answer the utterance directly if its top intent interrupts dialogs.

    Returns True when a handler ran.
    """
    handler = INTERRUPTION_HANDLERS.get(result.intent)
    if handler is None:
        return False
    logger.info(f"Handling interruption: {result.intent.value}")
    await handler.handle(dc, result, context)
    return True
