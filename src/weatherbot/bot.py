"""Turn dispatcher for the weather bot."""

import logging
from collections.abc import Callable
from datetime import date

from weatherbot.config.models import WeatherBotConfig
from weatherbot.core.activity import ActivityTypes
from weatherbot.core.errors import ConfigError
from weatherbot.core.state import ConversationState, UserState
from weatherbot.core.turn_context import TurnContext
from weatherbot.dialogs import (
    GREETING_DIALOG,
    DialogSet,
    DialogState,
    DialogTurnResult,
    DialogTurnStatus,
    GreetingDialog,
    UserProfile,
)
from weatherbot.dm.interruptions import InterruptionContext, check_interruption
from weatherbot.dm.profile import update_user_profile
from weatherbot.nlu.models import Intent
from weatherbot.nlu.recognizer import IntentRecognizer
from weatherbot.observability.logging import ContextLogger
from weatherbot.weather.cache import WeatherCache

logger = logging.getLogger(__name__)
context_logger = ContextLogger(__name__)

# State accessor property names
DIALOG_STATE_PROPERTY = "dialogState"
USER_PROFILE_PROPERTY = "userProfileProperty"


class WeatherBot:
    """Routes message and conversation-update activities.

    Messages go through the recognizer, the profile updater and the
    interruption handlers before the greeting dialog gets a turn. Members
    joining a conversation get fresh weather data and a welcome message.
    Conversation and user state are saved at the end of every turn.
    """

    def __init__(
        self,
        conversation_state: ConversationState,
        user_state: UserState,
        recognizer: IntentRecognizer,
        weather_cache: WeatherCache,
        config: WeatherBotConfig | None = None,
        today: Callable[[], date] = date.today,
    ):
        if conversation_state is None:
            raise ConfigError("Missing parameter. conversation_state is required")
        if user_state is None:
            raise ConfigError("Missing parameter. user_state is required")
        if recognizer is None:
            raise ConfigError("Missing parameter. recognizer is required")
        if weather_cache is None:
            raise ConfigError("Missing parameter. weather_cache is required")

        self.config = config or WeatherBotConfig()
        self.conversation_state = conversation_state
        self.user_state = user_state
        self.recognizer = recognizer
        self.weather_cache = weather_cache

        self.user_profile_accessor = user_state.create_property(USER_PROFILE_PROPERTY, UserProfile)
        self.dialog_state = conversation_state.create_property(DIALOG_STATE_PROPERTY, DialogState)

        self.dialogs = DialogSet(self.dialog_state)
        self.dialogs.add(GreetingDialog(GREETING_DIALOG, self.user_profile_accessor))

        self.interruptions = InterruptionContext(
            weather=weather_cache,
            city_id=self.config.weather.city_id,
            responses=self.config.responses,
            today=today,
        )

    async def on_turn(self, turn_context: TurnContext) -> None:
        activity_type = turn_context.activity.type
        if activity_type == ActivityTypes.MESSAGE:
            await self._on_message(turn_context)
        elif activity_type == ActivityTypes.CONVERSATION_UPDATE:
            await self._on_conversation_update(turn_context)
        else:
            logger.debug(f"Ignoring activity of type '{activity_type}'")

        await self.conversation_state.save_changes(turn_context)
        await self.user_state.save_changes(turn_context)

    async def _on_message(self, turn_context: TurnContext) -> None:
        log = context_logger.for_activity(turn_context.activity)
        dc = await self.dialogs.create_context(turn_context)

        result = await self.recognizer.recognize(turn_context)
        top_intent = result.intent
        log.debug(f"Top intent: {top_intent.value}")

        await update_user_profile(result, turn_context, self.user_profile_accessor)

        dialog_result = DialogTurnResult(DialogTurnStatus.EMPTY)
        interrupted = await check_interruption(dc, result, self.interruptions)
        if interrupted:
            if dc.active_dialog is not None:
                await dc.reprompt_dialog()
        else:
            dialog_result = await dc.continue_dialog()

        if turn_context.responded:
            return

        if dialog_result.status == DialogTurnStatus.EMPTY:
            if top_intent == Intent.GREETING:
                log.info("Starting greeting dialog")
                await dc.begin_dialog(GREETING_DIALOG)
            else:
                log.debug("No dialog handled the utterance, sending fallback")
                await turn_context.send_activity(self.config.responses.fallback)
        elif dialog_result.status in (DialogTurnStatus.WAITING, DialogTurnStatus.COMPLETE):
            pass
        else:
            log.warning(f"Dialog ended with status '{dialog_result.status.value}', clearing stack")
            await dc.cancel_all_dialogs()

    async def _on_conversation_update(self, turn_context: TurnContext) -> None:
        activity = turn_context.activity
        recipient_id = activity.recipient.id if activity.recipient else None
        for member in activity.members_added or []:
            if member.id == recipient_id:
                continue
            await self.weather_cache.refresh(self.config.weather.city_id)
            await turn_context.send_activity(
                self.config.responses.welcome.format(city=self.config.weather.city_name)
            )
