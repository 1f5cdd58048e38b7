"""Bot adapter: runs bot logic for an activity and handles turn failures."""

import logging
from collections.abc import Awaitable, Callable

from weatherbot.config.responses import ResponsesConfig
from weatherbot.core.activity import Activity
from weatherbot.core.activity_sink import ActivitySink
from weatherbot.core.errors import StorageError, create_error_reference
from weatherbot.core.state import ConversationState
from weatherbot.core.turn_context import TurnContext

logger = logging.getLogger(__name__)

BotLogic = Callable[[TurnContext], Awaitable[None]]

EMULATOR_CHANNEL = "emulator"
TURN_ERROR_VALUE_TYPE = "https://www.botframework.com/schemas/error"


class BotAdapter:
    """Creates the turn context, runs the bot and recovers from errors.

    Any exception escaping the bot logic is handled by ``on_turn_error``:
    the failure is logged with an error reference, the user is told
    something went wrong, and the conversation state is dropped so the
    next turn starts clean.
    """

    def __init__(
        self,
        conversation_state: ConversationState | None = None,
        responses: ResponsesConfig | None = None,
    ):
        self.conversation_state = conversation_state
        self.responses = responses or ResponsesConfig()

    async def process_activity(
        self, activity: Activity, logic: BotLogic, sink: ActivitySink
    ) -> TurnContext:
        turn_context = TurnContext(activity, sink)
        try:
            await logic(turn_context)
        except Exception as e:
            await self.on_turn_error(turn_context, e)
        return turn_context

    async def on_turn_error(self, turn_context: TurnContext, error: Exception) -> None:
        error_ref = create_error_reference()
        activity = turn_context.activity
        logger.error(
            f"[{error_ref}] on_turn_error: {type(error).__name__}: {error}",
            exc_info=error,
            extra={
                "error_reference": error_ref,
                "channel_id": activity.channel_id,
                "conversation_id": activity.conversation.id if activity.conversation else None,
                "exception_type": type(error).__name__,
            },
        )

        await turn_context.send_activity(self.responses.turn_error)

        if activity.channel_id == EMULATOR_CHANNEL:
            await turn_context.send_activity(
                Activity.create_trace(
                    name="OnTurnError Trace",
                    value=f"{error}",
                    value_type=TURN_ERROR_VALUE_TYPE,
                    label="TurnError",
                )
            )

        if self.conversation_state is not None:
            try:
                await self.conversation_state.delete(turn_context)
            except StorageError as e:
                logger.warning(f"[{error_ref}] Could not clear conversation state: {e}")
