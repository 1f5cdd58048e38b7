"""Per-turn context handed to bot logic."""

from typing import Any

from weatherbot.core.activity import Activity, ActivityTypes
from weatherbot.core.activity_sink import ActivitySink


class TurnContext:
    """Context for a single inbound activity.

    Outbound activities are addressed as replies to the inbound one and passed
    to the sink. ``turn_state`` is a scratch dict that lives for one turn; bot
    state uses it to cache loaded storage items.
    """

    def __init__(self, activity: Activity, sink: ActivitySink):
        self.activity = activity
        self.sink = sink
        self.turn_state: dict[str, Any] = {}
        self._responded = False

    @property
    def responded(self) -> bool:
        """True once a message activity has been sent during this turn."""
        return self._responded

    async def send_activity(self, activity_or_text: Activity | str) -> Activity:
        """Send a text or a prepared activity as a reply."""
        if isinstance(activity_or_text, str):
            activity = Activity.create_message(text=activity_or_text)
        else:
            activity = activity_or_text

        activity.apply_reply_defaults(self.activity)
        await self.sink.send(activity)

        if activity.type != ActivityTypes.TRACE.value:
            self._responded = True
        return activity

    async def send_activities(self, activities: list[Activity | str]) -> list[Activity]:
        """Send several activities in order."""
        return [await self.send_activity(activity) for activity in activities]
