"""ActivitySink interface for outbound activity delivery.

The turn context hands every outbound activity to a sink. Which sink is used
depends on how the channel expects replies.
"""

from abc import ABC, abstractmethod

from weatherbot.core.activity import Activity


class ActivitySink(ABC):
    """Interface for delivering outbound activities to the user."""

    @abstractmethod
    async def send(self, activity: Activity) -> None:
        """Deliver one activity."""
        ...


class BufferedActivitySink(ActivitySink):
    """Buffers activities for expectReplies delivery, the console and tests."""

    def __init__(self) -> None:
        self.activities: list[Activity] = []

    async def send(self, activity: Activity) -> None:
        """Append activity to buffer."""
        self.activities.append(activity)

    @property
    def texts(self) -> list[str | None]:
        """Text of every buffered activity, in order."""
        return [activity.text for activity in self.activities]

    def clear(self) -> None:
        """Clear the activity buffer."""
        self.activities.clear()
