"""Activity schema - Pydantic models for Bot Framework activities.

Only the subset of the Bot Framework activity schema the bot reads or writes
is modelled. Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ActivityTypes(str, Enum):
    """Activity types handled or produced by the bot."""

    MESSAGE = "message"
    CONVERSATION_UPDATE = "conversationUpdate"
    TYPING = "typing"
    END_OF_CONVERSATION = "endOfConversation"
    TRACE = "trace"


class DeliveryModes(str, Enum):
    """How replies are delivered back to the channel."""

    NORMAL = "normal"
    EXPECT_REPLIES = "expectReplies"


class _SchemaModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ChannelAccount(_SchemaModel):
    """A user or bot account on a channel."""

    id: str
    name: str | None = None
    role: str | None = None


class ConversationAccount(_SchemaModel):
    """The conversation an activity belongs to."""

    id: str
    name: str | None = None
    is_group: bool | None = None


class Attachment(_SchemaModel):
    """Media attached to a message activity."""

    content_type: str
    content_url: str | None = None
    content: Any | None = None
    name: str | None = None


class Activity(_SchemaModel):
    """A single Bot Framework activity."""

    type: str = ActivityTypes.MESSAGE.value
    id: str | None = None
    timestamp: datetime | None = None
    channel_id: str | None = None
    service_url: str | None = None
    from_property: ChannelAccount | None = Field(default=None, alias="from")
    recipient: ChannelAccount | None = None
    conversation: ConversationAccount | None = None
    members_added: list[ChannelAccount] | None = None
    members_removed: list[ChannelAccount] | None = None
    reply_to_id: str | None = None
    text: str | None = None
    locale: str | None = None
    input_hint: str | None = None
    attachments: list[Attachment] | None = None
    delivery_mode: str | None = None
    name: str | None = None
    label: str | None = None
    value: Any | None = None
    value_type: str | None = None

    @classmethod
    def create_message(
        cls,
        text: str | None = None,
        attachments: list[Attachment] | None = None,
    ) -> "Activity":
        """Build an outbound message activity."""
        return cls(type=ActivityTypes.MESSAGE.value, text=text, attachments=attachments)

    @classmethod
    def create_trace(
        cls,
        name: str,
        value: Any = None,
        value_type: str | None = None,
        label: str | None = None,
    ) -> "Activity":
        """Build a trace activity (only rendered by the emulator)."""
        return cls(
            type=ActivityTypes.TRACE.value,
            name=name,
            value=value,
            value_type=value_type,
            label=label,
            timestamp=datetime.now(timezone.utc),
        )

    def apply_reply_defaults(self, incoming: "Activity") -> "Activity":
        """Address this activity as a reply to ``incoming``.

        Fields already set on the outbound activity are kept.
        """
        self.channel_id = self.channel_id or incoming.channel_id
        self.service_url = self.service_url or incoming.service_url
        self.conversation = self.conversation or incoming.conversation
        self.from_property = self.from_property or incoming.recipient
        self.recipient = self.recipient or incoming.from_property
        if self.type != ActivityTypes.TRACE.value:
            self.reply_to_id = self.reply_to_id or incoming.id
        self.timestamp = self.timestamp or datetime.now(timezone.utc)
        return self

    def expects_replies(self) -> bool:
        """Whether replies must be returned in the HTTP response body."""
        return self.delivery_mode == DeliveryModes.EXPECT_REPLIES.value or not self.service_url

    def to_wire(self) -> dict[str, Any]:
        """Serialize using Bot Framework camelCase field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
