"""Core hosting primitives: activities, turn context, state and storage."""

from weatherbot.core.activity import (
    Activity,
    ActivityTypes,
    Attachment,
    ChannelAccount,
    ConversationAccount,
    DeliveryModes,
)
from weatherbot.core.errors import (
    ChannelError,
    ConfigError,
    DialogError,
    RecognizerError,
    StorageError,
    WeatherBotError,
    WeatherPayloadError,
    WeatherProviderError,
)
from weatherbot.core.state import BotState, ConversationState, StatePropertyAccessor, UserState
from weatherbot.core.storage import MemoryStorage, Storage
from weatherbot.core.turn_context import TurnContext

__all__ = [
    "Activity",
    "ActivityTypes",
    "Attachment",
    "ChannelAccount",
    "ConversationAccount",
    "DeliveryModes",
    "TurnContext",
    "BotState",
    "ConversationState",
    "UserState",
    "StatePropertyAccessor",
    "Storage",
    "MemoryStorage",
    "WeatherBotError",
    "ConfigError",
    "RecognizerError",
    "WeatherProviderError",
    "WeatherPayloadError",
    "StorageError",
    "DialogError",
    "ChannelError",
]
