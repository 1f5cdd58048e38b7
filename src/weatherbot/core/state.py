"""Bot state scoped to a conversation or a user.

State is loaded from storage once per turn, cached in the turn context and
written back by ``save_changes``. A content hash taken at load time decides
whether a write is needed.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, TypeAdapter

from weatherbot.core.errors import ConfigError, StorageError
from weatherbot.core.storage import Storage
from weatherbot.core.turn_context import TurnContext
from weatherbot.utils.hashing import hash_state

logger = logging.getLogger(__name__)

_JSON = TypeAdapter(Any)


def to_storable(state: dict[str, Any]) -> dict[str, Any]:
    """Convert cached state (which may hold pydantic models) to plain JSON data."""
    return _JSON.dump_python(state, mode="json")


class CachedBotState:
    """State loaded for the current turn plus the hash it was loaded with."""

    def __init__(self, state: dict[str, Any] | None = None):
        self.state: dict[str, Any] = state or {}
        self.hash = self.compute_hash()

    def compute_hash(self) -> str:
        return hash_state(to_storable(self.state))

    @property
    def is_changed(self) -> bool:
        return self.compute_hash() != self.hash


class BotState(ABC):
    """Base class for conversation and user state."""

    def __init__(self, storage: Storage, context_service_key: str):
        if storage is None:
            raise ConfigError(f"{type(self).__name__} requires a storage instance")
        self.storage = storage
        self._context_service_key = context_service_key

    @abstractmethod
    def get_storage_key(self, turn_context: TurnContext) -> str:
        """Storage key for the state scope of this turn."""
        ...

    def create_property(
        self, name: str, model: type[BaseModel] | None = None
    ) -> "StatePropertyAccessor":
        """Create an accessor for one named value in this state scope."""
        if not name:
            raise ValueError("BotState.create_property(): name cannot be empty.")
        return StatePropertyAccessor(self, name, model)

    def get_cached_state(self, turn_context: TurnContext) -> CachedBotState | None:
        return turn_context.turn_state.get(self._context_service_key)

    async def load(self, turn_context: TurnContext, force: bool = False) -> None:
        """Read state from storage unless it is already cached for this turn."""
        cached = self.get_cached_state(turn_context)
        if force or cached is None:
            key = self.get_storage_key(turn_context)
            items = await self.storage.read([key])
            turn_context.turn_state[self._context_service_key] = CachedBotState(items.get(key))

    async def save_changes(self, turn_context: TurnContext, force: bool = False) -> None:
        """Write cached state back to storage if it changed during the turn."""
        cached = self.get_cached_state(turn_context)
        if cached is None:
            return
        if force or cached.is_changed:
            key = self.get_storage_key(turn_context)
            await self.storage.write({key: to_storable(cached.state)})
            cached.hash = cached.compute_hash()
            logger.debug(f"Saved state {key}")

    async def clear_state(self, turn_context: TurnContext) -> None:
        """Reset the cached state; storage is updated on the next save."""
        turn_context.turn_state[self._context_service_key] = CachedBotState()
        # Force the next save_changes to write the empty document
        turn_context.turn_state[self._context_service_key].hash = ""

    async def delete(self, turn_context: TurnContext) -> None:
        """Drop the state scope from both the turn cache and storage."""
        turn_context.turn_state.pop(self._context_service_key, None)
        await self.storage.delete([self.get_storage_key(turn_context)])

    async def get_property_value(self, turn_context: TurnContext, name: str) -> Any:
        await self.load(turn_context)
        return self.get_cached_state(turn_context).state.get(name)

    async def set_property_value(self, turn_context: TurnContext, name: str, value: Any) -> None:
        await self.load(turn_context)
        self.get_cached_state(turn_context).state[name] = value

    async def delete_property_value(self, turn_context: TurnContext, name: str) -> None:
        await self.load(turn_context)
        self.get_cached_state(turn_context).state.pop(name, None)


class ConversationState(BotState):
    """State shared by everyone in a conversation."""

    def __init__(self, storage: Storage):
        super().__init__(storage, "ConversationState")

    def get_storage_key(self, turn_context: TurnContext) -> str:
        activity = turn_context.activity
        if not activity.channel_id:
            raise StorageError("Invalid activity: missing channel_id")
        if activity.conversation is None or not activity.conversation.id:
            raise StorageError("Invalid activity: missing conversation.id")
        return f"{activity.channel_id}/conversations/{activity.conversation.id}"


class UserState(BotState):
    """State that follows a user across conversations on a channel."""

    def __init__(self, storage: Storage):
        super().__init__(storage, "UserState")

    def get_storage_key(self, turn_context: TurnContext) -> str:
        activity = turn_context.activity
        if not activity.channel_id:
            raise StorageError("Invalid activity: missing channel_id")
        if activity.from_property is None or not activity.from_property.id:
            raise StorageError("Invalid activity: missing from.id")
        return f"{activity.channel_id}/users/{activity.from_property.id}"


class StatePropertyAccessor:
    """Get/set/delete access to a single named property of a bot state.

    When a pydantic ``model`` is given, stored dicts are validated into the
    model on first access and the instance is kept in the turn cache, so
    in-place mutations are saved with the state.
    """

    def __init__(self, bot_state: BotState, name: str, model: type[BaseModel] | None = None):
        self.bot_state = bot_state
        self.name = name
        self.model = model

    async def get(
        self,
        turn_context: TurnContext,
        default_value_or_factory: Callable[[], Any] | Any = None,
    ) -> Any:
        value = await self.bot_state.get_property_value(turn_context, self.name)

        if value is None and default_value_or_factory is not None:
            value = (
                default_value_or_factory()
                if callable(default_value_or_factory)
                else default_value_or_factory
            )
            await self.set(turn_context, value)
            return value

        if self.model is not None and isinstance(value, dict):
            value = self.model.model_validate(value)
            await self.bot_state.set_property_value(turn_context, self.name, value)

        return value

    async def set(self, turn_context: TurnContext, value: Any) -> None:
        await self.bot_state.set_property_value(turn_context, self.name, value)

    async def delete(self, turn_context: TurnContext) -> None:
        await self.bot_state.delete_property_value(turn_context, self.name)
