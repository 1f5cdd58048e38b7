"""Core bot errors."""

import uuid


class WeatherBotError(Exception):
    """Base class for all WeatherBot errors."""

    pass


class ConfigError(WeatherBotError):
    """Raised when configuration is invalid or incomplete."""


class RecognizerError(WeatherBotError):
    """Raised when the intent recognizer call fails."""

    pass


class WeatherProviderError(WeatherBotError):
    """Raised when the weather provider cannot be reached or rejects a request."""

    pass


class WeatherPayloadError(WeatherProviderError):
    """Weather provider returned a payload with missing or malformed fields."""

    pass


class StorageError(WeatherBotError):
    """Raised when state storage operations fail."""

    pass


class DialogError(WeatherBotError):
    """Raised when dialog stack operations fail."""

    pass


class ChannelError(WeatherBotError):
    """Raised when a reply cannot be delivered to the channel."""

    pass


def create_error_reference() -> str:
    """Generate unique error reference for client/server correlation."""
    return f"ERR-{uuid.uuid4().hex[:8].upper()}"
