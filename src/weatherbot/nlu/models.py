"""NLU result models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Intent(str, Enum):
    """Intents the bot reacts to."""

    GREETING = "Greeting"
    CANCEL = "Cancel"
    HELP = "Help"
    NONE = "None"
    WEATHER_TODAY = "WeatherToday"
    WEATHER_LATER = "WeatherLater"

    @classmethod
    def parse(cls, name: str | None) -> "Intent":
        """Map a recognizer intent label to an Intent, defaulting to NONE."""
        try:
            return cls(name)
        except ValueError:
            return cls.NONE


class EntitySpan(BaseModel):
    """Where an entity was found in the utterance."""

    start_index: int
    end_index: int
    text: str
    score: float | None = None


class IntentResult(BaseModel):
    """Intents and entities recognized for one utterance."""

    text: str = ""
    intents: dict[str, float] = Field(default_factory=dict, description="Intent name -> score")
    entities: dict[str, list[Any]] = Field(
        default_factory=dict, description="Entity name -> extracted values"
    )
    instance: dict[str, list[EntitySpan]] = Field(
        default_factory=dict, description="Entity name -> span metadata"
    )

    @property
    def top_intent(self) -> str:
        """Highest scoring intent label, or "None" when there are no intents."""
        if not self.intents:
            return Intent.NONE.value
        return max(self.intents.items(), key=lambda item: item[1])[0]

    @property
    def intent(self) -> Intent:
        return Intent.parse(self.top_intent)

    def first_entity(self, name: str) -> Any | None:
        values = self.entities.get(name)
        return values[0] if values else None
