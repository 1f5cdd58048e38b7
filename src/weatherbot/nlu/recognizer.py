"""Intent recognizer backed by a hosted LUIS application.

Calls the LUIS v2 prediction endpoint and normalizes the response the way the
Bot Framework recognizer does: entity names lose their ``builtin.`` prefix,
every datetimeV2 subtype is reported under ``datetime`` with its timex
values, and span metadata is kept apart from the entity values.
"""

import logging
from typing import Any, Protocol

import httpx

from weatherbot.config.models import LuisConfig
from weatherbot.core.errors import ConfigError, RecognizerError
from weatherbot.core.turn_context import TurnContext
from weatherbot.nlu.models import EntitySpan, IntentResult

logger = logging.getLogger(__name__)

_NUMERIC_ENTITIES = {"number", "ordinal", "percentage"}


class IntentRecognizer(Protocol):
    """Anything that turns a turn's utterance into an IntentResult."""

    async def recognize(self, turn_context: TurnContext) -> IntentResult: ...


def normalize_entity_name(entity_type: str) -> str:
    name = entity_type.removeprefix("builtin.")
    if name.startswith("datetimeV2."):
        return "datetime"
    return name.replace(".", "_").replace(" ", "_")


def extract_entity_value(entity: dict[str, Any]) -> Any:
    """Value reported for one LUIS entity."""
    resolution = entity.get("resolution")
    if not resolution:
        return entity.get("entity")

    entity_type = entity.get("type", "")
    if entity_type.startswith("builtin.datetimeV2."):
        values = resolution.get("values") or []
        if not values:
            return resolution
        return {
            "type": values[0].get("type"),
            "timex": [value.get("timex") for value in values],
        }

    if normalize_entity_name(entity_type) in _NUMERIC_ENTITIES:
        return float(resolution.get("value"))

    if "values" in resolution:
        return resolution["values"]
    return resolution.get("value", entity.get("entity"))


def parse_luis_response(utterance: str, data: dict[str, Any]) -> IntentResult:
    """Convert a LUIS v2 prediction payload into an IntentResult."""
    intents: dict[str, float] = {}
    for item in data.get("intents") or []:
        intents[item["intent"]] = float(item.get("score") or 0.0)
    top = data.get("topScoringIntent")
    if top and top.get("intent") not in intents:
        intents[top["intent"]] = float(top.get("score") or 0.0)

    entities: dict[str, list[Any]] = {}
    instance: dict[str, list[EntitySpan]] = {}
    for entity in data.get("entities") or []:
        name = entity.get("role") or normalize_entity_name(entity.get("type", ""))
        entities.setdefault(name, []).append(extract_entity_value(entity))

        start = int(entity.get("startIndex", 0))
        end = int(entity.get("endIndex", start)) + 1
        instance.setdefault(name, []).append(
            EntitySpan(
                start_index=start,
                end_index=end,
                text=utterance[start:end] or entity.get("entity", ""),
                score=entity.get("score"),
            )
        )

    return IntentResult(text=utterance, intents=intents, entities=entities, instance=instance)


class LuisRecognizer:
    """Recognizer for a LUIS application reached over HTTP."""

    def __init__(self, config: LuisConfig, http_client: httpx.AsyncClient | None = None):
        if not config.app_id:
            raise ConfigError(
                "Missing LUIS configuration. Set luis.app_id (LUIS_APP_ID) to the LUIS application id."
            )
        if not config.endpoint_key:
            raise ConfigError(
                "Missing LUIS configuration. Set luis.endpoint_key (LUIS_ENDPOINT_KEY)."
            )
        self._config = config
        self._url = f"{config.resolved_endpoint}/luis/v2.0/apps/{config.app_id}"
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout=10.0))

    async def recognize(self, turn_context: TurnContext) -> IntentResult:
        utterance = (turn_context.activity.text or "").strip()
        if not utterance:
            return IntentResult(text=utterance)

        params = {"q": utterance, "verbose": "true" if self._config.verbose else "false"}
        headers = {"Ocp-Apim-Subscription-Key": self._config.endpoint_key or ""}
        try:
            response = await self._client.get(self._url, params=params, headers=headers)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise RecognizerError(f"LUIS request failed: {e}") from e
        except ValueError as e:
            raise RecognizerError("LUIS returned a non-JSON response") from e

        result = parse_luis_response(utterance, data)
        logger.debug(
            f"LUIS top intent '{result.top_intent}' with entities {sorted(result.entities)}"
        )
        return result

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
