"""Profile updates from recognized entities."""

import logging

from weatherbot.core.state import StatePropertyAccessor
from weatherbot.core.turn_context import TurnContext
from weatherbot.dialogs.greeting import UserProfile
from weatherbot.nlu.models import IntentResult
from weatherbot.utils.text import capitalize_first

logger = logging.getLogger(__name__)

# Entity names that carry each profile field, in precedence order
NAME_ENTITIES = ("userName", "userName_patternAny")
LOCATION_ENTITIES = ("userLocation", "userLocation_patternAny")


async def update_user_profile(
    result: IntentResult,
    turn_context: TurnContext,
    user_profile_accessor: StatePropertyAccessor,
) -> None:
    """Store any name or city the recognizer extracted.

    Does nothing when no entities were recognized. Later aliases win over
    earlier ones when both are present.
    """
    if not result.entities:
        return

    profile: UserProfile = await user_profile_accessor.get(turn_context, UserProfile)

    for entity in NAME_ENTITIES:
        value = result.first_entity(entity)
        if value:
            profile.name = capitalize_first(str(value))
            logger.debug(f"Profile name updated from '{entity}'")

    for entity in LOCATION_ENTITIES:
        value = result.first_entity(entity)
        if value:
            profile.city = capitalize_first(str(value))
            logger.debug(f"Profile city updated from '{entity}'")

    await user_profile_accessor.set(turn_context, profile)
