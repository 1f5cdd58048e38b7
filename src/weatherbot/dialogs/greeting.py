"""Greeting dialog: collects the user's name and city, then greets them."""

import logging

from pydantic import BaseModel

from weatherbot.core.errors import ConfigError
from weatherbot.core.state import StatePropertyAccessor
from weatherbot.dialogs.base import Dialog, DialogTurnResult
from weatherbot.dialogs.prompts import PromptOptions, PromptValidatorContext, TextPrompt
from weatherbot.dialogs.waterfall import WaterfallDialog, WaterfallStepContext
from weatherbot.utils.text import capitalize_first

logger = logging.getLogger(__name__)

GREETING_DIALOG = "greetingDialog"
NAME_PROMPT = "namePrompt"
CITY_PROMPT = "cityPrompt"

NAME_LENGTH_MIN = 3
CITY_LENGTH_MIN = 3


class UserProfile(BaseModel):
    """What the bot knows about a user."""

    name: str | None = None
    city: str | None = None


class GreetingDialog(WaterfallDialog):
    """Asks for whatever part of the profile is missing, then says hello.

    Values already present in the profile (for example extracted by the
    recognizer earlier in the turn) are not asked for again.
    """

    def __init__(self, dialog_id: str, user_profile_accessor: StatePropertyAccessor):
        if user_profile_accessor is None:
            raise ConfigError("Missing parameter. user_profile_accessor is required")
        super().__init__(
            dialog_id,
            [
                self.initialize_state_step,
                self.prompt_for_name_step,
                self.prompt_for_city_step,
                self.display_greeting_step,
            ],
        )
        self.user_profile_accessor = user_profile_accessor
        self._prompts: list[Dialog] = [
            TextPrompt(NAME_PROMPT, self.validate_name),
            TextPrompt(CITY_PROMPT, self.validate_city),
        ]

    def dependencies(self) -> list[Dialog]:
        return list(self._prompts)

    async def initialize_state_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        profile = await self.user_profile_accessor.get(step.context)
        if profile is None:
            initial = step.options if isinstance(step.options, dict) else {}
            await self.user_profile_accessor.set(step.context, UserProfile.model_validate(initial))
        return await step.next()

    async def prompt_for_name_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        profile = await self.user_profile_accessor.get(step.context, UserProfile)
        if not profile.name:
            return await step.prompt(NAME_PROMPT, PromptOptions(prompt="What is your name?"))
        return await step.next()

    async def prompt_for_city_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        profile = await self.user_profile_accessor.get(step.context, UserProfile)
        if not profile.name and step.result:
            profile.name = capitalize_first(step.result)
            await self.user_profile_accessor.set(step.context, profile)

        if not profile.city:
            return await step.prompt(
                CITY_PROMPT,
                PromptOptions(prompt=f"Hello {profile.name}, what city do you live in?"),
            )
        return await step.next()

    async def display_greeting_step(self, step: WaterfallStepContext) -> DialogTurnResult:
        profile = await self.user_profile_accessor.get(step.context, UserProfile)
        if not profile.city and step.result:
            profile.city = capitalize_first(step.result)
            await self.user_profile_accessor.set(step.context, profile)
        return await self.greet_user(step)

    async def validate_name(self, prompt: PromptValidatorContext) -> bool:
        value = (prompt.recognized.value or "").strip()
        if len(value) >= NAME_LENGTH_MIN:
            prompt.recognized.value = value
            return True
        await prompt.context.send_activity(
            f"Names need to be at least {NAME_LENGTH_MIN} characters long."
        )
        return False

    async def validate_city(self, prompt: PromptValidatorContext) -> bool:
        value = (prompt.recognized.value or "").strip()
        if len(value) >= CITY_LENGTH_MIN:
            prompt.recognized.value = value
            return True
        await prompt.context.send_activity(
            f"City names needs to be at least {CITY_LENGTH_MIN} characters long."
        )
        return False

    async def greet_user(self, step: WaterfallStepContext) -> DialogTurnResult:
        profile = await self.user_profile_accessor.get(step.context, UserProfile)
        await step.context.send_activity(
            f"Hi {profile.name}, from {profile.city}, nice to meet you!"
        )
        logger.debug("Greeting dialog complete")
        return await step.end_dialog()
