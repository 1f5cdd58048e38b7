"""Text prompt with an optional validator."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from weatherbot.core.activity import ActivityTypes
from weatherbot.core.turn_context import TurnContext
from weatherbot.dialogs.base import Dialog, DialogInstance, DialogReason, DialogTurnResult

if TYPE_CHECKING:
    from weatherbot.dialogs.context import DialogContext


class PromptOptions(BaseModel):
    prompt: str | None = None
    retry_prompt: str | None = None


@dataclass
class PromptRecognizerResult:
    succeeded: bool
    value: Any = None


@dataclass
class PromptValidatorContext:
    """What a validator sees: the recognized value and the prompt's state."""

    context: TurnContext
    recognized: PromptRecognizerResult
    state: dict[str, Any]
    options: PromptOptions
    attempt_count: int


PromptValidator = Callable[[PromptValidatorContext], Awaitable[bool]]


class TextPrompt(Dialog):
    """Ask for free text; ends with the text once the validator accepts it.

    A validator that rejects input may send its own message. If it does
    not, the retry prompt (or the original prompt) is repeated.
    """

    def __init__(self, dialog_id: str, validator: PromptValidator | None = None):
        super().__init__(dialog_id)
        self._validator = validator

    async def begin_dialog(self, dc: "DialogContext", options: Any = None) -> DialogTurnResult:
        if not isinstance(options, PromptOptions):
            options = PromptOptions.model_validate(options or {})
        state = dc.active_dialog.state
        state["options"] = options.model_dump()
        state["attempt_count"] = 0
        await self._send_prompt(dc.context, options, is_retry=False)
        return Dialog.END_OF_TURN

    async def continue_dialog(self, dc: "DialogContext") -> DialogTurnResult:
        if dc.context.activity.type != ActivityTypes.MESSAGE:
            return Dialog.END_OF_TURN

        state = dc.active_dialog.state
        options = PromptOptions.model_validate(state.get("options") or {})
        recognized = self._recognize(dc.context)
        state["attempt_count"] = state.get("attempt_count", 0) + 1

        is_valid = False
        if recognized.succeeded:
            if self._validator is None:
                is_valid = True
            else:
                is_valid = await self._validator(
                    PromptValidatorContext(
                        context=dc.context,
                        recognized=recognized,
                        state=state,
                        options=options,
                        attempt_count=state["attempt_count"],
                    )
                )

        if is_valid:
            return await dc.end_dialog(recognized.value)

        if not dc.context.responded:
            await self._send_prompt(dc.context, options, is_retry=True)
        return Dialog.END_OF_TURN

    async def resume_dialog(
        self, dc: "DialogContext", reason: DialogReason, result: Any = None
    ) -> DialogTurnResult:
        await self.reprompt_dialog(dc.context, dc.active_dialog)
        return Dialog.END_OF_TURN

    async def reprompt_dialog(self, turn_context: TurnContext, instance: DialogInstance) -> None:
        options = PromptOptions.model_validate(instance.state.get("options") or {})
        await self._send_prompt(turn_context, options, is_retry=False)

    async def _send_prompt(
        self, turn_context: TurnContext, options: PromptOptions, is_retry: bool
    ) -> None:
        text = options.retry_prompt if is_retry and options.retry_prompt else options.prompt
        if text:
            await turn_context.send_activity(text)

    def _recognize(self, turn_context: TurnContext) -> PromptRecognizerResult:
        text = turn_context.activity.text
        return PromptRecognizerResult(succeeded=text is not None, value=text)
