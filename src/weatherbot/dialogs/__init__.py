"""Dialog stack, prompts, waterfalls and the greeting dialog."""

from weatherbot.dialogs.base import (
    Dialog,
    DialogInstance,
    DialogReason,
    DialogState,
    DialogTurnResult,
    DialogTurnStatus,
)
from weatherbot.dialogs.context import DialogContext, DialogSet
from weatherbot.dialogs.greeting import GREETING_DIALOG, GreetingDialog, UserProfile
from weatherbot.dialogs.prompts import PromptOptions, PromptValidatorContext, TextPrompt
from weatherbot.dialogs.waterfall import WaterfallDialog, WaterfallStepContext

__all__ = [
    "Dialog",
    "DialogInstance",
    "DialogReason",
    "DialogState",
    "DialogTurnResult",
    "DialogTurnStatus",
    "DialogContext",
    "DialogSet",
    "GREETING_DIALOG",
    "GreetingDialog",
    "UserProfile",
    "PromptOptions",
    "PromptValidatorContext",
    "TextPrompt",
    "WaterfallDialog",
    "WaterfallStepContext",
]
