"""Dialog set and dialog context (the dialog stack for one turn)."""

import logging
from typing import Any

from weatherbot.core.errors import ConfigError, DialogError
from weatherbot.core.state import StatePropertyAccessor
from weatherbot.core.turn_context import TurnContext
from weatherbot.dialogs.base import (
    Dialog,
    DialogInstance,
    DialogReason,
    DialogState,
    DialogTurnResult,
    DialogTurnStatus,
)

logger = logging.getLogger(__name__)


class DialogSet:
    """Registry of dialogs sharing one persisted dialog stack."""

    def __init__(self, dialog_state: StatePropertyAccessor):
        if dialog_state is None:
            raise ConfigError("DialogSet requires a dialog state accessor")
        self._dialog_state = dialog_state
        self._dialogs: dict[str, Dialog] = {}

    def add(self, dialog: Dialog) -> "DialogSet":
        if dialog.id in self._dialogs:
            raise DialogError(f"Duplicate dialog id '{dialog.id}'")
        self._dialogs[dialog.id] = dialog
        for child in dialog.dependencies():
            if child.id not in self._dialogs:
                self.add(child)
        return self

    def find(self, dialog_id: str) -> Dialog | None:
        return self._dialogs.get(dialog_id)

    async def create_context(self, turn_context: TurnContext) -> "DialogContext":
        state = await self._dialog_state.get(turn_context, DialogState)
        return DialogContext(self, turn_context, state)


class DialogContext:
    """Operations on the dialog stack during a turn."""

    def __init__(self, dialogs: DialogSet, turn_context: TurnContext, state: DialogState):
        self.dialogs = dialogs
        self.context = turn_context
        self.state = state

    @property
    def stack(self) -> list[DialogInstance]:
        return self.state.dialog_stack

    @property
    def active_dialog(self) -> DialogInstance | None:
        return self.stack[0] if self.stack else None

    def find_dialog(self, dialog_id: str) -> Dialog:
        dialog = self.dialogs.find(dialog_id)
        if dialog is None:
            raise DialogError(f"Dialog '{dialog_id}' not found in dialog set")
        return dialog

    async def begin_dialog(self, dialog_id: str, options: Any = None) -> DialogTurnResult:
        """Push a dialog onto the stack and start it."""
        dialog = self.find_dialog(dialog_id)
        self.stack.insert(0, DialogInstance(id=dialog_id))
        logger.debug(f"Begin dialog '{dialog_id}' (depth {len(self.stack)})")
        return await dialog.begin_dialog(self, options)

    async def prompt(self, dialog_id: str, options: Any) -> DialogTurnResult:
        return await self.begin_dialog(dialog_id, options)

    async def continue_dialog(self) -> DialogTurnResult:
        """Hand the turn to the active dialog, if any."""
        instance = self.active_dialog
        if instance is None:
            return DialogTurnResult(DialogTurnStatus.EMPTY)
        return await self.find_dialog(instance.id).continue_dialog(self)

    async def end_dialog(self, result: Any = None) -> DialogTurnResult:
        """End the active dialog and resume its parent with ``result``."""
        await self._end_active_dialog(DialogReason.END_CALLED)

        parent = self.active_dialog
        if parent is not None:
            return await self.find_dialog(parent.id).resume_dialog(
                self, DialogReason.END_CALLED, result
            )
        return DialogTurnResult(DialogTurnStatus.COMPLETE, result)

    async def cancel_all_dialogs(self) -> DialogTurnResult:
        """Clear the whole stack."""
        if not self.stack:
            return DialogTurnResult(DialogTurnStatus.EMPTY)
        while self.stack:
            await self._end_active_dialog(DialogReason.CANCEL_CALLED)
        return DialogTurnResult(DialogTurnStatus.CANCELLED)

    async def reprompt_dialog(self) -> None:
        """Ask the active dialog to repeat its last prompt."""
        instance = self.active_dialog
        if instance is not None:
            await self.find_dialog(instance.id).reprompt_dialog(self.context, instance)

    async def _end_active_dialog(self, reason: DialogReason) -> None:
        instance = self.active_dialog
        if instance is None:
            return
        dialog = self.dialogs.find(instance.id)
        if dialog is not None:
            await dialog.end_dialog(self.context, instance, reason)
        self.stack.pop(0)
