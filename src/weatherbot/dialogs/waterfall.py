"""Waterfall dialog: a fixed sequence of async steps."""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from weatherbot.core.activity import ActivityTypes
from weatherbot.core.errors import DialogError
from weatherbot.core.turn_context import TurnContext
from weatherbot.dialogs.base import Dialog, DialogReason, DialogTurnResult

if TYPE_CHECKING:
    from weatherbot.dialogs.context import DialogContext


class WaterfallStepContext:
    """Handle passed to each waterfall step."""

    def __init__(
        self,
        dialog: "WaterfallDialog",
        dc: "DialogContext",
        index: int,
        options: Any,
        values: dict[str, Any],
        reason: DialogReason,
        result: Any,
    ):
        self._dialog = dialog
        self._dc = dc
        self._next_called = False
        self.index = index
        self.options = options
        self.values = values
        self.reason = reason
        self.result = result

    @property
    def context(self) -> TurnContext:
        return self._dc.context

    async def prompt(self, dialog_id: str, options: Any) -> DialogTurnResult:
        return await self._dc.prompt(dialog_id, options)

    async def begin_dialog(self, dialog_id: str, options: Any = None) -> DialogTurnResult:
        return await self._dc.begin_dialog(dialog_id, options)

    async def end_dialog(self, result: Any = None) -> DialogTurnResult:
        return await self._dc.end_dialog(result)

    async def next(self, result: Any = None) -> DialogTurnResult:
        """Skip to the following step without waiting for input."""
        if self._next_called:
            raise DialogError(f"next() called twice in step {self.index} of '{self._dialog.id}'")
        self._next_called = True
        return await self._dialog.resume_dialog(self._dc, DialogReason.NEXT_CALLED, result)


WaterfallStep = Callable[[WaterfallStepContext], Awaitable[DialogTurnResult]]


class WaterfallDialog(Dialog):
    def __init__(self, dialog_id: str, steps: list[WaterfallStep] | None = None):
        super().__init__(dialog_id)
        self._steps: list[WaterfallStep] = list(steps or [])

    def add_step(self, step: WaterfallStep) -> "WaterfallDialog":
        self._steps.append(step)
        return self

    async def begin_dialog(self, dc: "DialogContext", options: Any = None) -> DialogTurnResult:
        state = dc.active_dialog.state
        state["options"] = options
        state["values"] = {}
        return await self._run_step(dc, 0, DialogReason.BEGIN_CALLED, None)

    async def continue_dialog(self, dc: "DialogContext") -> DialogTurnResult:
        if dc.context.activity.type != ActivityTypes.MESSAGE:
            return Dialog.END_OF_TURN
        return await self.resume_dialog(
            dc, DialogReason.CONTINUE_CALLED, dc.context.activity.text
        )

    async def resume_dialog(
        self, dc: "DialogContext", reason: DialogReason, result: Any = None
    ) -> DialogTurnResult:
        index = dc.active_dialog.state.get("step_index", -1)
        return await self._run_step(dc, index + 1, reason, result)

    async def _run_step(
        self, dc: "DialogContext", index: int, reason: DialogReason, result: Any
    ) -> DialogTurnResult:
        if index >= len(self._steps):
            return await dc.end_dialog(result)

        state = dc.active_dialog.state
        state["step_index"] = index
        step_context = WaterfallStepContext(
            self, dc, index, state.get("options"), state.setdefault("values", {}), reason, result
        )
        return await self._steps[index](step_context)
