"""Dialog primitives: turn status, stack entries and the Dialog base class."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from weatherbot.core.errors import DialogError
from weatherbot.core.turn_context import TurnContext

if TYPE_CHECKING:
    from weatherbot.dialogs.context import DialogContext


class DialogTurnStatus(str, Enum):
    """Outcome of running the dialog stack for one turn."""

    EMPTY = "empty"  # no dialog on the stack
    WAITING = "waiting"  # active dialog expects more input
    COMPLETE = "complete"  # last dialog on the stack ended
    CANCELLED = "cancelled"


class DialogReason(str, Enum):
    BEGIN_CALLED = "beginCalled"
    CONTINUE_CALLED = "continueCalled"
    END_CALLED = "endCalled"
    CANCEL_CALLED = "cancelCalled"
    NEXT_CALLED = "nextCalled"


@dataclass
class DialogTurnResult:
    status: DialogTurnStatus
    result: Any = None


class DialogInstance(BaseModel):
    """One entry of the dialog stack."""

    id: str
    state: dict[str, Any] = Field(default_factory=dict)


class DialogState(BaseModel):
    """Persisted dialog stack; index 0 is the active dialog."""

    dialog_stack: list[DialogInstance] = Field(default_factory=list)


class Dialog(ABC):
    """Base class for multi-turn dialogs."""

    END_OF_TURN = DialogTurnResult(DialogTurnStatus.WAITING)

    def __init__(self, dialog_id: str):
        if not dialog_id:
            raise DialogError("Dialog id cannot be empty")
        self.id = dialog_id

    @abstractmethod
    async def begin_dialog(
        self, dc: "DialogContext", options: Any = None
    ) -> DialogTurnResult: ...

    async def continue_dialog(self, dc: "DialogContext") -> DialogTurnResult:
        return await dc.end_dialog(None)

    async def resume_dialog(
        self, dc: "DialogContext", reason: DialogReason, result: Any = None
    ) -> DialogTurnResult:
        return await dc.end_dialog(result)

    async def reprompt_dialog(self, turn_context: TurnContext, instance: DialogInstance) -> None:
        return None

    async def end_dialog(
        self, turn_context: TurnContext, instance: DialogInstance, reason: DialogReason
    ) -> None:
        return None

    def dependencies(self) -> list["Dialog"]:
        """Child dialogs that must be registered alongside this one."""
        return []
