"""Dialog management: interruptions and profile updates."""

from weatherbot.dm.interruptions import (
    INTERRUPTION_HANDLERS,
    InterruptionContext,
    check_interruption,
)
from weatherbot.dm.profile import update_user_profile

__all__ = [
    "INTERRUPTION_HANDLERS",
    "InterruptionContext",
    "check_interruption",
    "update_user_profile",
]
