"""Logging setup for WeatherBot.

Records from the ``weatherbot`` logger tree carry the turn they belong to
(channel, conversation and activity ids). Console lines show the
conversation id; the optional JSON file keeps all three fields.
"""

import logging
import logging.config
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from weatherbot.core.activity import Activity

TURN_FIELDS = ("channel_id", "conversation_id", "activity_id")

CONSOLE_FORMAT = "%(asctime)s %(levelname)-7s [%(conversation_id)s] %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(channel_id)s %(conversation_id)s %(activity_id)s %(message)s"

# Rotating JSON log: 10MB x 5
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


class TurnFieldsFilter(logging.Filter):
    """Fill in turn fields on records logged outside a turn."""

    def filter(self, record: logging.LogRecord) -> bool:
        for field in TURN_FIELDS:
            if not hasattr(record, field):
                setattr(record, field, "-")
        return True


def build_logging_config(level: str = "INFO", log_file: str | None = None) -> dict[str, Any]:
    """Return the ``dictConfig`` schema for the given level and optional JSON file."""
    handlers: dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "console",
            "filters": ["turn_fields"],
            "level": level,
        },
    }
    formatters: dict[str, Any] = {
        "console": {"format": CONSOLE_FORMAT, "datefmt": "%H:%M:%S"},
    }

    if log_file:
        formatters["json"] = {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": JSON_FORMAT,
        }
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": log_file,
            "maxBytes": LOG_FILE_MAX_BYTES,
            "backupCount": LOG_FILE_BACKUPS,
            "formatter": "json",
            "filters": ["turn_fields"],
            "level": level,
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"turn_fields": {"()": TurnFieldsFilter}},
        "formatters": formatters,
        "handlers": handlers,
        "loggers": {
            "weatherbot": {"handlers": list(handlers), "level": level, "propagate": False},
            # Request lines from the HTTP clients are noise below WARNING
            "httpx": {"level": "WARNING"},
        },
        "root": {"handlers": ["console"], "level": "WARNING"},
    }


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """
    Configure logging for the bot process.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path for a rotating JSON log file
    """
    logging.config.dictConfig(build_logging_config(level, log_file))


class ContextLogger:
    """Logger that tags records with the current turn."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def with_context(self, **context: Any) -> logging.LoggerAdapter:
        """Adapter adding ``context`` as extra fields on every record."""
        return logging.LoggerAdapter(self.logger, context)

    def for_activity(self, activity: "Activity") -> logging.LoggerAdapter:
        """Adapter tagged with the ids of an inbound activity."""
        return self.with_context(
            channel_id=activity.channel_id or "-",
            conversation_id=activity.conversation.id if activity.conversation else "-",
            activity_id=activity.id or "-",
        )
