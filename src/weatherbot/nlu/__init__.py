"""Natural language understanding: recognizer adapter, results and date resolution."""

from weatherbot.nlu.models import EntitySpan, Intent, IntentResult
from weatherbot.nlu.recognizer import IntentRecognizer, LuisRecognizer, parse_luis_response
from weatherbot.nlu.timex import DateRange, resolve_date, week_from_today

__all__ = [
    "Intent",
    "IntentResult",
    "EntitySpan",
    "IntentRecognizer",
    "LuisRecognizer",
    "parse_luis_response",
    "DateRange",
    "resolve_date",
    "week_from_today",
]
