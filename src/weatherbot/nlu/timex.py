"""Resolution of datetimeV2 timex expressions to calendar dates.

Covers the date forms the recognizer produces for day-of-week questions:
definite dates (``2026-10-20``), weekdays (``XXXX-WXX-3``) and month/day
without a year (``XXXX-10-20``). Any time part (``T14``) is ignored.
"""

import re
from dataclasses import dataclass
from datetime import date, timedelta

from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, relativedelta

_DEFINITE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
_WEEKDAY = re.compile(r"XXXX-WXX-([1-7])")
_MONTH_DAY = re.compile(r"XXXX-(\d{2})-(\d{2})")

# Timex weekdays are ISO numbered: 1 = Monday ... 7 = Sunday
_WEEKDAYS = (MO, TU, WE, TH, FR, SA, SU)


@dataclass(frozen=True)
class DateRange:
    """Half-open date range: ``start`` included, ``end`` excluded."""

    start: date
    end: date

    def __contains__(self, day: date) -> bool:
        return self.start <= day < self.end


def week_from_today(today: date | None = None) -> DateRange:
    """The seven days starting today."""
    start = today or date.today()
    return DateRange(start=start, end=start + timedelta(days=7))


def resolve_date(timex: str, constraint: DateRange) -> date | None:
    """Resolve ``timex`` to the single date it denotes inside ``constraint``.

    Returns None for unsupported expressions and for dates outside the range.
    """
    date_part = (timex or "").split("T", 1)[0]

    if match := _DEFINITE.fullmatch(date_part):
        try:
            day = date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
        except ValueError:
            return None
        return day if day in constraint else None

    if match := _WEEKDAY.fullmatch(date_part):
        weekday = _WEEKDAYS[int(match.group(1)) - 1]
        day = constraint.start + relativedelta(weekday=weekday)
        return day if day in constraint else None

    if match := _MONTH_DAY.fullmatch(date_part):
        month, day_of_month = int(match.group(1)), int(match.group(2))
        for year in (constraint.start.year, constraint.start.year + 1):
            try:
                day = date(year, month, day_of_month)
            except ValueError:
                continue
            if day in constraint:
                return day
        return None

    return None
