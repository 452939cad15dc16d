from datetime import date, datetime, timedelta

from dateutil import parser as dateutil_parser
from dateutil.parser import ParserError

from . import clock

__all__ = ["parse_day", "shift_weeks", "to_ymd", "week_dates", "week_start"]

_DAY_ALIASES = {
    "monday": "mon",
    "tuesday": "tue",
    "wednesday": "wed",
    "thursday": "thu",
    "friday": "fri",
    "saturday": "sat",
    "sunday": "sun",
}
_DAY_INDEX = {"mon": 0, "tue": 1, "wed": 2, "thu": 3, "fri": 4, "sat": 5, "sun": 6}


def to_ymd(d: date) -> str:
    return d.isoformat()


def week_start(anchor: date) -> date:
    """Monday of the week containing anchor."""
    return anchor - timedelta(days=anchor.weekday())


def week_dates(anchor: date) -> list[date]:
    start = week_start(anchor)
    return [start + timedelta(days=i) for i in range(7)]


def shift_weeks(anchor: date, weeks: int) -> date:
    return anchor + timedelta(days=7 * weeks)


def parse_day(ref: str, anchor: date | None = None) -> date | None:
    """Resolve a day reference ('today', 'tomorrow', 'wed', 'YYYY-MM-DD', ...).

    Weekday names resolve inside the week containing anchor, not the next
    occurrence, since that is the week on screen.
    """
    today = clock.today()
    anchor = anchor or today
    ref_lower = ref.strip().lower()

    if ref_lower == "today":
        return today
    if ref_lower == "yesterday":
        return today - timedelta(days=1)
    if ref_lower == "tomorrow":
        return today + timedelta(days=1)
    ref_lower = _DAY_ALIASES.get(ref_lower, ref_lower)
    if ref_lower in _DAY_INDEX:
        return week_start(anchor) + timedelta(days=_DAY_INDEX[ref_lower])
    try:
        return dateutil_parser.parse(
            ref, default=datetime(today.year, today.month, today.day)
        ).date()
    except (ParserError, ValueError, OverflowError):
        return None
