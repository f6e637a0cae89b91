"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Callable, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

# Start of the current period, keyed by period name
_PERIOD_START: dict[str, Callable[[date], date]] = {
    "week": lambda today: today - timedelta(days=today.weekday()),
    "month": lambda today: today.replace(day=1),
    "year": lambda today: today.replace(month=1, day=1),
}

_PERIOD_STEP = {
    "week": relativedelta(weeks=1),
    "month": relativedelta(months=1),
    "year": relativedelta(years=1),
}


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports ISO and free-form dates ("2024-01-15", "Jan 15 2024") and
    relative expressions: "today", "yesterday", "this month", "last year",
    "last friday" and so on. "this/last <period>" resolves to the first day
    of that period.

    Args:
        date_str: Date string
        today: Reference date for relative expressions (defaults to today)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = today or date.today()

    if text == "today":
        return today
    if text == "yesterday":
        return today - timedelta(days=1)

    prefix, _, period = text.partition(" ")
    if prefix in ("this", "last") and period in _PERIOD_START:
        start = _PERIOD_START[period](today)
        return start - _PERIOD_STEP[period] if prefix == "last" else start
    if prefix == "last" and period in _WEEKDAYS:
        days_ago = (today.weekday() - _WEEKDAYS.index(period)) % 7 or 7
        return today - timedelta(days=days_ago)

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}") from e
