"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

PERIODS = (
    "this-month",
    "this-quarter",
    "this-year",
    "last-month",
    "last-quarter",
    "last-year",
)


def quarter_start(value: date) -> date:
    """Return the first day of the calendar quarter containing value."""
    return value.replace(month=3 * ((value.month - 1) // 3) + 1, day=1)


def _period_start(period: str, today: date) -> Optional[date]:
    """Start of a named period relative to today ("last month", "this quarter", ...)."""
    when, _, unit = period.partition(" ")
    offsets = {"last": -1, "this": 0, "next": 1}
    if when not in offsets:
        return None
    step = offsets[when]

    if unit == "month":
        return today.replace(day=1) + relativedelta(months=step)
    if unit == "quarter":
        return quarter_start(today) + relativedelta(months=3 * step)
    if unit == "year":
        return today.replace(month=1, day=1) + relativedelta(years=step)
    if unit == "week":
        return today - timedelta(days=today.weekday()) + timedelta(weeks=step)
    if when == "last" and unit in WEEKDAYS:
        days_ago = (today.weekday() - WEEKDAYS.index(unit)) % 7 or 7
        return today - timedelta(days=days_ago)
    return None


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this quarter",
      "next year", "last friday"

    Relative periods resolve to their first day.

    Args:
        date_str: Date string in various formats
        today: Reference date for relative dates (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in relative_dates:
        return relative_dates[text]

    start = _period_start(text, today)
    if start is not None:
        return start

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a reporting period.

    "this-*" periods end today; "last-*" periods cover the whole previous
    month, quarter or year.

    Args:
        period: One of PERIODS
        today: Reference date (defaults to date.today())

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        ValueError: If period string is not recognized
    """
    key = period.strip().lower()
    today = today or date.today()

    if key not in PERIODS:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}"
        )

    when, _, unit = key.partition("-")
    start = _period_start(f"{when} {unit}", today)
    if when == "this":
        return (start, today)

    current = _period_start(f"this {unit}", today)
    return (start, current - timedelta(days=1))
