"""Date parsing utilities."""

from datetime import date, datetime, timedelta
import re
from typing import Optional

from dateutil import parser as date_parser

MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024", etc.) and the
    relative words "today", "yesterday" and "tomorrow".

    Args:
        date_str: Date string in various formats
        today: Day the relative words count from, defaults to the system date

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    if today is None:
        today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_month(month_str: Optional[str]) -> date:
    """Parse a ``YYYY-MM`` month string into the first day of that month.

    Raises:
        ValueError: If the string is missing or not a valid month
    """
    if not month_str:
        raise ValueError("Empty month string")
    match = MONTH_PATTERN.match(month_str.strip())
    if match is None:
        raise ValueError(f"Could not parse month '{month_str}': expected YYYY-MM")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Could not parse month '{month_str}': month out of range")
    return date(year, month, 1)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp such as '2024-01-15T09:30:00Z'.

    Raises:
        ValueError: If the string is not ISO-8601
    """
    try:
        return date_parser.isoparse(value.strip())
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse timestamp '{value}': {e}")
