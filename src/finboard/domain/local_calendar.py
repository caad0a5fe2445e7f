"""Calendar arithmetic under a single local-day convention.

Transaction timestamps are stored in UTC but bucket to the user's local day,
so every helper here resolves datetimes through one configured timezone.
Naive datetimes are taken to be local already.
"""

from calendar import monthrange
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Iterator, Optional, Union

from dateutil import tz
from dateutil.relativedelta import relativedelta

DateLike = Union[date, datetime]

ONE_DAY = timedelta(days=1)
ONE_TICK = timedelta(microseconds=1)


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month (``month`` is 1-12)."""
    return monthrange(year, month)[1]


def weekday_index(day: date) -> int:
    """Weekday with Sunday as 0 and Saturday as 6."""
    return (day.weekday() + 1) % 7


def iter_month_starts(first: date, last: date) -> Iterator[date]:
    """Yield the first day of every month from ``first``'s to ``last``'s."""
    current = first.replace(day=1)
    while current <= last:
        yield current
        current += relativedelta(months=1)


class LocalCalendar:
    """Date helpers bound to one timezone."""

    def __init__(self, zone: Optional[tzinfo] = None):
        """Initialize calendar.

        Args:
            zone: Timezone defining the local day. Defaults to the system zone.
        """
        self.zone = zone if zone is not None else tz.tzlocal()

    @classmethod
    def from_name(cls, name: Optional[str]) -> "LocalCalendar":
        """Build a calendar from an IANA zone name such as 'Asia/Jerusalem'.

        Raises:
            ValueError: If the zone name is not recognized
        """
        if not name:
            return cls()
        zone = tz.gettz(name)
        if zone is None:
            raise ValueError(f"Unknown timezone '{name}'")
        return cls(zone)

    def localize(self, value: DateLike) -> datetime:
        """Return ``value`` as an aware datetime in the local zone.

        Plain dates become local midnight.
        """
        if not isinstance(value, datetime):
            return self.midnight(value)
        if value.tzinfo is None:
            return value.replace(tzinfo=self.zone)
        return value.astimezone(self.zone)

    def now(self) -> datetime:
        return datetime.now(self.zone)

    def midnight(self, day: date) -> datetime:
        return datetime.combine(day, time.min, tzinfo=self.zone)

    def local_date(self, value: DateLike) -> date:
        """Calendar day of ``value`` in the local zone."""
        if isinstance(value, datetime):
            return self.localize(value).date()
        return value

    def floor_day(self, value: DateLike) -> datetime:
        return self.midnight(self.local_date(value))

    def ceil_day(self, value: DateLike) -> date:
        """Local day at or after ``value``: a time-of-day rolls to the next day."""
        local = self.localize(value)
        if local.time() != time.min:
            return local.date() + ONE_DAY
        return local.date()

    def last_day_before(self, value: DateLike) -> date:
        """Local day of the instant one tick before ``value``."""
        return (self.localize(value) - ONE_TICK).date()

    def start_of_month(self, value: DateLike) -> datetime:
        """First day of the month containing ``value``, at local midnight."""
        return self.midnight(self.local_date(value).replace(day=1))

    def add_months(self, value: DateLike, months: int) -> datetime:
        """First of the month ``months`` away from ``value``'s month.

        The day component is always normalized to 1.
        """
        first = self.local_date(value).replace(day=1) + relativedelta(months=months)
        return self.midnight(first)

    def count_weekday_in_range(
        self, start: DateLike, end_inclusive: DateLike, weekday: int
    ) -> int:
        """Count days with ``weekday`` (0 = Sunday) in ``[start, end_inclusive]``."""
        first_day = self.local_date(start)
        last_day = self.local_date(end_inclusive)
        if last_day < first_day:
            return 0
        offset = (weekday - weekday_index(first_day)) % 7
        first_match = first_day + timedelta(days=offset)
        if first_match > last_day:
            return 0
        return 1 + (last_day - first_match).days // 7

    def months_in_range(self, start: DateLike, end_exclusive: DateLike) -> list[str]:
        """Month keys of every calendar month overlapping ``[start, end_exclusive)``."""
        if self.localize(end_exclusive) <= self.localize(start):
            return []
        first_day = self.local_date(start)
        last_day = self.last_day_before(end_exclusive)
        return [
            month_start.strftime("%Y-%m")
            for month_start in iter_month_starts(first_day, last_day)
        ]

    def count_months_in_range(self, start: DateLike, end_exclusive: DateLike) -> int:
        return len(self.months_in_range(start, end_exclusive))

    def date_key(self, value: DateLike) -> str:
        """Local ``YYYY-MM-DD`` key."""
        return self.local_date(value).strftime("%Y-%m-%d")

    def month_key(self, value: DateLike) -> str:
        """Local ``YYYY-MM`` key."""
        return self.local_date(value).strftime("%Y-%m")
