"""Recurring rule expansion.

Turns monthly and weekly rules into dated occurrences over a half-open range
and accumulates them by category, day and month in the same pass.
"""

import logging
from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable, Iterator, Optional

from finboard.domain.entities import (
    EXPENSE,
    MONTHLY,
    TRANSACTION_TYPES,
    WEEKLY,
    Occurrence,
    PeriodTotals,
    RecurringExpansion,
    RecurringRule,
)
from finboard.domain.local_calendar import (
    DateLike,
    LocalCalendar,
    days_in_month,
    iter_month_starts,
    weekday_index,
)
from finboard.utils.amount_parser import to_positive_amount

logger = logging.getLogger(__name__)

ONE_WEEK = timedelta(days=7)


def expand_recurring_rules(
    rules: Iterable[RecurringRule],
    range_start: DateLike,
    range_end: DateLike,
    calendar: LocalCalendar,
) -> RecurringExpansion:
    """Expand rules over ``[range_start, range_end)``.

    The start is floored to local midnight. The end is floored too, but moves
    to the next day when it carries a time of day, so a range ending "now"
    still includes today's occurrences.

    Args:
        rules: Recurring rules, active or not
        range_start: Inclusive lower bound
        range_end: Exclusive upper bound
        calendar: Local-day convention

    Returns:
        RecurringExpansion with occurrences in rule order and their totals
    """
    first_day = calendar.local_date(range_start)
    end_day = calendar.ceil_day(range_end)
    expansion = RecurringExpansion()
    if end_day <= first_day:
        return expansion

    last_day = end_day - timedelta(days=1)
    by_category: dict[str, Decimal] = defaultdict(Decimal)
    by_day: dict[str, PeriodTotals] = defaultdict(PeriodTotals)
    by_month: dict[str, PeriodTotals] = defaultdict(PeriodTotals)

    for rule in rules:
        amount = _usable_amount(rule)
        if amount is None:
            continue
        if rule.start_date is not None and rule.start_date > last_day:
            continue

        for occurrence_date in _occurrence_dates(rule, first_day, last_day):
            occurrence = Occurrence(
                date=occurrence_date,
                type=rule.type,
                category=rule.category,
                amount=amount,
                rule_id=rule.id,
            )
            expansion.occurrences.append(occurrence)
            expansion.totals.add(rule.type, amount)
            if rule.type == EXPENSE:
                by_category[rule.category] += amount
            by_day[occurrence_date.strftime("%Y-%m-%d")].add(rule.type, amount)
            by_month[occurrence_date.strftime("%Y-%m")].add(rule.type, amount)

    expansion.expense_by_category = dict(by_category)
    expansion.by_day = dict(by_day)
    expansion.by_month = dict(by_month)
    return expansion


def _usable_amount(rule: RecurringRule) -> Optional[Decimal]:
    """Amount of an expandable rule, or None when the rule contributes nothing."""
    if not rule.active:
        return None
    if rule.type not in TRANSACTION_TYPES:
        logger.debug("Skipping rule %s with unknown type %r", rule.id, rule.type)
        return None
    amount = to_positive_amount(rule.amount)
    if amount is None:
        logger.debug("Skipping rule %s with unusable amount %r", rule.id, rule.amount)
    return amount


def _occurrence_dates(
    rule: RecurringRule, first_day: date, last_day: date
) -> Iterator[date]:
    if rule.frequency == MONTHLY:
        return _monthly_dates(rule, first_day, last_day)
    if rule.frequency == WEEKLY:
        return _weekly_dates(rule, first_day, last_day)
    logger.debug("Skipping rule %s with unknown frequency %r", rule.id, rule.frequency)
    return iter(())


def _monthly_dates(
    rule: RecurringRule, first_day: date, last_day: date
) -> Iterator[date]:
    """One date per calendar month overlapping ``[first_day, last_day]``."""
    day_of_month = rule.day_of_month
    if not isinstance(day_of_month, int) or not 1 <= day_of_month <= 31:
        logger.debug("Skipping monthly rule %s without a day of month", rule.id)
        return

    start_date = rule.start_date
    for month_start in iter_month_starts(first_day, last_day):
        month_length = days_in_month(month_start.year, month_start.month)
        month_end = month_start.replace(day=month_length)
        if start_date is not None and start_date > month_end:
            continue

        day = min(day_of_month, month_length)
        if (
            start_date is not None
            and start_date >= month_start
            and start_date.day > day
        ):
            day = start_date.day

        # Keep the date visible inside the requested range
        yield min(max(month_start.replace(day=day), first_day), last_day)


def _weekly_dates(
    rule: RecurringRule, first_day: date, last_day: date
) -> Iterator[date]:
    """Every matching weekday from the later of range start and rule start."""
    day_of_week = rule.day_of_week
    if not isinstance(day_of_week, int) or not 0 <= day_of_week <= 6:
        logger.debug("Skipping weekly rule %s without a day of week", rule.id)
        return

    begin = first_day
    if rule.start_date is not None and rule.start_date > begin:
        begin = rule.start_date

    current = begin + timedelta(days=(day_of_week - weekday_index(begin)) % 7)
    while current <= last_day:
        yield current
        current += ONE_WEEK
