"""Period aggregation of actual transactions and recurring occurrences."""

import logging
from collections import defaultdict
from datetime import UTC
from decimal import Decimal
from typing import Iterable, Optional

from finboard.domain.entities import (
    EXPENSE,
    RECURRING_CATEGORY,
    TRANSACTION_TYPES,
    ZERO,
    PeriodAggregate,
    PeriodTotals,
    RecurringExpansion,
    Transaction,
)
from finboard.domain.local_calendar import DateLike, LocalCalendar
from finboard.utils.amount_parser import to_positive_amount

logger = logging.getLogger(__name__)


def aggregate_period(
    transactions: Iterable[Transaction],
    expansion: Optional[RecurringExpansion],
    range_start: DateLike,
    range_end: DateLike,
    calendar: LocalCalendar,
    monthly_salary: Decimal = ZERO,
) -> PeriodAggregate:
    """Aggregate one range.

    Transactions are kept when ``range_start <= created_at < range_end``.
    Recurring contributions add into the same totals, day and month maps; in
    the category breakdown they are reported under a single "Recurring"
    bucket. ``monthly_salary`` is added once per overlapping calendar month.

    Args:
        transactions: Candidate transactions, possibly wider than the range
        expansion: Recurring occurrences already expanded over this range
        range_start: Inclusive lower bound
        range_end: Exclusive upper bound
        calendar: Local-day convention
        monthly_salary: Flat income added per month

    Returns:
        PeriodAggregate for the range
    """
    start = calendar.localize(range_start)
    end = calendar.localize(range_end)
    utc_start, utc_end = start.astimezone(UTC), end.astimezone(UTC)

    totals = PeriodTotals()
    by_category: dict[str, Decimal] = defaultdict(Decimal)
    by_day: dict[str, PeriodTotals] = defaultdict(PeriodTotals)
    # Every month appears even without activity
    month_keys = calendar.months_in_range(start, end)
    by_month: dict[str, PeriodTotals] = {key: PeriodTotals() for key in month_keys}

    for txn in transactions:
        amount = to_positive_amount(txn.amount)
        if amount is None or txn.type not in TRANSACTION_TYPES:
            logger.debug("Ignoring transaction %s with unusable amount or type", txn.id)
            continue
        created_at = calendar.localize(txn.created_at)
        # Compare instants, not wall-clock times, across DST changes
        if not utc_start <= created_at.astimezone(UTC) < utc_end:
            continue

        totals.add(txn.type, amount)
        if txn.type == EXPENSE:
            by_category[txn.category] += amount
        by_day[calendar.date_key(created_at)].add(txn.type, amount)
        by_month.setdefault(calendar.month_key(created_at), PeriodTotals()).add(
            txn.type, amount
        )

    recurring = PeriodTotals()
    if expansion is not None:
        recurring.merge(expansion.totals)
        totals.merge(expansion.totals)
        for key, bucket in expansion.by_day.items():
            by_day[key].merge(bucket)
        for key, bucket in expansion.by_month.items():
            by_month.setdefault(key, PeriodTotals()).merge(bucket)
        if recurring.expenses > 0:
            by_category[RECURRING_CATEGORY] += recurring.expenses

    salary = to_positive_amount(monthly_salary) or ZERO
    if salary:
        for key in month_keys:
            by_month[key].income += salary

    return PeriodAggregate(
        totals=totals,
        recurring=recurring,
        salary=salary * len(month_keys),
        expense_by_category=dict(by_category),
        by_day=dict(sorted(by_day.items())),
        by_month=dict(sorted(by_month.items())),
    )
