"""Dashboard summary domain service."""

import logging
from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional, Sequence

from finboard.database.base import Database
from finboard.domain.aggregation import aggregate_period
from finboard.domain.entities import (
    CATEGORIES,
    RECURRING_CATEGORY,
    ZERO,
    CategoryTotal,
    DashboardSummary,
    DaySeriesPoint,
    Kpi,
    MonthSeriesPoint,
    PeriodAggregate,
    PeriodTotals,
    RangeSelection,
    RecurringRule,
    Transaction,
)
from finboard.domain.expansion import expand_recurring_rules
from finboard.domain.local_calendar import LocalCalendar
from finboard.utils.date_parser import parse_month

logger = logging.getLogger(__name__)

RANGE_LABELS = {
    "3m": "Last 3 months",
    "year": "Last 12 months",
}


def resolve_range(
    selection: RangeSelection, now: datetime, calendar: LocalCalendar
) -> tuple[datetime, datetime]:
    """Resolve a range selection into ``(start, end)`` boundaries.

    Args:
        selection: Requested range
        now: Reference instant; predefined ranges end here
        calendar: Local-day convention

    Returns:
        Half-open range boundaries as local aware datetimes
    """
    now = calendar.localize(now)
    if selection.range == "3m":
        return calendar.add_months(now, -2), now
    if selection.range == "year":
        return calendar.add_months(now, -11), now
    if selection.range == "custom":
        return _resolve_custom_range(selection, now, calendar)
    if selection.range != "month":
        logger.debug("Unknown range %r, using current month", selection.range)
    return calendar.start_of_month(now), now


def _resolve_custom_range(
    selection: RangeSelection, now: datetime, calendar: LocalCalendar
) -> tuple[datetime, datetime]:
    try:
        start = calendar.midnight(parse_month(selection.from_month))
    except ValueError as e:
        logger.debug("Invalid custom range start, using current month: %s", e)
        return calendar.start_of_month(now), now

    end = start
    if selection.to_now:
        end = now
    else:
        try:
            end = calendar.add_months(parse_month(selection.to_month), 1)
        except ValueError as e:
            logger.debug("Invalid custom range end: %s", e)

    if end <= start:
        try:
            end = calendar.add_months(start, 1)
        except ValueError as e:
            logger.debug("Custom range cannot span a month, using current month: %s", e)
            return calendar.start_of_month(now), now
    return start, end


def previous_range(start: datetime, end: datetime) -> tuple[datetime, datetime]:
    """Range of the same duration immediately before ``[start, end)``.

    Durations are measured in UTC so a daylight saving change inside either
    range does not stretch or shrink the comparison range.
    """
    utc_start = start.astimezone(UTC)
    duration = end.astimezone(UTC) - utc_start
    return (utc_start - duration).astimezone(start.tzinfo), start


def compute_delta(current: Decimal, previous: Decimal) -> Optional[float]:
    """Relative change from ``previous`` to ``current``.

    Returns 0.0 when both are zero and None when only ``previous`` is zero,
    since no percentage change exists from a zero base.
    """
    if previous == 0:
        return 0.0 if current == 0 else None
    return float((current - previous) / abs(previous))


def aggregate_window(
    transactions: Sequence[Transaction],
    rules: Sequence[RecurringRule],
    start: datetime,
    end: datetime,
    calendar: LocalCalendar,
    monthly_salary: Decimal = ZERO,
) -> PeriodAggregate:
    """Expand rules over a window and aggregate them with its transactions."""
    expansion = expand_recurring_rules(rules, start, end, calendar)
    return aggregate_period(
        transactions, expansion, start, end, calendar, monthly_salary=monthly_salary
    )


def build_dashboard_summary(
    selection: RangeSelection,
    now: datetime,
    transactions: Sequence[Transaction],
    rules: Sequence[RecurringRule],
    monthly_salary: Decimal,
    calendar: LocalCalendar,
) -> DashboardSummary:
    """Build the dashboard summary for a range and its comparison range.

    ``transactions`` must cover at least the previous range through the end of
    the current one; each window filters them again by its own boundaries.
    """
    cur_start, cur_end = resolve_range(selection, now, calendar)
    prev_start, prev_end = previous_range(cur_start, cur_end)

    current = aggregate_window(
        transactions, rules, cur_start, cur_end, calendar, monthly_salary
    )
    previous = aggregate_window(
        transactions, rules, prev_start, prev_end, calendar, monthly_salary
    )

    kpis = (
        Kpi(
            label="Income",
            value=current.totals.income,
            delta=compute_delta(current.totals.income, previous.totals.income),
        ),
        Kpi(
            label="Expenses",
            value=current.totals.expenses,
            delta=compute_delta(current.totals.expenses, previous.totals.expenses),
        ),
        Kpi(
            label="Balance (incl. salary)",
            value=current.balance,
            delta=compute_delta(current.balance, previous.balance),
        ),
    )

    return DashboardSummary(
        month_label=build_label(selection, cur_start, cur_end, calendar),
        range_start=cur_start,
        range_end=cur_end,
        summary=PeriodTotals(
            expenses=current.totals.expenses, income=current.totals.income
        ),
        planned_recurring=PeriodTotals(
            expenses=current.recurring.expenses, income=current.recurring.income
        ),
        balance=current.balance,
        kpis=kpis,
        by_category=category_breakdown(current.expense_by_category),
        by_day=tuple(
            DaySeriesPoint(date=key, expenses=bucket.expenses, income=bucket.income)
            for key, bucket in current.by_day.items()
        ),
        by_month=tuple(
            MonthSeriesPoint(month=key, expenses=bucket.expenses, income=bucket.income)
            for key, bucket in current.by_month.items()
        ),
    )


def category_breakdown(expense_by_category: dict[str, Decimal]) -> tuple[CategoryTotal, ...]:
    """Order categories for display and drop empty ones.

    Known categories come first in their canonical order, then any others
    alphabetically, with the recurring bucket last.
    """

    def sort_key(category: str) -> tuple[int, int, str]:
        if category == RECURRING_CATEGORY:
            return (2, 0, category)
        if category in CATEGORIES:
            return (0, CATEGORIES.index(category), category)
        return (1, 0, category)

    return tuple(
        CategoryTotal(category=category, total=expense_by_category[category])
        for category in sorted(expense_by_category, key=sort_key)
        if expense_by_category[category] > 0
    )


def build_label(
    selection: RangeSelection,
    start: datetime,
    end: datetime,
    calendar: LocalCalendar,
) -> str:
    """Display label for a resolved range."""
    if selection.range in RANGE_LABELS:
        return RANGE_LABELS[selection.range]

    first_month = calendar.local_date(start)
    last_month = calendar.last_day_before(end)
    if (first_month.year, first_month.month) == (last_month.year, last_month.month):
        return first_month.strftime("%B %Y")
    return f"{first_month:%B %Y} to {last_month:%B %Y}"


class SummaryService:
    """Service for building dashboard summaries from stored data."""

    def __init__(self, db: Database, calendar: Optional[LocalCalendar] = None):
        """Initialize summary service.

        Args:
            db: Database instance
            calendar: Local-day convention, defaults to the system timezone
        """
        self.db = db
        self.calendar = calendar if calendar is not None else LocalCalendar()

    def build_summary(
        self, selection: RangeSelection, now: Optional[datetime] = None
    ) -> DashboardSummary:
        """Build the dashboard summary for a range selection.

        Transactions are read once for the previous range through the end of
        the current one. Read failures propagate to the caller.

        Args:
            selection: Requested range
            now: Reference instant, defaults to the current time

        Returns:
            DashboardSummary for the selection
        """
        if now is None:
            now = self.calendar.now()
        cur_start, cur_end = resolve_range(selection, now, self.calendar)
        prev_start, _ = previous_range(cur_start, cur_end)

        transactions = self.db.list_transactions(start=prev_start, end=cur_end)
        rules = self.db.list_recurring_rules()
        monthly_salary = self.db.get_monthly_salary()

        summary = build_dashboard_summary(
            selection,
            now,
            transactions,
            rules,
            monthly_salary,
            self.calendar,
        )
        logger.info(
            "Built %s summary from %d transactions and %d rules",
            selection.range,
            len(transactions),
            len(rules),
        )
        return summary
