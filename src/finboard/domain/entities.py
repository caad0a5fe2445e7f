"""Domain model entities for finboard.

These are pure data classes representing business concepts, independent of
database schema. Persisted records (transactions, recurring rules) are frozen;
the aggregation containers are plain mutable accumulators local to one call.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from typing import Any, Optional

EXPENSE = "expense"
INCOME = "income"
TRANSACTION_TYPES = (EXPENSE, INCOME)

MONTHLY = "monthly"
WEEKLY = "weekly"
FREQUENCIES = (MONTHLY, WEEKLY)

CATEGORIES = (
    "Food",
    "Transport",
    "Bills",
    "Entertainment",
    "Shopping",
    "Health",
    "Salary",
    "Other",
)

# Category bucket that carries planned (recurring) spend in breakdowns
RECURRING_CATEGORY = "Recurring"

RANGE_TOKENS = ("month", "3m", "year", "custom")

ZERO = Decimal("0")


@dataclass(frozen=True)
class Transaction:
    """Recorded expense or income."""

    id: int
    amount: Decimal
    description: str
    category: str
    type: str
    created_at: datetime
    notes: Optional[str] = None
    tags: tuple[str, ...] = ()
    receipt_path: Optional[str] = None


@dataclass(frozen=True)
class RecurringRule:
    """Recurring payment or income template.

    ``day_of_month`` is meaningful for monthly rules, ``day_of_week``
    (0 = Sunday .. 6 = Saturday) for weekly rules.
    """

    id: int
    amount: Decimal
    description: str
    category: str
    type: str
    frequency: str
    day_of_month: Optional[int] = None
    day_of_week: Optional[int] = None
    active: bool = True
    start_date: Optional[date] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Occurrence:
    """One dated instance of a recurring rule within a queried range."""

    date: date
    type: str
    category: str
    amount: Decimal
    rule_id: int


@dataclass
class PeriodTotals:
    """Expense and income sums."""

    expenses: Decimal = ZERO
    income: Decimal = ZERO

    def add(self, type_: str, amount: Decimal) -> None:
        if type_ == EXPENSE:
            self.expenses += amount
        elif type_ == INCOME:
            self.income += amount

    def merge(self, other: "PeriodTotals") -> None:
        self.expenses += other.expenses
        self.income += other.income


@dataclass
class RecurringExpansion:
    """Occurrences of a rule set over a range, with their accumulators."""

    occurrences: list[Occurrence] = field(default_factory=list)
    totals: PeriodTotals = field(default_factory=PeriodTotals)
    expense_by_category: dict[str, Decimal] = field(default_factory=dict)
    by_day: dict[str, PeriodTotals] = field(default_factory=dict)
    by_month: dict[str, PeriodTotals] = field(default_factory=dict)


@dataclass
class PeriodAggregate:
    """Aggregated view of one range.

    ``totals`` covers actual transactions plus recurring occurrences;
    ``recurring`` is the planned part of it. ``salary`` is the periodic income
    for the months the range overlaps and is kept out of ``totals``.
    """

    totals: PeriodTotals
    recurring: PeriodTotals
    salary: Decimal
    expense_by_category: dict[str, Decimal]
    by_day: dict[str, PeriodTotals]
    by_month: dict[str, PeriodTotals]

    @property
    def balance(self) -> Decimal:
        return self.salary + self.totals.income - self.totals.expenses


@dataclass(frozen=True)
class RangeSelection:
    """Requested dashboard range.

    ``from_month``/``to_month`` are ``YYYY-MM`` strings and only apply to the
    ``custom`` range.
    """

    range: str = "month"
    from_month: Optional[str] = None
    to_month: Optional[str] = None
    to_now: bool = False


@dataclass(frozen=True)
class Kpi:
    label: str
    value: Decimal
    delta: Optional[float]


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    total: Decimal


@dataclass(frozen=True)
class DaySeriesPoint:
    date: str
    expenses: Decimal
    income: Decimal


@dataclass(frozen=True)
class MonthSeriesPoint:
    month: str
    expenses: Decimal
    income: Decimal


@dataclass(frozen=True)
class DashboardSummary:
    """View-ready summary for one range and its comparison range."""

    month_label: str
    range_start: datetime
    range_end: datetime
    summary: PeriodTotals
    planned_recurring: PeriodTotals
    balance: Decimal
    kpis: tuple[Kpi, ...]
    by_category: tuple[CategoryTotal, ...]
    by_day: tuple[DaySeriesPoint, ...]
    by_month: tuple[MonthSeriesPoint, ...]

    def to_dict(self) -> dict[str, Any]:
        """Render the presentation contract with JSON-friendly values."""
        return {
            "monthLabel": self.month_label,
            "summary": {
                "income": float(self.summary.income),
                "expenses": float(self.summary.expenses),
            },
            "plannedRecurring": {
                "expenses": float(self.planned_recurring.expenses),
                "income": float(self.planned_recurring.income),
            },
            "kpis": [
                {"label": kpi.label, "value": float(kpi.value), "delta": kpi.delta}
                for kpi in self.kpis
            ],
            "byCategory": [
                {"category": item.category, "total": float(item.total)}
                for item in self.by_category
            ],
            "byDay": [
                {
                    "date": point.date,
                    "expenses": float(point.expenses),
                    "income": float(point.income),
                }
                for point in self.by_day
            ],
            "byMonth": [
                {
                    "month": point.month,
                    "expenses": float(point.expenses),
                    "income": float(point.income),
                }
                for point in self.by_month
            ],
        }
