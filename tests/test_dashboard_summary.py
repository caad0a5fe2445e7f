"""Tests for dashboard summary building."""

from datetime import datetime, UTC
from decimal import Decimal

import pytest
from dateutil import tz

from finboard.domain.entities import RangeSelection, RecurringRule, Transaction
from finboard.domain.local_calendar import LocalCalendar
from finboard.domain.summary import (
    SummaryService,
    build_dashboard_summary,
    category_breakdown,
    compute_delta,
    previous_range,
    resolve_range,
)


def make_txn(txn_id, amount, created_at, type_="expense", category="Food") -> Transaction:
    return Transaction(
        id=txn_id,
        amount=Decimal(amount),
        description=f"Transaction {txn_id}",
        category=category,
        type=type_,
        created_at=created_at,
    )


BILLS_RULE = RecurringRule(
    id=1,
    amount=Decimal("1000"),
    description="Rent",
    category="Bills",
    type="expense",
    frequency="monthly",
    day_of_month=1,
)


@pytest.mark.parametrize(
    "current, previous, expected",
    [
        ("0", "0", 0.0),
        ("100", "0", None),
        ("150", "100", 0.5),
        ("50", "100", -0.5),
        ("-50", "-100", 0.5),
    ],
)
def test_compute_delta(current, previous, expected):
    delta = compute_delta(Decimal(current), Decimal(previous))
    if expected is None:
        assert delta is None
    else:
        assert delta == pytest.approx(expected)


class TestResolveRange:
    @pytest.fixture
    def now(self, local_dt):
        return local_dt(2024, 5, 15, 12)

    def test_month(self, calendar, local_dt, now):
        assert resolve_range(RangeSelection("month"), now, calendar) == (
            local_dt(2024, 5, 1),
            now,
        )

    def test_three_months(self, calendar, local_dt, now):
        start, end = resolve_range(RangeSelection("3m"), now, calendar)
        assert (start, end) == (local_dt(2024, 3, 1), now)

    def test_year(self, calendar, local_dt, now):
        start, end = resolve_range(RangeSelection("year"), now, calendar)
        assert (start, end) == (local_dt(2023, 6, 1), now)

    def test_custom_months(self, calendar, local_dt, now):
        selection = RangeSelection("custom", from_month="2024-01", to_month="2024-03")
        assert resolve_range(selection, now, calendar) == (
            local_dt(2024, 1, 1),
            local_dt(2024, 4, 1),
        )

    def test_custom_to_now(self, calendar, local_dt, now):
        selection = RangeSelection("custom", from_month="2024-02", to_now=True)
        assert resolve_range(selection, now, calendar) == (local_dt(2024, 2, 1), now)

    def test_custom_inverted_forces_one_month(self, calendar, local_dt, now):
        selection = RangeSelection("custom", from_month="2024-05", to_month="2024-02")
        assert resolve_range(selection, now, calendar) == (
            local_dt(2024, 5, 1),
            local_dt(2024, 6, 1),
        )

    def test_custom_invalid_end_forces_one_month(self, calendar, local_dt, now):
        selection = RangeSelection("custom", from_month="2024-01", to_month="soon")
        assert resolve_range(selection, now, calendar) == (
            local_dt(2024, 1, 1),
            local_dt(2024, 2, 1),
        )

    @pytest.mark.parametrize(
        "selection",
        [
            RangeSelection("custom", from_month="not-a-month", to_month="2024-03"),
            RangeSelection("custom"),
            RangeSelection("decade"),
            RangeSelection("custom", from_month="9999-12", to_now=True),
            RangeSelection("custom", from_month="9999-12", to_month="2024-01"),
        ],
    )
    def test_fallback_to_current_month(self, calendar, local_dt, now, selection):
        assert resolve_range(selection, now, calendar) == (local_dt(2024, 5, 1), now)

    def test_naive_now_is_local(self, calendar, local_dt):
        start, end = resolve_range(RangeSelection("month"), datetime(2024, 5, 15, 12), calendar)
        assert start == local_dt(2024, 5, 1)
        assert end == local_dt(2024, 5, 15, 12)


def test_previous_range_same_duration(local_dt):
    start, end = local_dt(2024, 1, 1), local_dt(2024, 4, 1)
    prev_start, prev_end = previous_range(start, end)

    assert prev_end == start
    assert end - start == prev_end - prev_start
    assert prev_start == local_dt(2023, 10, 2)


class TestBuildDashboardSummary:
    @pytest.fixture
    def now(self, local_dt):
        return local_dt(2024, 5, 15, 12)

    @pytest.fixture
    def transactions(self, local_dt):
        return [
            make_txn(1, "200", local_dt(2024, 5, 3, 9)),
            make_txn(2, "500", local_dt(2024, 5, 10, 18), type_="income", category="Salary"),
            make_txn(3, "100", local_dt(2024, 4, 20, 14), category="Transport"),
        ]

    def test_current_and_previous_windows(self, calendar, now, transactions):
        summary = build_dashboard_summary(
            RangeSelection("month"), now, transactions, [BILLS_RULE], Decimal("0"), calendar
        )

        assert summary.month_label == "May 2024"
        assert summary.summary.expenses == Decimal("1200")
        assert summary.summary.income == Decimal("500")
        assert summary.planned_recurring.expenses == Decimal("1000")
        assert summary.balance == Decimal("-700")

        kpis = {kpi.label: kpi for kpi in summary.kpis}
        assert kpis["Expenses"].value == Decimal("1200")
        # Previous window: 100 actual plus the rule clamped into April
        assert kpis["Expenses"].delta == pytest.approx(100 / 1100)
        assert kpis["Income"].delta is None
        assert kpis["Balance (incl. salary)"].delta == pytest.approx(400 / 1100)

    def test_category_and_series(self, calendar, now, transactions):
        summary = build_dashboard_summary(
            RangeSelection("month"), now, transactions, [BILLS_RULE], Decimal("0"), calendar
        )

        assert [(c.category, c.total) for c in summary.by_category] == [
            ("Food", Decimal("200")),
            ("Recurring", Decimal("1000")),
        ]
        assert [point.date for point in summary.by_day] == [
            "2024-05-01",
            "2024-05-03",
            "2024-05-10",
        ]
        assert [(p.month, p.expenses, p.income) for p in summary.by_month] == [
            ("2024-05", Decimal("1200"), Decimal("500")),
        ]

    def test_salary_counts_toward_balance(self, calendar, now, transactions):
        summary = build_dashboard_summary(
            RangeSelection("month"), now, transactions, [BILLS_RULE], Decimal("3000"), calendar
        )

        assert summary.balance == Decimal("2300")
        assert summary.summary.income == Decimal("500")
        assert summary.by_month[0].income == Decimal("3500")

    def test_empty_data_has_zero_deltas(self, calendar, now):
        summary = build_dashboard_summary(
            RangeSelection("3m"), now, [], [], Decimal("0"), calendar
        )

        assert summary.month_label == "Last 3 months"
        assert all(kpi.delta == 0.0 for kpi in summary.kpis)
        assert summary.by_category == ()
        assert [point.month for point in summary.by_month] == [
            "2024-03",
            "2024-04",
            "2024-05",
        ]

    def test_custom_range_at_calendar_end_falls_back(self, calendar, now):
        selection = RangeSelection("custom", from_month="9999-12", to_now=True)
        summary = build_dashboard_summary(selection, now, [], [], Decimal("0"), calendar)

        assert summary.month_label == "May 2024"

    def test_custom_label_spans_months(self, calendar, now):
        selection = RangeSelection("custom", from_month="2024-01", to_month="2024-03")
        summary = build_dashboard_summary(selection, now, [], [], Decimal("0"), calendar)

        assert summary.month_label == "January 2024 to March 2024"

    def test_to_dict_contract(self, calendar, now, transactions):
        payload = build_dashboard_summary(
            RangeSelection("month"), now, transactions, [BILLS_RULE], Decimal("0"), calendar
        ).to_dict()

        assert set(payload) == {
            "monthLabel",
            "summary",
            "plannedRecurring",
            "kpis",
            "byCategory",
            "byDay",
            "byMonth",
        }
        assert payload["summary"] == {"income": 500.0, "expenses": 1200.0}
        assert payload["plannedRecurring"] == {"expenses": 1000.0, "income": 0.0}
        assert [kpi["label"] for kpi in payload["kpis"]] == [
            "Income",
            "Expenses",
            "Balance (incl. salary)",
        ]


def test_category_breakdown_order():
    breakdown = category_breakdown(
        {
            "Recurring": Decimal("5"),
            "Zoo": Decimal("1"),
            "Other": Decimal("2"),
            "Food": Decimal("3"),
            "Health": Decimal("0"),
            "Aquarium": Decimal("4"),
        }
    )

    assert [item.category for item in breakdown] == [
        "Food",
        "Other",
        "Aquarium",
        "Zoo",
        "Recurring",
    ]


class TestSummaryService:
    def test_build_summary_from_database(self, temp_db, calendar, local_dt):
        temp_db.create_transaction(
            amount=Decimal("40.50"),
            description="Groceries",
            category="Food",
            type="expense",
            created_at=local_dt(2024, 3, 4, 10),
        )
        temp_db.create_transaction(
            amount=Decimal("60"),
            description="Last month groceries",
            category="Food",
            type="expense",
            created_at=local_dt(2024, 2, 10, 10),
        )
        temp_db.create_recurring_rule(
            amount=Decimal("15"),
            description="Gym",
            category="Health",
            type="expense",
            frequency="weekly",
            day_of_week=1,
        )
        temp_db.set_monthly_salary(Decimal("2000"))

        service = SummaryService(temp_db, calendar)
        summary = service.build_summary(
            RangeSelection("custom", from_month="2024-03", to_month="2024-03"),
            now=local_dt(2024, 5, 1),
        )

        # Mondays in March 2024: 4, 11, 18, 25
        assert summary.summary.expenses == Decimal("100.50")
        assert summary.planned_recurring.expenses == Decimal("60")
        assert summary.balance == Decimal("1899.50")
        assert summary.month_label == "March 2024"

    def test_stored_utc_buckets_by_local_day(self, temp_db, calendar, local_dt):
        temp_db.create_transaction(
            amount=Decimal("25"),
            description="Late dinner",
            category="Food",
            type="expense",
            created_at=datetime(2024, 1, 31, 23, 30, tzinfo=UTC),
        )

        summary = SummaryService(temp_db, calendar).build_summary(
            RangeSelection("custom", from_month="2024-02", to_month="2024-02"),
            now=local_dt(2024, 3, 1),
        )

        assert summary.summary.expenses == Decimal("25")
        assert [point.date for point in summary.by_day] == ["2024-02-01"]


class TestDaylightSavingWindows:
    @pytest.fixture
    def berlin(self):
        return LocalCalendar(tz.gettz("Europe/Berlin"))

    def test_previous_range_has_same_utc_duration(self, berlin):
        now = datetime(2024, 4, 15, 12, tzinfo=berlin.zone)
        start, end = resolve_range(RangeSelection("month"), now, berlin)

        prev_start, prev_end = previous_range(start, end)

        assert prev_end == start
        assert prev_end.astimezone(UTC) - prev_start.astimezone(UTC) == (
            end.astimezone(UTC) - start.astimezone(UTC)
        )
        # Clocks went forward on 2024-03-31, so the window starts at 11:00 CET
        assert prev_start == datetime(2024, 3, 17, 11, tzinfo=berlin.zone)

    def test_previous_window_includes_its_first_hour(self, berlin):
        now = datetime(2024, 4, 15, 12, tzinfo=berlin.zone)
        # 11:30 CET on Mar 17, within the first hour of the previous window
        transactions = [make_txn(1, "80", datetime(2024, 3, 17, 10, 30, tzinfo=UTC))]

        summary = build_dashboard_summary(
            RangeSelection("month"), now, transactions, [], Decimal("0"), berlin
        )

        kpis = {kpi.label: kpi for kpi in summary.kpis}
        assert kpis["Expenses"].value == Decimal("0")
        assert kpis["Expenses"].delta == pytest.approx(-1.0)
