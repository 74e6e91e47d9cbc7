"""Unit tests for reporting aggregations"""

import pytest
from datetime import datetime
from household_ledger.domain.models import Category, Expense, Income
from household_ledger.domain.reports import (
    ReportRange,
    income_vs_expense,
    monthly_trend,
    range_start,
    report_summary,
    spending_by_category,
    spending_by_range,
)

AS_OF = datetime(2023, 7, 20, 12, 0)


def test_monthly_trend_zero_fill():
    """No expenses: still exactly six buckets, all zero"""
    buckets = monthly_trend([], 6, AS_OF)

    assert len(buckets) == 6
    assert [b.label for b in buckets] == [
        "Feb 2023", "Mar 2023", "Apr 2023", "May 2023", "Jun 2023", "Jul 2023",
    ]
    assert all(b.total_cents == 0 for b in buckets)


def test_monthly_trend_crosses_year_boundary():
    buckets = monthly_trend([], 3, datetime(2024, 2, 10))

    assert [(b.year, b.month) for b in buckets] == [(2023, 12), (2024, 1), (2024, 2)]


def test_monthly_trend_totals(july_expenses: list[Expense]):
    expenses = july_expenses + [
        Expense("old", 5000, "Too old", Category.FOOD, datetime(2023, 1, 31)),
        Expense("may", 2500, "Lunch", Category.FOOD, datetime(2023, 5, 2)),
        Expense("future", 9900, "Not yet", Category.FOOD, datetime(2023, 7, 25)),
    ]

    buckets = monthly_trend(expenses, 6, AS_OF)
    totals = {b.label: b.total_cents for b in buckets}

    assert totals["Jul 2023"] == 136349
    assert totals["May 2023"] == 2500
    assert totals["Feb 2023"] == 0
    assert sum(totals.values()) == 138849


def test_monthly_trend_rejects_non_positive_count():
    with pytest.raises(ValueError):
        monthly_trend([], 0, AS_OF)


def test_income_vs_expense(july_expenses: list[Expense], july_incomes: list[Income]):
    buckets = income_vs_expense(july_expenses, july_incomes, 6, AS_OF)

    assert len(buckets) == 6
    assert buckets[0].label == "Feb 2023"  # oldest first
    july = buckets[-1]
    assert july.income_cents == 320000
    assert july.expense_cents == 136349
    assert july.savings_cents == 183651
    june = buckets[-2]
    assert (june.income_cents, june.expense_cents, june.savings_cents) == (0, 0, 0)


def test_income_vs_expense_negative_savings():
    expenses = [Expense("1", 50000, "Laptop", Category.SHOPPING, datetime(2023, 6, 3))]
    incomes = [Income("1", 20000, "Side gig", datetime(2023, 6, 20))]

    buckets = income_vs_expense(expenses, incomes, 2, AS_OF)

    assert buckets[0].label == "Jun 2023"
    assert buckets[0].savings_cents == -30000


def test_spending_by_category_sorted_descending(july_expenses: list[Expense]):
    """Last 7 days: Jul 13 12:00 through Jul 20 12:00"""
    chart = spending_by_category(july_expenses, AS_OF, 7)

    assert [c.category for c in chart] == ["food", "transport", "entertainment"]
    assert [c.value_cents for c in chart] == [4250, 3500, 1099]
    assert chart[0].name == "Food & Dining"
    assert chart[0].color == "#FF6B6B"


def test_spending_by_category_includes_both_ends():
    expenses = [
        Expense("start", 100, "At start", Category.FOOD, datetime(2023, 7, 13, 12, 0)),
        Expense("end", 200, "At as_of", Category.FOOD, AS_OF),
        Expense("before", 400, "Before", Category.FOOD, datetime(2023, 7, 13, 11, 59)),
    ]

    chart = spending_by_category(expenses, AS_OF, 7)

    assert chart[0].value_cents == 300


def test_spending_by_category_ties_use_registry_order():
    expenses = [
        Expense("1", 1000, "Bus", Category.TRANSPORT, datetime(2023, 7, 19)),
        Expense("2", 1000, "Snack", Category.FOOD, datetime(2023, 7, 19)),
    ]

    chart = spending_by_category(expenses, AS_OF, 7)

    assert [c.category for c in chart] == ["food", "transport"]


def test_spending_by_category_empty():
    assert spending_by_category([], AS_OF, 30) == []


def test_range_start():
    assert range_start(AS_OF, ReportRange.WEEK) == datetime(2023, 7, 13, 12, 0)
    assert range_start(AS_OF, ReportRange.MONTH) == datetime(2023, 6, 20, 12, 0)
    assert range_start(AS_OF, ReportRange.QUARTER) == datetime(2023, 4, 20, 12, 0)
    assert range_start(AS_OF, ReportRange.YEAR) == datetime(2022, 7, 20, 12, 0)
    assert range_start(datetime(2023, 3, 31), ReportRange.MONTH) == datetime(2023, 2, 28)


def test_spending_by_range_month(july_expenses: list[Expense]):
    chart = spending_by_range(july_expenses, AS_OF, ReportRange.MONTH)

    assert [c.category for c in chart] == ["housing", "utilities", "food", "transport", "entertainment"]
    assert sum(c.value_cents for c in chart) == 136349


def test_report_summary_week(july_expenses: list[Expense]):
    """Jul 13 12:00 through Jul 20 12:00: food, entertainment and transport"""
    summary = report_summary(july_expenses, AS_OF, ReportRange.WEEK)

    assert summary.start == datetime(2023, 7, 13, 12, 0)
    assert summary.end == AS_OF
    assert summary.total_cents == 8849
    assert summary.average_daily_cents == 1264
    assert summary.top_category.category == "food"
    assert summary.top_category.value_cents == 4250


def test_report_summary_month_uses_thirty_day_divisor(july_expenses: list[Expense]):
    summary = report_summary(july_expenses, AS_OF, ReportRange.MONTH)

    assert summary.total_cents == 136349
    assert summary.average_daily_cents == 4545  # 4544.97 rounded
    assert summary.top_category.name == "Housing & Rent"


def test_report_summary_rounds_half_up():
    expenses = [Expense("1", 45, "Gum", Category.FOOD, datetime(2023, 7, 19))]

    summary = report_summary(expenses, AS_OF, "month")

    assert summary.average_daily_cents == 2


def test_report_summary_without_spending():
    summary = report_summary([], AS_OF, ReportRange.YEAR)

    assert summary.start == datetime(2022, 7, 20, 12, 0)
    assert summary.total_cents == 0
    assert summary.average_daily_cents == 0
    assert summary.top_category is None


def test_range_start_before_calendar_start():
    with pytest.raises(ValueError):
        range_start(datetime(1, 6, 1), ReportRange.YEAR)
