"""Reporting aggregations - category breakdowns and monthly trends"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, Iterable, List, Tuple
from household_ledger.domain.models import (
    ChartData,
    Expense,
    Income,
    IncomeExpenseBucket,
    MonthBucket,
    ReportSummary,
)
from household_ledger.domain.aggregation import totals_by_category
from household_ledger.domain.categories import lookup, registry_order
from household_ledger.utils.date_utils import add_months, month_label, trailing_months


class ReportRange(str, Enum):
    """Lookback ranges offered by the reports view"""

    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


_RANGE_MONTHS = {
    ReportRange.MONTH: 1,
    ReportRange.QUARTER: 3,
    ReportRange.YEAR: 12,
}

_RANGE_DAYS = {
    ReportRange.WEEK: 7,
    ReportRange.MONTH: 30,
    ReportRange.QUARTER: 90,
    ReportRange.YEAR: 365,
}


def range_start(as_of: datetime, report_range: ReportRange) -> datetime:
    """Start of a report range ending at as_of (calendar-month arithmetic for month+)"""
    report_range = ReportRange(report_range)
    if report_range == ReportRange.WEEK:
        return as_of - timedelta(days=7)
    return add_months(as_of, -_RANGE_MONTHS[report_range])


def _to_chart_data(totals: Dict) -> List[ChartData]:
    ordered = sorted(totals.items(), key=lambda item: (-item[1], registry_order(item[0])))
    chart = []
    for category, value in ordered:
        meta = lookup(category)
        chart.append(ChartData(category=meta.id, name=meta.name, value_cents=value, color=meta.color))
    return chart


def spending_between(expenses: Iterable[Expense], start: datetime, as_of: datetime) -> List[ChartData]:
    """Spending per category for expenses dated in [start, as_of], largest first"""
    return _to_chart_data(totals_by_category(expenses, start, as_of, inclusive_end=True))


def spending_by_category(expenses: Iterable[Expense], as_of: datetime, lookback_days: int) -> List[ChartData]:
    """Spending per category over the trailing lookback_days (both ends inclusive)"""
    if lookback_days < 0:
        raise ValueError(f"lookback_days must be non-negative, got {lookback_days}")
    return spending_between(expenses, as_of - timedelta(days=lookback_days), as_of)


def spending_by_range(expenses: Iterable[Expense], as_of: datetime, report_range: ReportRange) -> List[ChartData]:
    return spending_between(expenses, range_start(as_of, report_range), as_of)


def report_summary(expenses: Iterable[Expense], as_of: datetime, report_range: ReportRange) -> ReportSummary:
    """
    Total, average daily spending and the highest-spending category for a range.

    The daily average divides by a nominal day count per range (7, 30, 90
    or 365), not by the calendar length of the range, and rounds half up to
    the cent.
    """
    report_range = ReportRange(report_range)
    start = range_start(as_of, report_range)
    chart = spending_between(expenses, start, as_of)

    total = sum(c.value_cents for c in chart)
    days = _RANGE_DAYS[report_range]
    return ReportSummary(
        start=start,
        end=as_of,
        total_cents=total,
        average_daily_cents=(total + days // 2) // days,
        top_category=chart[0] if chart else None,
    )


def _monthly_totals(records: Iterable, months: List[Tuple[int, int]], as_of: datetime) -> Dict[Tuple[int, int], int]:
    # Zero-fill so months without records still appear
    totals = {key: 0 for key in months}
    for record in records:
        if record.date > as_of:
            continue
        key = (record.date.year, record.date.month)
        if key in totals:
            totals[key] += record.amount_cents
    return totals


def _check_month_count(month_count: int) -> None:
    if month_count < 1:
        raise ValueError(f"month_count must be at least 1, got {month_count}")


def monthly_trend(expenses: Iterable[Expense], month_count: int, as_of: datetime) -> List[MonthBucket]:
    """
    Total spending per calendar month for the trailing month_count months.

    Returns exactly month_count buckets, oldest first, the last one being
    as_of's month. Expenses dated after as_of are ignored.
    """
    _check_month_count(month_count)
    months = trailing_months(as_of, month_count)
    totals = _monthly_totals(expenses, months, as_of)
    return [
        MonthBucket(year=y, month=m, label=month_label(y, m), total_cents=totals[(y, m)])
        for y, m in months
    ]


def income_vs_expense(
    expenses: Iterable[Expense],
    incomes: Iterable[Income],
    month_count: int,
    as_of: datetime,
) -> List[IncomeExpenseBucket]:
    """Income, expense and savings (income - expense) per month, oldest first"""
    _check_month_count(month_count)
    months = trailing_months(as_of, month_count)
    expense_totals = _monthly_totals(expenses, months, as_of)
    income_totals = _monthly_totals(incomes, months, as_of)

    buckets = []
    for y, m in months:
        income = income_totals[(y, m)]
        expense = expense_totals[(y, m)]
        buckets.append(
            IncomeExpenseBucket(
                year=y,
                month=m,
                label=month_label(y, m),
                income_cents=income,
                expense_cents=expense,
                savings_cents=income - expense,
            )
        )
    return buckets
