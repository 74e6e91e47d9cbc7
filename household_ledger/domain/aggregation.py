"""Expense aggregation over time windows"""

from datetime import datetime
from typing import Dict, Iterable, List, Union
from household_ledger.domain.models import Category, Expense, Window

ALL = "all"

CategoryFilter = Union[Category, str]


def _matches(expense: Expense, category_filter: CategoryFilter) -> bool:
    return category_filter == ALL or expense.category == category_filter


def filter_in_window(
    expenses: Iterable[Expense],
    window: Window,
    category_filter: CategoryFilter = ALL,
) -> List[Expense]:
    """Expenses dated within [window.start, window.end), optionally for one category"""
    return [
        e for e in expenses
        if window.contains(e.date) and _matches(e, category_filter)
    ]


def sum_in_window(
    expenses: Iterable[Expense],
    window: Window,
    category_filter: CategoryFilter = ALL,
) -> int:
    """
    Total cents spent within a window.

    category_filter is a Category or ALL ("all"). An expense dated exactly at
    window.end belongs to the next window and is not counted.
    """
    return sum(e.amount_cents for e in filter_in_window(expenses, window, category_filter))


def totals_by_category(
    expenses: Iterable[Expense],
    start: datetime,
    end: datetime,
    inclusive_end: bool = False,
) -> Dict[Category, int]:
    """Sum cents per category for expenses dated in [start, end) (or [start, end])"""
    totals: Dict[Category, int] = {}
    for expense in expenses:
        if expense.date < start:
            continue
        if expense.date > end or (expense.date == end and not inclusive_end):
            continue
        totals[expense.category] = totals.get(expense.category, 0) + expense.amount_cents
    return totals
