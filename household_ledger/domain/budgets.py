"""Budget usage evaluation - core business logic shared by every budget view"""

from datetime import datetime
from typing import Iterable, List
from household_ledger.domain.models import (
    AllCategories,
    Budget,
    BudgetStatus,
    BudgetUsage,
    Expense,
)
from household_ledger.domain.exceptions import InvalidBudgetError
from household_ledger.domain.aggregation import ALL, sum_in_window
from household_ledger.domain.periods import window_containing

DEFAULT_WARNING_THRESHOLD = 80.0


def determine_status(percentage_used: float, warning_threshold: float = DEFAULT_WARNING_THRESHOLD) -> BudgetStatus:
    """
    Map percentage used to a status band.

    - > 100%: over budget
    - > warning_threshold: warning (approaching the limit)
    - otherwise: ok
    """
    if percentage_used > 100:
        return BudgetStatus.OVER
    elif percentage_used > warning_threshold:
        return BudgetStatus.WARNING
    return BudgetStatus.OK


def evaluate_budget(
    budget: Budget,
    expenses: Iterable[Expense],
    as_of: datetime,
    warning_threshold: float = DEFAULT_WARNING_THRESHOLD,
) -> BudgetUsage:
    """
    Evaluate how much of a budget is consumed in the window containing as_of.

    Steps:
    1. Find the recurring window anchored at budget.start_date that contains as_of
    2. Sum expenses in that window (all categories for an AllCategories scope)
    3. Derive remaining, percentage used and over-budget flag

    Pure and deterministic: the same (budget, expenses, as_of) always yields
    an equal BudgetUsage.

    Raises:
        InvalidBudgetError: budget limit is zero or negative
    """
    if budget.limit_cents <= 0:
        raise InvalidBudgetError(f"Budget limit must be positive, got {budget.limit_cents}")

    window = window_containing(budget.period, budget.start_date, as_of)

    if isinstance(budget.scope, AllCategories):
        category_filter = ALL
    else:
        category_filter = budget.scope.category

    spent = sum_in_window(expenses, window, category_filter)
    percentage_used = 100 * spent / budget.limit_cents

    return BudgetUsage(
        budget=budget,
        window=window,
        spent_cents=spent,
        remaining_cents=budget.limit_cents - spent,
        percentage_used=percentage_used,
        is_over_budget=percentage_used > 100,
        status=determine_status(percentage_used, warning_threshold),
        has_started=as_of >= budget.start_date,
    )


def evaluate_budgets(
    budgets: Iterable[Budget],
    expenses: Iterable[Expense],
    as_of: datetime,
    warning_threshold: float = DEFAULT_WARNING_THRESHOLD,
) -> List[BudgetUsage]:
    """Evaluate every budget against the same expense snapshot, preserving order"""
    expenses = list(expenses)
    return [evaluate_budget(b, expenses, as_of, warning_threshold) for b in budgets]
