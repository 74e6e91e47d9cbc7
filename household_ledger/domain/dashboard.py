"""Dashboard summary built on the shared budget evaluator"""

from datetime import datetime
from typing import Iterable
from household_ledger.domain.models import AllCategories, Budget, DashboardSummary, Expense, Income
from household_ledger.domain.budgets import DEFAULT_WARNING_THRESHOLD, evaluate_budget


def build_dashboard(
    expenses: Iterable[Expense],
    incomes: Iterable[Income],
    budgets: Iterable[Budget],
    as_of: datetime,
    recent_limit: int = 5,
    warning_threshold: float = DEFAULT_WARNING_THRESHOLD,
) -> DashboardSummary:
    """
    Totals over all records plus the current usage of every budget.

    The first AllCategories budget is reported as total_budget; every other
    budget goes to category_budgets.
    """
    expenses = list(expenses)
    incomes = list(incomes)

    total_expense = sum(e.amount_cents for e in expenses)
    total_income = sum(i.amount_cents for i in incomes)

    total_budget = None
    category_budgets = []
    for budget in budgets:
        usage = evaluate_budget(budget, expenses, as_of, warning_threshold)
        if total_budget is None and isinstance(budget.scope, AllCategories):
            total_budget = usage
        else:
            category_budgets.append(usage)

    recent = sorted(expenses, key=lambda e: e.date, reverse=True)[:recent_limit]

    return DashboardSummary(
        total_expense_cents=total_expense,
        total_income_cents=total_income,
        balance_cents=total_income - total_expense,
        total_budget=total_budget,
        category_budgets=category_budgets,
        recent_expenses=recent,
    )
