"""Merged transaction history feed"""

from typing import Iterable, List
from household_ledger.domain.models import Expense, HistoryEntry, Income
from household_ledger.domain.categories import lookup

INCOME_COLOR = "#20BF55"
HISTORY_KINDS = ("all", "expenses", "income")


def transaction_history(
    expenses: Iterable[Expense],
    incomes: Iterable[Income],
    kind: str = "all",
    search: str = "",
) -> List[HistoryEntry]:
    """
    Combine expenses and incomes into one feed, newest first.

    kind: "all", "expenses" or "income"
    search: case-insensitive substring matched against description or category name
    """
    if kind not in HISTORY_KINDS:
        raise ValueError(f"Unknown history kind: {kind!r}")

    entries: List[HistoryEntry] = []
    if kind in ("all", "expenses"):
        for e in expenses:
            meta = lookup(e.category)
            entries.append(
                HistoryEntry(
                    id=e.id,
                    kind="expense",
                    date=e.date,
                    description=e.description,
                    category_name=meta.name,
                    amount_cents=-e.amount_cents,
                    recurring=e.recurring,
                    recurring_frequency=e.recurring_frequency,
                    color=meta.color,
                )
            )
    if kind in ("all", "income"):
        for i in incomes:
            entries.append(
                HistoryEntry(
                    id=i.id,
                    kind="income",
                    date=i.date,
                    description=i.source,
                    category_name="Income",
                    amount_cents=i.amount_cents,
                    recurring=i.recurring,
                    recurring_frequency=i.recurring_frequency,
                    color=INCOME_COLOR,
                )
            )

    needle = search.strip().lower()
    if needle:
        entries = [
            entry for entry in entries
            if needle in entry.description.lower() or needle in entry.category_name.lower()
        ]

    return sorted(entries, key=lambda entry: entry.date, reverse=True)
