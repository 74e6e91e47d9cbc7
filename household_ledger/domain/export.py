"""CSV export of expense records"""

import csv
import io
from typing import Iterable
from household_ledger.domain.models import Expense

CSV_HEADER = ["ID", "Amount", "Description", "Category", "Date", "Recurring", "RecurringFrequency"]


def format_cents(amount_cents: int) -> str:
    """Render integer cents as a plain decimal string: 4250 -> "42.50" """
    sign = "-" if amount_cents < 0 else ""
    whole, cents = divmod(abs(amount_cents), 100)
    return f"{sign}{whole}.{cents:02d}"


def export_expenses_csv(expenses: Iterable[Expense]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for e in expenses:
        writer.writerow([
            e.id,
            format_cents(e.amount_cents),
            e.description,
            e.category.value,
            e.date.isoformat(),
            "true" if e.recurring else "false",
            e.recurring_frequency.value if e.recurring_frequency else "",
        ])
    return buffer.getvalue()
