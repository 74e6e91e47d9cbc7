"""Prometheus metrics for budget health and record activity"""

from typing import List
from prometheus_client import Counter, Histogram

from household_ledger.domain.models import BudgetUsage

# Budget metrics
budget_evaluation_counter = Counter(
    "ledger_budget_evaluations_total",
    "Budget usage evaluations served",
    ["status"],  # ok | warning | over
)

# Record metrics
record_write_counter = Counter(
    "ledger_records_written_total",
    "Expense, income and budget writes",
    ["kind", "operation"],  # kind: expense | income | budget | ledger
)

report_counter = Counter(
    "ledger_reports_total",
    "Reports generated",
    ["report"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_budget_usage(usages: List[BudgetUsage]) -> None:
    """Count evaluated budgets by status band"""
    for usage in usages:
        budget_evaluation_counter.labels(status=usage.status.value).inc()


def record_write(kind: str, operation: str) -> None:
    record_write_counter.labels(kind=kind, operation=operation).inc()
