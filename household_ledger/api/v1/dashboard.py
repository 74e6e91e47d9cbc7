"""GET /v1/dashboard - totals and current budget usage"""

import time
from datetime import datetime
from fastapi import APIRouter, Depends

from household_ledger.api.v1.schemas import DashboardResponse
from household_ledger.api.dependencies import get_as_of, get_ledger, get_request_id, get_user_id
from household_ledger.config import settings
from household_ledger.infrastructure.database.repositories import LedgerRepository
from household_ledger.infrastructure.observability.logging import log_budget_usage
from household_ledger.infrastructure.observability.metrics import record_budget_usage
from household_ledger.domain.dashboard import build_dashboard

router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    request_id: str = Depends(get_request_id),
    user_id: str = Depends(get_user_id),
    as_of: datetime = Depends(get_as_of),
    ledger: LedgerRepository = Depends(get_ledger),
):
    start_time = time.time()
    snapshot = ledger.load_snapshot(user_id)
    summary = build_dashboard(
        snapshot.expenses,
        snapshot.incomes,
        snapshot.budgets,
        as_of,
        recent_limit=settings.recent_expenses_limit,
        warning_threshold=settings.budget_warning_threshold,
    )

    usages = ([summary.total_budget] if summary.total_budget is not None else []) + summary.category_budgets
    duration_ms = (time.time() - start_time) * 1000
    record_budget_usage(usages)
    log_budget_usage(request_id, user_id, usages, duration_ms)

    return DashboardResponse.from_domain(summary, as_of)
