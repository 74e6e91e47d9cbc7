"""/v1/reports - spending breakdowns and monthly trends"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from household_ledger.api.v1.schemas import (
    ChartDataSchema,
    IncomeExpenseBucketSchema,
    MonthBucketSchema,
    ReportSummaryResponse,
    SpendingByCategoryResponse,
)
from household_ledger.api.dependencies import get_as_of, get_ledger, get_user_id
from household_ledger.config import settings
from household_ledger.infrastructure.database.repositories import LedgerRepository
from household_ledger.infrastructure.observability.metrics import report_counter
from household_ledger.domain.reports import (
    ReportRange,
    income_vs_expense,
    monthly_trend,
    range_start,
    report_summary,
    spending_between,
)

router = APIRouter()
MAX_LOOKBACK_DAYS = 36500


def _out_of_range(as_of: datetime, e: Exception) -> HTTPException:
    logging.warning(f"Report range out of bounds at {as_of.isoformat()}: {e}")
    return HTTPException(status_code=422, detail="Report range falls outside the supported calendar")


@router.get("/reports/spending-by-category", response_model=SpendingByCategoryResponse)
def spending_by_category_report(
    report_range: Optional[ReportRange] = Query(None, alias="range", description="week | month | quarter | year"),
    lookback_days: Optional[int] = Query(
        None, ge=0, le=MAX_LOOKBACK_DAYS, description="Used when range is not given"
    ),
    user_id: str = Depends(get_user_id),
    as_of: datetime = Depends(get_as_of),
    ledger: LedgerRepository = Depends(get_ledger),
):
    """
    Spending per category over a trailing range ending at as_of, largest first.

    `range` takes precedence over `lookback_days`; with neither the configured
    default lookback applies.
    """
    try:
        if report_range is not None:
            start = range_start(as_of, report_range)
        else:
            days = lookback_days if lookback_days is not None else settings.default_lookback_days
            start = as_of - timedelta(days=days)
    except (OverflowError, ValueError) as e:
        raise _out_of_range(as_of, e)

    items = spending_between(ledger.expenses.list_for_user(user_id), start, as_of)
    report_counter.labels(report="spending_by_category").inc()

    return SpendingByCategoryResponse(
        start=start,
        end=as_of,
        items=[ChartDataSchema.from_domain(i) for i in items],
    )


@router.get("/reports/summary", response_model=ReportSummaryResponse)
def report_summary_endpoint(
    report_range: ReportRange = Query(ReportRange.MONTH, alias="range", description="week | month | quarter | year"),
    user_id: str = Depends(get_user_id),
    as_of: datetime = Depends(get_as_of),
    ledger: LedgerRepository = Depends(get_ledger),
):
    """Total spending, average daily spending and top category over a range"""
    try:
        summary = report_summary(ledger.expenses.list_for_user(user_id), as_of, report_range)
    except (OverflowError, ValueError) as e:
        raise _out_of_range(as_of, e)

    report_counter.labels(report="summary").inc()
    return ReportSummaryResponse.from_domain(summary, report_range.value)


@router.get("/reports/monthly-trend", response_model=List[MonthBucketSchema])
def monthly_trend_report(
    months: Optional[int] = Query(None, ge=1, le=120),
    user_id: str = Depends(get_user_id),
    as_of: datetime = Depends(get_as_of),
    ledger: LedgerRepository = Depends(get_ledger),
):
    """Total spending for each of the trailing months, oldest first"""
    month_count = months or settings.trend_months
    try:
        buckets = monthly_trend(ledger.expenses.list_for_user(user_id), month_count, as_of)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    report_counter.labels(report="monthly_trend").inc()
    return [MonthBucketSchema.from_domain(b) for b in buckets]


@router.get("/reports/income-vs-expense", response_model=List[IncomeExpenseBucketSchema])
def income_vs_expense_report(
    months: Optional[int] = Query(None, ge=1, le=120),
    user_id: str = Depends(get_user_id),
    as_of: datetime = Depends(get_as_of),
    ledger: LedgerRepository = Depends(get_ledger),
):
    """Income, expense and savings per month, oldest first"""
    month_count = months or settings.trend_months
    snapshot = ledger.load_snapshot(user_id)
    try:
        buckets = income_vs_expense(snapshot.expenses, snapshot.incomes, month_count, as_of)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    report_counter.labels(report="income_vs_expense").inc()
    return [IncomeExpenseBucketSchema.from_domain(b) for b in buckets]
