"""/v1/budgets - budget CRUD and usage evaluation"""

import time
import logging
import uuid
from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from household_ledger.api.v1.schemas import (
    BudgetRequest,
    BudgetResponse,
    BudgetUsageListResponse,
    BudgetUsageResponse,
)
from household_ledger.api.dependencies import get_as_of, get_ledger, get_request_id, get_user_id
from household_ledger.config import settings
from household_ledger.infrastructure.database.session import get_db
from household_ledger.infrastructure.database.repositories import LedgerRepository
from household_ledger.infrastructure.observability.logging import log_budget_usage, log_record_change
from household_ledger.infrastructure.observability.metrics import record_budget_usage, record_write
from household_ledger.domain.budgets import evaluate_budget, evaluate_budgets
from household_ledger.domain.exceptions import (
    InvalidBudgetError,
    InvalidPeriodError,
    InvalidScopeError,
    RecordNotFoundError,
)

router = APIRouter()


@router.get("/budgets", response_model=List[BudgetResponse])
def list_budgets(
    user_id: str = Depends(get_user_id),
    ledger: LedgerRepository = Depends(get_ledger),
):
    return [BudgetResponse.from_domain(b) for b in ledger.budgets.list_for_user(user_id)]


@router.get("/budgets/usage", response_model=BudgetUsageListResponse)
def list_budget_usage(
    request_id: str = Depends(get_request_id),
    user_id: str = Depends(get_user_id),
    as_of: datetime = Depends(get_as_of),
    ledger: LedgerRepository = Depends(get_ledger),
):
    """
    Evaluate every budget of the user at as_of.

    Each budget is measured against the recurring window (anchored at its
    start date) that contains as_of.
    """
    start_time = time.time()
    snapshot = ledger.load_snapshot(user_id)
    usages = evaluate_budgets(
        snapshot.budgets,
        snapshot.expenses,
        as_of,
        settings.budget_warning_threshold,
    )

    duration_ms = (time.time() - start_time) * 1000
    record_budget_usage(usages)
    log_budget_usage(request_id, user_id, usages, duration_ms)

    return BudgetUsageListResponse(
        as_of=as_of,
        usages=[BudgetUsageResponse.from_domain(u) for u in usages],
    )


@router.get("/budgets/{budget_id}", response_model=BudgetResponse)
def get_budget(
    budget_id: str,
    user_id: str = Depends(get_user_id),
    ledger: LedgerRepository = Depends(get_ledger),
):
    try:
        return BudgetResponse.from_domain(ledger.budgets.get(user_id, budget_id))
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Budget not found")


@router.get("/budgets/{budget_id}/usage", response_model=BudgetUsageResponse)
def get_budget_usage(
    budget_id: str,
    request_id: str = Depends(get_request_id),
    user_id: str = Depends(get_user_id),
    as_of: datetime = Depends(get_as_of),
    ledger: LedgerRepository = Depends(get_ledger),
):
    start_time = time.time()
    try:
        budget = ledger.budgets.get(user_id, budget_id)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Budget not found")

    usage = evaluate_budget(
        budget,
        ledger.expenses.list_for_user(user_id),
        as_of,
        settings.budget_warning_threshold,
    )

    duration_ms = (time.time() - start_time) * 1000
    record_budget_usage([usage])
    log_budget_usage(request_id, user_id, [usage], duration_ms)
    return BudgetUsageResponse.from_domain(usage)


@router.post("/budgets", response_model=BudgetResponse, status_code=201)
def create_budget(
    body: BudgetRequest,
    request_id: str = Depends(get_request_id),
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
    ledger: LedgerRepository = Depends(get_ledger),
):
    try:
        budget = ledger.budgets.add(user_id, body.to_domain(str(uuid.uuid4())))
        db.commit()
    except (InvalidBudgetError, InvalidPeriodError, InvalidScopeError) as e:
        db.rollback()
        logging.warning(f"Invalid budget: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_write("budget", "create")
    log_record_change(request_id, user_id, "budget", "create", budget.id)
    return BudgetResponse.from_domain(budget)


@router.put("/budgets/{budget_id}", response_model=BudgetResponse)
def update_budget(
    budget_id: str,
    body: BudgetRequest,
    request_id: str = Depends(get_request_id),
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
    ledger: LedgerRepository = Depends(get_ledger),
):
    try:
        budget = ledger.budgets.replace(user_id, body.to_domain(budget_id))
        db.commit()
    except (InvalidBudgetError, InvalidPeriodError, InvalidScopeError) as e:
        db.rollback()
        logging.warning(f"Invalid budget: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))
    except RecordNotFoundError as e:
        db.rollback()
        logging.warning(f"Update of missing budget: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail="Budget not found")

    record_write("budget", "update")
    log_record_change(request_id, user_id, "budget", "update", budget.id)
    return BudgetResponse.from_domain(budget)


@router.delete("/budgets/{budget_id}", status_code=204)
def delete_budget(
    budget_id: str,
    request_id: str = Depends(get_request_id),
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
    ledger: LedgerRepository = Depends(get_ledger),
):
    try:
        ledger.budgets.delete(user_id, budget_id)
        db.commit()
    except RecordNotFoundError as e:
        db.rollback()
        logging.warning(f"Delete of missing budget: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail="Budget not found")

    record_write("budget", "delete")
    log_record_change(request_id, user_id, "budget", "delete", budget_id)
