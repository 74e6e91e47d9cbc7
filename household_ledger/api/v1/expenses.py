"""/v1/expenses - expense CRUD and CSV export"""

import logging
import uuid
from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from household_ledger.api.v1.schemas import ExpenseRequest, ExpenseResponse
from household_ledger.api.dependencies import get_ledger, get_now, get_request_id, get_user_id
from household_ledger.infrastructure.database.session import get_db
from household_ledger.infrastructure.database.repositories import LedgerRepository
from household_ledger.infrastructure.observability.logging import log_record_change
from household_ledger.infrastructure.observability.metrics import record_write
from household_ledger.domain.exceptions import RecordNotFoundError
from household_ledger.domain.export import export_expenses_csv

router = APIRouter()


@router.get("/expenses", response_model=List[ExpenseResponse])
def list_expenses(
    user_id: str = Depends(get_user_id),
    ledger: LedgerRepository = Depends(get_ledger),
):
    """List the user's expenses, newest first"""
    return [ExpenseResponse.from_domain(e) for e in ledger.expenses.list_for_user(user_id)]


@router.get("/expenses/export")
def export_expenses(
    user_id: str = Depends(get_user_id),
    now: datetime = Depends(get_now),
    ledger: LedgerRepository = Depends(get_ledger),
):
    """Download all expenses as CSV"""
    content = export_expenses_csv(ledger.expenses.list_for_user(user_id))
    filename = f"expenses-{now.date().isoformat()}.csv"
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/expenses/{expense_id}", response_model=ExpenseResponse)
def get_expense(
    expense_id: str,
    user_id: str = Depends(get_user_id),
    ledger: LedgerRepository = Depends(get_ledger),
):
    try:
        return ExpenseResponse.from_domain(ledger.expenses.get(user_id, expense_id))
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Expense not found")


@router.post("/expenses", response_model=ExpenseResponse, status_code=201)
def create_expense(
    body: ExpenseRequest,
    request_id: str = Depends(get_request_id),
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
    ledger: LedgerRepository = Depends(get_ledger),
):
    expense = ledger.expenses.add(user_id, body.to_domain(str(uuid.uuid4())))
    db.commit()

    record_write("expense", "create")
    log_record_change(request_id, user_id, "expense", "create", expense.id)
    return ExpenseResponse.from_domain(expense)


@router.put("/expenses/{expense_id}", response_model=ExpenseResponse)
def update_expense(
    expense_id: str,
    body: ExpenseRequest,
    request_id: str = Depends(get_request_id),
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
    ledger: LedgerRepository = Depends(get_ledger),
):
    try:
        expense = ledger.expenses.replace(user_id, body.to_domain(expense_id))
        db.commit()
    except RecordNotFoundError as e:
        db.rollback()
        logging.warning(f"Update of missing expense: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail="Expense not found")

    record_write("expense", "update")
    log_record_change(request_id, user_id, "expense", "update", expense.id)
    return ExpenseResponse.from_domain(expense)


@router.delete("/expenses/{expense_id}", status_code=204)
def delete_expense(
    expense_id: str,
    request_id: str = Depends(get_request_id),
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
    ledger: LedgerRepository = Depends(get_ledger),
):
    try:
        ledger.expenses.delete(user_id, expense_id)
        db.commit()
    except RecordNotFoundError as e:
        db.rollback()
        logging.warning(f"Delete of missing expense: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail="Expense not found")

    record_write("expense", "delete")
    log_record_change(request_id, user_id, "expense", "delete", expense_id)
