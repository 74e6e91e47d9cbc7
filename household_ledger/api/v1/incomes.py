"""/v1/incomes - income CRUD"""

import logging
import uuid
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from household_ledger.api.v1.schemas import IncomeRequest, IncomeResponse
from household_ledger.api.dependencies import get_ledger, get_request_id, get_user_id
from household_ledger.infrastructure.database.session import get_db
from household_ledger.infrastructure.database.repositories import LedgerRepository
from household_ledger.infrastructure.observability.logging import log_record_change
from household_ledger.infrastructure.observability.metrics import record_write
from household_ledger.domain.exceptions import RecordNotFoundError

router = APIRouter()


@router.get("/incomes", response_model=List[IncomeResponse])
def list_incomes(
    user_id: str = Depends(get_user_id),
    ledger: LedgerRepository = Depends(get_ledger),
):
    return [IncomeResponse.from_domain(i) for i in ledger.incomes.list_for_user(user_id)]


@router.get("/incomes/{income_id}", response_model=IncomeResponse)
def get_income(
    income_id: str,
    user_id: str = Depends(get_user_id),
    ledger: LedgerRepository = Depends(get_ledger),
):
    try:
        return IncomeResponse.from_domain(ledger.incomes.get(user_id, income_id))
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Income not found")


@router.post("/incomes", response_model=IncomeResponse, status_code=201)
def create_income(
    body: IncomeRequest,
    request_id: str = Depends(get_request_id),
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
    ledger: LedgerRepository = Depends(get_ledger),
):
    income = ledger.incomes.add(user_id, body.to_domain(str(uuid.uuid4())))
    db.commit()

    record_write("income", "create")
    log_record_change(request_id, user_id, "income", "create", income.id)
    return IncomeResponse.from_domain(income)


@router.put("/incomes/{income_id}", response_model=IncomeResponse)
def update_income(
    income_id: str,
    body: IncomeRequest,
    request_id: str = Depends(get_request_id),
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
    ledger: LedgerRepository = Depends(get_ledger),
):
    try:
        income = ledger.incomes.replace(user_id, body.to_domain(income_id))
        db.commit()
    except RecordNotFoundError as e:
        db.rollback()
        logging.warning(f"Update of missing income: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail="Income not found")

    record_write("income", "update")
    log_record_change(request_id, user_id, "income", "update", income.id)
    return IncomeResponse.from_domain(income)


@router.delete("/incomes/{income_id}", status_code=204)
def delete_income(
    income_id: str,
    request_id: str = Depends(get_request_id),
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
    ledger: LedgerRepository = Depends(get_ledger),
):
    try:
        ledger.incomes.delete(user_id, income_id)
        db.commit()
    except RecordNotFoundError as e:
        db.rollback()
        logging.warning(f"Delete of missing income: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail="Income not found")

    record_write("income", "delete")
    log_record_change(request_id, user_id, "income", "delete", income_id)
