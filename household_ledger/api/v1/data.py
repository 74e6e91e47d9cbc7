"""/v1/backup, /v1/restore, /v1/data - whole-ledger backup, restore and clear"""

import logging
import uuid
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from household_ledger.api.v1.schemas import (
    BackupDocument,
    BudgetResponse,
    ExpenseResponse,
    IncomeResponse,
    RecordCounts,
    RestoreRequest,
)
from household_ledger.api.dependencies import get_ledger, get_now, get_request_id, get_user_id
from household_ledger.infrastructure.database.session import get_db
from household_ledger.infrastructure.database.repositories import LedgerRepository
from household_ledger.infrastructure.observability.logging import log_data_operation
from household_ledger.infrastructure.observability.metrics import record_write
from household_ledger.domain.exceptions import InvalidBudgetError, InvalidPeriodError, InvalidScopeError

router = APIRouter()


def _new_ids(records):
    return [r.to_domain(str(uuid.uuid4())) for r in records] if records is not None else None


@router.get("/backup", response_model=BackupDocument)
def backup(
    response: Response,
    request_id: str = Depends(get_request_id),
    user_id: str = Depends(get_user_id),
    now: datetime = Depends(get_now),
    ledger: LedgerRepository = Depends(get_ledger),
):
    """Download every expense, income and budget of the user as one JSON document"""
    snapshot = ledger.load_snapshot(user_id)
    filename = f"ledger-backup-{now.date().isoformat()}.json"
    response.headers["Content-Disposition"] = f'attachment; filename="{filename}"'

    log_data_operation(
        request_id,
        user_id,
        "backup",
        {"expenses": len(snapshot.expenses), "incomes": len(snapshot.incomes), "budgets": len(snapshot.budgets)},
    )
    return BackupDocument(
        exported_at=now,
        expenses=[ExpenseResponse.from_domain(e) for e in snapshot.expenses],
        incomes=[IncomeResponse.from_domain(i) for i in snapshot.incomes],
        budgets=[BudgetResponse.from_domain(b) for b in snapshot.budgets],
    )


@router.post("/restore", response_model=RecordCounts)
def restore(
    body: RestoreRequest,
    request_id: str = Depends(get_request_id),
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
    ledger: LedgerRepository = Depends(get_ledger),
):
    """
    Replace the user's collections with those in a backup document.

    Collections missing from the body are kept. The restore is all or
    nothing: an invalid budget rolls every collection back.
    """
    try:
        snapshot = ledger.restore(
            user_id,
            expenses=_new_ids(body.expenses),
            incomes=_new_ids(body.incomes),
            budgets=_new_ids(body.budgets),
        )
        db.commit()
    except (InvalidBudgetError, InvalidPeriodError, InvalidScopeError) as e:
        db.rollback()
        logging.warning(f"Invalid backup document: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    counts = {"expenses": len(snapshot.expenses), "incomes": len(snapshot.incomes), "budgets": len(snapshot.budgets)}
    record_write("ledger", "restore")
    log_data_operation(request_id, user_id, "restore", counts)
    return RecordCounts(**counts)


@router.delete("/data", response_model=RecordCounts)
def clear_data(
    request_id: str = Depends(get_request_id),
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
    ledger: LedgerRepository = Depends(get_ledger),
):
    """Delete all of the user's records; returns how many of each were removed"""
    removed = ledger.clear_all(user_id)
    db.commit()

    record_write("ledger", "clear")
    log_data_operation(request_id, user_id, "clear", removed)
    return RecordCounts(**removed)
