"""GET /v1/history - merged expense and income history"""

from typing import Literal
from fastapi import APIRouter, Depends, Query

from household_ledger.api.v1.schemas import HistoryResponse, HistoryItem
from household_ledger.api.dependencies import get_ledger, get_user_id
from household_ledger.infrastructure.database.repositories import LedgerRepository
from household_ledger.domain.history import transaction_history

router = APIRouter()


@router.get("/history", response_model=HistoryResponse)
def get_history(
    type: Literal["all", "expenses", "income"] = Query("all", description="Filter by record type"),
    search: str = Query("", description="Match description or category name"),
    user_id: str = Depends(get_user_id),
    ledger: LedgerRepository = Depends(get_ledger),
):
    """
    Retrieve the user's transactions, newest first.

    Returns:
        Expenses (negative amounts) and incomes (positive amounts) in one list
    """
    snapshot = ledger.load_snapshot(user_id)
    entries = transaction_history(snapshot.expenses, snapshot.incomes, kind=type, search=search)

    return HistoryResponse(
        user_id=user_id,
        transactions=[HistoryItem.from_domain(e) for e in entries],
    )
