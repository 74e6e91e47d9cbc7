"""Dependency injection for FastAPI endpoints"""

from datetime import datetime
from typing import Optional
from fastapi import Depends, Header, Query, Request
from sqlalchemy.orm import Session

from household_ledger.infrastructure.database.session import get_db
from household_ledger.infrastructure.database.repositories import LedgerRepository
from household_ledger.utils.date_utils import to_naive_utc, utcnow


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_user_id(x_user_id: str = Header(..., min_length=1, description="Owner of the records")) -> str:
    """Identity is issued by the external auth provider and taken as-is"""
    return x_user_id


def get_now() -> datetime:
    """Current wall-clock time (naive UTC); overridden in tests"""
    return utcnow()


def get_as_of(
    as_of: Optional[datetime] = Query(None, description="Evaluate as of this instant (defaults to now)"),
    now: datetime = Depends(get_now),
) -> datetime:
    return to_naive_utc(as_of) if as_of is not None else now


def get_ledger(db: Session = Depends(get_db)) -> LedgerRepository:
    """Provide repositories bound to the request's session"""
    return LedgerRepository(db)
