"""SQLAlchemy ORM models for per-user ledger records"""

import uuid
from sqlalchemy import Column, String, BigInteger, Boolean, DateTime, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class ExpenseRecord(Base):
    """Realized expense"""

    __tablename__ = "expense"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(Text, nullable=False, index=True)
    amount_cents = Column(BigInteger, nullable=False)
    description = Column(Text, nullable=False, default="")
    category = Column(String(32), nullable=False)
    occurred_at = Column(DateTime, nullable=False, index=True)
    recurring = Column(Boolean, nullable=False, default=False)
    recurring_frequency = Column(String(16), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class IncomeRecord(Base):
    """Realized income"""

    __tablename__ = "income"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(Text, nullable=False, index=True)
    amount_cents = Column(BigInteger, nullable=False)
    source = Column(Text, nullable=False, default="")
    occurred_at = Column(DateTime, nullable=False, index=True)
    recurring = Column(Boolean, nullable=False, default=False)
    recurring_frequency = Column(String(16), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class BudgetRecord(Base):
    """Budget definition; scope is a category id or "total" """

    __tablename__ = "budget"

    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(Text, nullable=False, index=True)
    scope = Column(String(32), nullable=False)
    limit_cents = Column(BigInteger, nullable=False)
    period = Column(String(16), nullable=False)
    start_date = Column(DateTime, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
