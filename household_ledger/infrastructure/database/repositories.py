"""Data access layer for ledger records"""

from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from household_ledger.infrastructure.database.models import BudgetRecord, ExpenseRecord, IncomeRecord
from household_ledger.domain.models import (
    Budget,
    Category,
    Expense,
    Income,
    LedgerSnapshot,
    Period,
    parse_scope,
    scope_to_str,
)
from household_ledger.domain.exceptions import RecordNotFoundError


def _frequency(value: str | None) -> Period | None:
    return Period.parse(value) if value else None


class _UserScopedRepository:
    """Rows are always filtered by owner; another user's id behaves as missing"""

    model = None
    kind = "record"

    def __init__(self, db: Session):
        self.db = db

    def _query(self, user_id: str):
        return self.db.query(self.model).filter(self.model.user_id == user_id)

    def _get_row(self, user_id: str, record_id: str):
        row = self._query(user_id).filter(self.model.id == record_id).first()
        if row is None:
            raise RecordNotFoundError(f"{self.kind} {record_id} not found")
        return row

    def delete(self, user_id: str, record_id: str) -> None:
        self.db.delete(self._get_row(user_id, record_id))
        self.db.flush()

    def clear(self, user_id: str) -> int:
        """Delete every row owned by the user, returning the number removed"""
        removed = self._query(user_id).delete()
        self.db.flush()
        return removed


class ExpenseRepository(_UserScopedRepository):
    """Repository for expenses"""

    model = ExpenseRecord
    kind = "expense"

    @staticmethod
    def to_domain(row: ExpenseRecord) -> Expense:
        return Expense(
            id=row.id,
            amount_cents=row.amount_cents,
            description=row.description,
            category=Category(row.category),
            date=row.occurred_at,
            recurring=row.recurring,
            recurring_frequency=_frequency(row.recurring_frequency),
        )

    @staticmethod
    def _apply(row: ExpenseRecord, expense: Expense) -> None:
        row.amount_cents = expense.amount_cents
        row.description = expense.description
        row.category = expense.category.value
        row.occurred_at = expense.date
        row.recurring = expense.recurring
        row.recurring_frequency = expense.recurring_frequency.value if expense.recurring_frequency else None

    def list_for_user(self, user_id: str) -> List[Expense]:
        rows = self._query(user_id).order_by(ExpenseRecord.occurred_at.desc()).all()
        return [self.to_domain(r) for r in rows]

    def get(self, user_id: str, expense_id: str) -> Expense:
        return self.to_domain(self._get_row(user_id, expense_id))

    def add(self, user_id: str, expense: Expense) -> Expense:
        """Persist a new expense"""
        row = ExpenseRecord(id=expense.id, user_id=user_id)
        self._apply(row, expense)
        self.db.add(row)
        self.db.flush()
        return self.to_domain(row)

    def replace(self, user_id: str, expense: Expense) -> Expense:
        """Overwrite an existing expense with the same id"""
        row = self._get_row(user_id, expense.id)
        self._apply(row, expense)
        self.db.flush()
        return self.to_domain(row)


class IncomeRepository(_UserScopedRepository):
    """Repository for incomes"""

    model = IncomeRecord
    kind = "income"

    @staticmethod
    def to_domain(row: IncomeRecord) -> Income:
        return Income(
            id=row.id,
            amount_cents=row.amount_cents,
            source=row.source,
            date=row.occurred_at,
            recurring=row.recurring,
            recurring_frequency=_frequency(row.recurring_frequency),
        )

    @staticmethod
    def _apply(row: IncomeRecord, income: Income) -> None:
        row.amount_cents = income.amount_cents
        row.source = income.source
        row.occurred_at = income.date
        row.recurring = income.recurring
        row.recurring_frequency = income.recurring_frequency.value if income.recurring_frequency else None

    def list_for_user(self, user_id: str) -> List[Income]:
        rows = self._query(user_id).order_by(IncomeRecord.occurred_at.desc()).all()
        return [self.to_domain(r) for r in rows]

    def get(self, user_id: str, income_id: str) -> Income:
        return self.to_domain(self._get_row(user_id, income_id))

    def add(self, user_id: str, income: Income) -> Income:
        row = IncomeRecord(id=income.id, user_id=user_id)
        self._apply(row, income)
        self.db.add(row)
        self.db.flush()
        return self.to_domain(row)

    def replace(self, user_id: str, income: Income) -> Income:
        row = self._get_row(user_id, income.id)
        self._apply(row, income)
        self.db.flush()
        return self.to_domain(row)


class BudgetRepository(_UserScopedRepository):
    """Repository for budgets"""

    model = BudgetRecord
    kind = "budget"

    @staticmethod
    def to_domain(row: BudgetRecord) -> Budget:
        return Budget(
            id=row.id,
            scope=parse_scope(row.scope),
            limit_cents=row.limit_cents,
            period=Period.parse(row.period),
            start_date=row.start_date,
        )

    @staticmethod
    def _apply(row: BudgetRecord, budget: Budget) -> None:
        row.scope = scope_to_str(budget.scope)
        row.limit_cents = budget.limit_cents
        row.period = budget.period.value
        row.start_date = budget.start_date

    def list_for_user(self, user_id: str) -> List[Budget]:
        rows = self._query(user_id).order_by(BudgetRecord.created_at, BudgetRecord.id).all()
        return [self.to_domain(r) for r in rows]

    def get(self, user_id: str, budget_id: str) -> Budget:
        return self.to_domain(self._get_row(user_id, budget_id))

    def add(self, user_id: str, budget: Budget) -> Budget:
        row = BudgetRecord(id=budget.id, user_id=user_id)
        self._apply(row, budget)
        self.db.add(row)
        self.db.flush()
        return self.to_domain(row)

    def replace(self, user_id: str, budget: Budget) -> Budget:
        row = self._get_row(user_id, budget.id)
        self._apply(row, budget)
        self.db.flush()
        return self.to_domain(row)


class LedgerRepository:
    """Loads a consistent snapshot of all of a user's records"""

    def __init__(self, db: Session):
        self.expenses = ExpenseRepository(db)
        self.incomes = IncomeRepository(db)
        self.budgets = BudgetRepository(db)

    def load_snapshot(self, user_id: str) -> LedgerSnapshot:
        return LedgerSnapshot(
            expenses=self.expenses.list_for_user(user_id),
            incomes=self.incomes.list_for_user(user_id),
            budgets=self.budgets.list_for_user(user_id),
        )

    def clear_all(self, user_id: str) -> Dict[str, int]:
        """Delete all of the user's records; returns the number removed per collection"""
        return {
            "expenses": self.expenses.clear(user_id),
            "incomes": self.incomes.clear(user_id),
            "budgets": self.budgets.clear(user_id),
        }

    def restore(
        self,
        user_id: str,
        expenses: Optional[List[Expense]] = None,
        incomes: Optional[List[Income]] = None,
        budgets: Optional[List[Budget]] = None,
    ) -> LedgerSnapshot:
        """
        Replace the user's collections with the given records.

        A collection passed as None is left as stored. Nothing is committed;
        the caller owns the transaction.
        """
        for repository, records in (
            (self.expenses, expenses),
            (self.incomes, incomes),
            (self.budgets, budgets),
        ):
            if records is None:
                continue
            repository.clear(user_id)
            for record in records:
                repository.add(user_id, record)
        return self.load_snapshot(user_id)
