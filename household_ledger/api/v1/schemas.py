"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import Annotated, List, Optional
from pydantic import AfterValidator, BaseModel, Field

from household_ledger.domain.models import (
    BudgetUsage,
    Category,
    CategoryMeta,
    ChartData,
    DashboardSummary,
    Expense,
    HistoryEntry,
    Income,
    IncomeExpenseBucket,
    MonthBucket,
    Period,
    ReportSummary,
    Budget,
    parse_scope,
    scope_to_str,
)
from household_ledger.utils.date_utils import to_naive_utc

UTCDateTime = Annotated[datetime, AfterValidator(to_naive_utc)]


# --- Records ---

class ExpenseRequest(BaseModel):
    """Request body for POST/PUT /v1/expenses"""

    amount_cents: int = Field(..., ge=0, description="Amount in cents")
    description: str = ""
    category: Category
    date: UTCDateTime
    recurring: bool = False
    recurring_frequency: Optional[Period] = None

    def to_domain(self, expense_id: str) -> Expense:
        return Expense(
            id=expense_id,
            amount_cents=self.amount_cents,
            description=self.description,
            category=self.category,
            date=self.date,
            recurring=self.recurring,
            recurring_frequency=self.recurring_frequency,
        )


class ExpenseResponse(ExpenseRequest):
    id: str

    @classmethod
    def from_domain(cls, expense: Expense) -> "ExpenseResponse":
        return cls(
            id=expense.id,
            amount_cents=expense.amount_cents,
            description=expense.description,
            category=expense.category,
            date=expense.date,
            recurring=expense.recurring,
            recurring_frequency=expense.recurring_frequency,
        )


class IncomeRequest(BaseModel):
    """Request body for POST/PUT /v1/incomes"""

    amount_cents: int = Field(..., ge=0, description="Amount in cents")
    source: str = ""
    date: UTCDateTime
    recurring: bool = False
    recurring_frequency: Optional[Period] = None

    def to_domain(self, income_id: str) -> Income:
        return Income(
            id=income_id,
            amount_cents=self.amount_cents,
            source=self.source,
            date=self.date,
            recurring=self.recurring,
            recurring_frequency=self.recurring_frequency,
        )


class IncomeResponse(IncomeRequest):
    id: str

    @classmethod
    def from_domain(cls, income: Income) -> "IncomeResponse":
        return cls(
            id=income.id,
            amount_cents=income.amount_cents,
            source=income.source,
            date=income.date,
            recurring=income.recurring,
            recurring_frequency=income.recurring_frequency,
        )


class BudgetRequest(BaseModel):
    """Request body for POST/PUT /v1/budgets"""

    category: str = Field(..., min_length=1, description='Category id, or "total" for all categories')
    limit_cents: int = Field(..., gt=0, description="Spending limit in cents")
    period: Period
    start_date: UTCDateTime

    def to_domain(self, budget_id: str) -> Budget:
        """
        Raises:
            InvalidScopeError: category is neither a known category nor "total"
        """
        return Budget(
            id=budget_id,
            scope=parse_scope(self.category),
            limit_cents=self.limit_cents,
            period=self.period,
            start_date=self.start_date,
        )


class BudgetResponse(BudgetRequest):
    id: str

    @classmethod
    def from_domain(cls, budget: Budget) -> "BudgetResponse":
        return cls(
            id=budget.id,
            category=scope_to_str(budget.scope),
            limit_cents=budget.limit_cents,
            period=budget.period,
            start_date=budget.start_date,
        )


class CategorySchema(BaseModel):
    id: str
    name: str
    color: str
    icon: str

    @classmethod
    def from_domain(cls, meta: CategoryMeta) -> "CategorySchema":
        return cls(id=meta.id, name=meta.name, color=meta.color, icon=meta.icon)


# --- Budget usage ---

class BudgetUsageResponse(BaseModel):
    """Usage of one budget in its current window"""

    budget: BudgetResponse
    window_start: datetime
    window_end: datetime
    spent_cents: int
    remaining_cents: int
    percentage_used: float
    is_over_budget: bool
    status: str
    has_started: bool

    @classmethod
    def from_domain(cls, usage: BudgetUsage) -> "BudgetUsageResponse":
        return cls(
            budget=BudgetResponse.from_domain(usage.budget),
            window_start=usage.window.start,
            window_end=usage.window.end,
            spent_cents=usage.spent_cents,
            remaining_cents=usage.remaining_cents,
            percentage_used=usage.percentage_used,
            is_over_budget=usage.is_over_budget,
            status=usage.status.value,
            has_started=usage.has_started,
        )


class BudgetUsageListResponse(BaseModel):
    as_of: datetime
    usages: List[BudgetUsageResponse]


# --- Reports ---

class ChartDataSchema(BaseModel):
    category: str
    name: str
    value_cents: int
    color: str

    @classmethod
    def from_domain(cls, item: ChartData) -> "ChartDataSchema":
        return cls(category=item.category, name=item.name, value_cents=item.value_cents, color=item.color)


class SpendingByCategoryResponse(BaseModel):
    start: datetime
    end: datetime
    items: List[ChartDataSchema]


class ReportSummaryResponse(BaseModel):
    """Response for GET /v1/reports/summary"""

    range: str
    start: datetime
    end: datetime
    total_cents: int
    average_daily_cents: int
    top_category: Optional[ChartDataSchema] = None

    @classmethod
    def from_domain(cls, summary: ReportSummary, report_range: str) -> "ReportSummaryResponse":
        return cls(
            range=report_range,
            start=summary.start,
            end=summary.end,
            total_cents=summary.total_cents,
            average_daily_cents=summary.average_daily_cents,
            top_category=(
                ChartDataSchema.from_domain(summary.top_category)
                if summary.top_category is not None
                else None
            ),
        )


class MonthBucketSchema(BaseModel):
    year: int
    month: int
    label: str
    total_cents: int

    @classmethod
    def from_domain(cls, bucket: MonthBucket) -> "MonthBucketSchema":
        return cls(year=bucket.year, month=bucket.month, label=bucket.label, total_cents=bucket.total_cents)


class IncomeExpenseBucketSchema(BaseModel):
    year: int
    month: int
    label: str
    income_cents: int
    expense_cents: int
    savings_cents: int

    @classmethod
    def from_domain(cls, bucket: IncomeExpenseBucket) -> "IncomeExpenseBucketSchema":
        return cls(
            year=bucket.year,
            month=bucket.month,
            label=bucket.label,
            income_cents=bucket.income_cents,
            expense_cents=bucket.expense_cents,
            savings_cents=bucket.savings_cents,
        )


# --- History and dashboard ---

class HistoryItem(BaseModel):
    """Single row in the merged history feed"""

    id: str
    type: str
    date: datetime
    description: str
    category: str
    amount_cents: int
    recurring: bool
    recurring_frequency: Optional[Period] = None
    color: str

    @classmethod
    def from_domain(cls, entry: HistoryEntry) -> "HistoryItem":
        return cls(
            id=entry.id,
            type=entry.kind,
            date=entry.date,
            description=entry.description,
            category=entry.category_name,
            amount_cents=entry.amount_cents,
            recurring=entry.recurring,
            recurring_frequency=entry.recurring_frequency,
            color=entry.color,
        )


class HistoryResponse(BaseModel):
    """Response for GET /v1/history"""

    user_id: str
    transactions: List[HistoryItem]


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard"""

    as_of: datetime
    total_expense_cents: int
    total_income_cents: int
    balance_cents: int
    total_budget: Optional[BudgetUsageResponse] = None
    category_budgets: List[BudgetUsageResponse]
    recent_expenses: List[ExpenseResponse]

    @classmethod
    def from_domain(cls, summary: DashboardSummary, as_of: datetime) -> "DashboardResponse":
        return cls(
            as_of=as_of,
            total_expense_cents=summary.total_expense_cents,
            total_income_cents=summary.total_income_cents,
            balance_cents=summary.balance_cents,
            total_budget=(
                BudgetUsageResponse.from_domain(summary.total_budget)
                if summary.total_budget is not None
                else None
            ),
            category_budgets=[BudgetUsageResponse.from_domain(u) for u in summary.category_budgets],
            recent_expenses=[ExpenseResponse.from_domain(e) for e in summary.recent_expenses],
        )


# --- Backup and restore ---

class BackupDocument(BaseModel):
    """Every record of one user; the body of GET /v1/backup"""

    exported_at: datetime
    expenses: List[ExpenseResponse]
    incomes: List[IncomeResponse]
    budgets: List[BudgetResponse]


class RestoreRequest(BaseModel):
    """
    Body for POST /v1/restore.

    A backup document is accepted as-is: record ids in it are ignored and
    fresh ids are assigned. A collection that is omitted (or null) is left
    untouched; a present collection replaces the stored one.
    """

    expenses: Optional[List[ExpenseRequest]] = None
    incomes: Optional[List[IncomeRequest]] = None
    budgets: Optional[List[BudgetRequest]] = None


class RecordCounts(BaseModel):
    expenses: int
    incomes: int
    budgets: int
