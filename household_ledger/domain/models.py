"""Domain models - pure Python dataclasses representing ledger entities"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Union

from household_ledger.domain.exceptions import (
    InvalidBudgetError,
    InvalidPeriodError,
    InvalidScopeError,
)

TOTAL_SCOPE = "total"


class Period(str, Enum):
    """Recurrence of a budget (or descriptive tag of a recurring record)"""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value: Union[str, "Period"]) -> "Period":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidPeriodError(f"Unknown period: {value!r}") from None


class Category(str, Enum):
    """Closed set of spending categories"""

    FOOD = "food"
    TRANSPORT = "transport"
    ENTERTAINMENT = "entertainment"
    HOUSING = "housing"
    UTILITIES = "utilities"
    HEALTHCARE = "healthcare"
    SHOPPING = "shopping"
    EDUCATION = "education"
    PERSONAL = "personal"
    OTHER = "other"


class BudgetStatus(str, Enum):
    OK = "ok"
    WARNING = "warning"
    OVER = "over"


@dataclass(frozen=True)
class CategoryMeta:
    """Display metadata for a category"""

    id: str
    name: str
    color: str  # "#RRGGBB"
    icon: str


@dataclass(frozen=True)
class CategoryScope:
    """Budget scoped to a single category"""

    category: Category


@dataclass(frozen=True)
class AllCategories:
    """Budget scoped to spending across every category"""


ALL_CATEGORIES = AllCategories()

BudgetScope = Union[CategoryScope, AllCategories]


def parse_scope(value: Union[str, Category, CategoryScope, AllCategories]) -> BudgetScope:
    """Convert the stored/wire form ("total" or a category id) into a BudgetScope"""
    if isinstance(value, (CategoryScope, AllCategories)):
        return value
    if isinstance(value, Category):
        return CategoryScope(value)
    if value == TOTAL_SCOPE:
        return ALL_CATEGORIES
    try:
        return CategoryScope(Category(value))
    except ValueError:
        raise InvalidScopeError(f"Unknown budget scope: {value!r}") from None


def scope_to_str(scope: BudgetScope) -> str:
    if isinstance(scope, AllCategories):
        return TOTAL_SCOPE
    return scope.category.value


@dataclass(frozen=True)
class Expense:
    """A single realized spending transaction"""

    id: str
    amount_cents: int
    description: str
    category: Category
    date: datetime
    recurring: bool = False
    recurring_frequency: Optional[Period] = None  # descriptive only


@dataclass(frozen=True)
class Income:
    """A single realized income transaction"""

    id: str
    amount_cents: int
    source: str
    date: datetime
    recurring: bool = False
    recurring_frequency: Optional[Period] = None


@dataclass(frozen=True)
class Budget:
    """Spending limit over a recurring period anchored at start_date"""

    id: str
    scope: BudgetScope
    limit_cents: int
    period: Period
    start_date: datetime

    def __post_init__(self) -> None:
        if self.limit_cents <= 0:
            raise InvalidBudgetError(f"Budget limit must be positive, got {self.limit_cents}")
        if not isinstance(self.period, Period):
            raise InvalidPeriodError(f"Unknown period: {self.period!r}")
        if not isinstance(self.scope, (CategoryScope, AllCategories)):
            raise InvalidScopeError(f"Unknown budget scope: {self.scope!r}")


@dataclass(frozen=True)
class Window:
    """Half-open interval [start, end)"""

    start: datetime
    end: datetime

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end


@dataclass(frozen=True)
class BudgetUsage:
    """Consumption of a budget within the window containing the as-of instant"""

    budget: Budget
    window: Window
    spent_cents: int
    remaining_cents: int  # may be negative
    percentage_used: float
    is_over_budget: bool
    status: BudgetStatus
    has_started: bool


@dataclass(frozen=True)
class ChartData:
    """One slice of a spending-by-category chart"""

    category: str
    name: str
    value_cents: int
    color: str


@dataclass(frozen=True)
class ReportSummary:
    """Headline figures for a report range"""

    start: datetime
    end: datetime
    total_cents: int
    average_daily_cents: int  # rounded to the nearest cent
    top_category: Optional[ChartData]


@dataclass(frozen=True)
class MonthBucket:
    year: int
    month: int
    label: str  # "Jul 2023"
    total_cents: int


@dataclass(frozen=True)
class IncomeExpenseBucket:
    year: int
    month: int
    label: str
    income_cents: int
    expense_cents: int
    savings_cents: int


@dataclass(frozen=True)
class HistoryEntry:
    """Row of the merged expense/income history feed"""

    id: str
    kind: str  # "expense" or "income"
    date: datetime
    description: str
    category_name: str
    amount_cents: int  # negative for expenses
    recurring: bool
    recurring_frequency: Optional[Period]
    color: str


@dataclass(frozen=True)
class DashboardSummary:
    total_expense_cents: int
    total_income_cents: int
    balance_cents: int
    total_budget: Optional[BudgetUsage]
    category_budgets: List[BudgetUsage] = field(default_factory=list)
    recent_expenses: List[Expense] = field(default_factory=list)


@dataclass(frozen=True)
class LedgerSnapshot:
    """Consistent view of one user's records handed to the engine"""

    expenses: List[Expense]
    incomes: List[Income]
    budgets: List[Budget]
