"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidBudgetError(DomainException):
    """Budget definition cannot be evaluated (non-positive limit)"""

    pass


class InvalidPeriodError(DomainException):
    """Recurrence period tag is not one of daily/weekly/monthly/yearly"""

    pass


class InvalidScopeError(DomainException):
    """Budget scope is neither a known category nor the "total" sentinel"""

    pass


class RecordNotFoundError(DomainException):
    """Requested expense, income or budget does not exist for the user"""

    pass
