"""Ledger core: authorization, ID allocation, record stores and errors."""

from expense_ledger.core.admin import AdminManager
from expense_ledger.core.auth import Authorizer
from expense_ledger.core.categories import CategoryStore
from expense_ledger.core.errors import (
    AlreadyApprovedError,
    AlreadyRejectedError,
    BudgetExceededError,
    CategoryExistsError,
    CategoryNotFoundError,
    ExpenseNotFoundError,
    InvalidAmountError,
    InvalidDateError,
    LedgerError,
    NotAuthorizedError,
)
from expense_ledger.core.expenses import ExpenseStore
from expense_ledger.core.sequence import SequenceAllocator
from expense_ledger.core.user_index import (
    DEFAULT_CAPACITY,
    BoundedExpenseList,
    UserIndex,
)

__all__ = [
    # Components
    "AdminManager",
    "Authorizer",
    "BoundedExpenseList",
    "CategoryStore",
    "DEFAULT_CAPACITY",
    "ExpenseStore",
    "SequenceAllocator",
    "UserIndex",
    # Errors
    "AlreadyApprovedError",
    "AlreadyRejectedError",
    "BudgetExceededError",
    "CategoryExistsError",
    "CategoryNotFoundError",
    "ExpenseNotFoundError",
    "InvalidAmountError",
    "InvalidDateError",
    "LedgerError",
    "NotAuthorizedError",
]
