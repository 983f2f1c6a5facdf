"""
Data Models Package

This package contains all Pydantic models used by the Expense Ledger.
Every record stored and every request accepted conforms to these schemas.
"""

from expense_ledger.models.ledger import (
    MAX_CATEGORY_NAME_LENGTH,
    MAX_DESCRIPTION_LENGTH,
    MAX_NOTES_LENGTH,
    Category,
    CategorySummary,
    CreateCategoryRequest,
    CreateExpenseRequest,
    Expense,
    ExpenseStatus,
    LedgerErrorKind,
    OperationResult,
    ResolveExpenseRequest,
    SetAdminRequest,
    UpdateBudgetRequest,
)

__all__ = [
    # Bounds
    "MAX_CATEGORY_NAME_LENGTH",
    "MAX_DESCRIPTION_LENGTH",
    "MAX_NOTES_LENGTH",
    # Records
    "Category",
    "Expense",
    "ExpenseStatus",
    "LedgerErrorKind",
    # Requests
    "CreateCategoryRequest",
    "CreateExpenseRequest",
    "ResolveExpenseRequest",
    "SetAdminRequest",
    "UpdateBudgetRequest",
    # Results
    "CategorySummary",
    "OperationResult",
]
