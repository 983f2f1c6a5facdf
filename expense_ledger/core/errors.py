"""
Ledger exceptions.

Every refused operation raises one of these. Each carries a
LedgerErrorKind so the ExpenseLedger facade can turn it into an
OperationResult without inspecting the message.
"""

from typing import Any, Optional

from expense_ledger.models.ledger import LedgerErrorKind


class LedgerError(Exception):
    """Base exception for all ledger failures."""

    kind: LedgerErrorKind
    message: str = "Ledger operation failed"

    def __init__(self, message: Optional[str] = None, **details: Any):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)


# ============== Authorization ==============

class NotAuthorizedError(LedgerError):
    """Caller is neither the administrator nor the record's owner."""
    kind = LedgerErrorKind.NOT_AUTHORIZED
    message = "Caller is not authorized for this operation"


# ============== Lookup ==============

class ExpenseNotFoundError(LedgerError):
    kind = LedgerErrorKind.EXPENSE_NOT_FOUND
    message = "Expense not found"


class CategoryNotFoundError(LedgerError):
    kind = LedgerErrorKind.CATEGORY_NOT_FOUND
    message = "Category not found"


# ============== Input ==============

class InvalidAmountError(LedgerError):
    kind = LedgerErrorKind.INVALID_AMOUNT
    message = "Amount must be greater than zero"


class InvalidDateError(LedgerError):
    kind = LedgerErrorKind.INVALID_DATE
    message = "Date must be greater than zero"


# ============== State machine ==============

class AlreadyApprovedError(LedgerError):
    """
    Approve attempted on an expense that is no longer pending.

    Raised whether the expense was approved or rejected before;
    details["current_status"] tells which.
    """
    kind = LedgerErrorKind.ALREADY_APPROVED
    message = "Expense has already been resolved"


class AlreadyRejectedError(LedgerError):
    """
    Reject attempted on an expense that is no longer pending.

    Raised whether the expense was approved or rejected before;
    details["current_status"] tells which.
    """
    kind = LedgerErrorKind.ALREADY_REJECTED
    message = "Expense has already been resolved"


# ============== Budget ==============

class CategoryExistsError(LedgerError):
    """Reserved. Category names are not unique, so nothing raises this."""
    kind = LedgerErrorKind.CATEGORY_EXISTS
    message = "Category already exists"


class BudgetExceededError(LedgerError):
    """Only raised when budget enforcement is switched on."""
    kind = LedgerErrorKind.BUDGET_EXCEEDED
    message = "Approval would exceed the category budget"
