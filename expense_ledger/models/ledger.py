"""
Core Data Models for Expense Ledger

These models define the strict schemas for every record the ledger owns
and every request it accepts. They are designed to:
1. Enforce type bounds at the boundary (unsigned integers, bounded text)
2. Keep stored records immutable (a change produces a new version)
3. Be serializable for logging and for external consumers

DESIGN DECISION: We use Pydantic v2 with strict mode on requests.
A string "5" is not an amount, and True is not a category ID.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)


# =============================================================================
# BOUNDS
# =============================================================================

MAX_DESCRIPTION_LENGTH = 100
MAX_NOTES_LENGTH = 100
MAX_CATEGORY_NAME_LENGTH = 50


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseStatus(str, Enum):
    """
    Approval status of an expense.

    CRITICAL: PENDING is the only non-terminal state.
    An expense leaves PENDING exactly once and never returns.
    """
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not ExpenseStatus.PENDING


class LedgerErrorKind(str, Enum):
    """
    Failure kinds an operation can report.

    CATEGORY_EXISTS is reserved; no operation produces it.
    BUDGET_EXCEEDED is only produced when budget enforcement is enabled.
    """
    NOT_AUTHORIZED = "not_authorized"
    EXPENSE_NOT_FOUND = "expense_not_found"
    INVALID_AMOUNT = "invalid_amount"
    CATEGORY_NOT_FOUND = "category_not_found"
    ALREADY_APPROVED = "already_approved"
    ALREADY_REJECTED = "already_rejected"
    CATEGORY_EXISTS = "category_exists"
    BUDGET_EXCEEDED = "budget_exceeded"
    INVALID_DATE = "invalid_date"


# =============================================================================
# STORED RECORDS
# =============================================================================

class Category(BaseModel):
    """
    A budget category.

    Only the budget ever changes, and only through a budget update
    by the creator or the administrator.
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(
        ...,
        ge=1,
        description="Unique category ID"
    )
    name: str = Field(
        ...,
        max_length=MAX_CATEGORY_NAME_LENGTH,
        description="Category name"
    )
    budget: int = Field(
        ...,
        ge=0,
        description="Advisory spending ceiling"
    )
    description: str = Field(
        ...,
        max_length=MAX_DESCRIPTION_LENGTH,
        description="What the category is for"
    )
    created_by: str = Field(
        ...,
        description="Principal that created the category"
    )


class Expense(BaseModel):
    """
    An expense claim.

    Everything except status, approver and notes is fixed at creation.
    Those three are written together, once, when the claim is resolved.
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(
        ...,
        ge=1,
        description="Unique expense ID"
    )
    creator: str = Field(
        ...,
        description="Principal that submitted the claim"
    )
    amount: int = Field(
        ...,
        gt=0,
        description="Claimed amount"
    )
    description: str = Field(
        ...,
        max_length=MAX_DESCRIPTION_LENGTH
    )
    category_id: int = Field(
        ...,
        ge=1,
        description="Category the claim is booked against"
    )
    date: int = Field(
        ...,
        gt=0,
        description="Caller-supplied date, e.g. 20240101"
    )

    # Resolution
    status: ExpenseStatus = Field(
        default=ExpenseStatus.PENDING
    )
    approver: Optional[str] = Field(
        default=None,
        description="Principal that approved or rejected the claim"
    )
    notes: Optional[str] = Field(
        default=None,
        max_length=MAX_NOTES_LENGTH,
        description="Notes left at resolution time"
    )

    @model_validator(mode='after')
    def validate_resolution(self) -> 'Expense':
        """A pending claim has no approver; a resolved one always has."""
        if self.status is ExpenseStatus.PENDING and self.approver is not None:
            raise ValueError("Pending expense cannot have an approver")
        if self.status.is_terminal and self.approver is None:
            raise ValueError("Resolved expense must record its approver")
        return self


# =============================================================================
# REQUEST MODELS - type bounds of the public operations
# =============================================================================

class CreateExpenseRequest(BaseModel):
    """
    Input of create-expense.

    Zero amount and zero date pass here on purpose: they are domain
    failures (InvalidAmount / InvalidDate), not type errors.
    """
    model_config = ConfigDict(strict=True)

    amount: int = Field(..., ge=0)
    description: str = Field(..., max_length=MAX_DESCRIPTION_LENGTH)
    category_id: int = Field(..., ge=0)
    date: int = Field(..., ge=0)


class ResolveExpenseRequest(BaseModel):
    """Input of approve-expense and reject-expense."""
    model_config = ConfigDict(strict=True)

    expense_id: int = Field(..., ge=0)
    notes: Optional[str] = Field(default=None, max_length=MAX_NOTES_LENGTH)


class CreateCategoryRequest(BaseModel):
    """Input of create-category."""
    model_config = ConfigDict(strict=True)

    name: str = Field(..., max_length=MAX_CATEGORY_NAME_LENGTH)
    budget: int = Field(..., ge=0)
    description: str = Field(..., max_length=MAX_DESCRIPTION_LENGTH)


class UpdateBudgetRequest(BaseModel):
    """Input of update-category-budget."""
    model_config = ConfigDict(strict=True)

    category_id: int = Field(..., ge=0)
    new_budget: int = Field(..., ge=0)


class SetAdminRequest(BaseModel):
    """Input of set-admin."""
    model_config = ConfigDict(strict=True)

    new_admin: str = Field(..., min_length=1)


# =============================================================================
# RESULT MODELS
# =============================================================================

class OperationResult(BaseModel):
    """
    Outcome of one ledger operation.

    Failures are values, not exceptions: callers branch on `success`
    and read `error` for the failure kind.
    """

    operation: str = Field(
        ...,
        description="Name of the operation that produced this result"
    )
    success: bool
    value: Any = None
    error: Optional[LedgerErrorKind] = None
    error_message: Optional[str] = None

    @model_validator(mode='after')
    def validate_outcome(self) -> 'OperationResult':
        """Exactly one of value-or-nothing / error is meaningful."""
        if self.success and self.error is not None:
            raise ValueError("Successful result cannot carry an error")
        if not self.success and self.error is None:
            raise ValueError("Failed result must carry an error kind")
        return self

    @classmethod
    def ok(cls, operation: str, value: Any = None) -> 'OperationResult':
        return cls(operation=operation, success=True, value=value)

    @classmethod
    def failed(
        cls,
        operation: str,
        error: LedgerErrorKind,
        message: Optional[str] = None,
    ) -> 'OperationResult':
        return cls(
            operation=operation,
            success=False,
            error=error,
            error_message=message,
        )


class CategorySummary(BaseModel):
    """Budget position of one category."""

    category_id: int
    name: str
    budget: int = Field(ge=0)
    spent: int = Field(ge=0)
    remaining: int = Field(
        ge=0,
        description="Budget left before the ceiling; zero once exceeded"
    )
    over_budget: bool

    def to_log_dict(self) -> dict:
        return self.model_dump(mode="json")
