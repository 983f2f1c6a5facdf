"""
Expense Store - Approval State Machine

    PENDING ──approve──> APPROVED   (terminal)
       │
       └──────reject───> REJECTED   (terminal)

CRITICAL: Every check runs before anything is written or any ID is
drawn. A refused call leaves the ledger exactly as it found it.
"""

from typing import Optional

from expense_ledger.core.auth import Authorizer
from expense_ledger.core.categories import CategoryStore
from expense_ledger.core.errors import (
    AlreadyApprovedError,
    AlreadyRejectedError,
    BudgetExceededError,
    CategoryNotFoundError,
    ExpenseNotFoundError,
    InvalidAmountError,
    InvalidDateError,
    LedgerError,
)
from expense_ledger.core.sequence import SequenceAllocator
from expense_ledger.core.user_index import UserIndex
from expense_ledger.logs import LedgerLogger
from expense_ledger.models.ledger import (
    CreateExpenseRequest,
    Expense,
    ExpenseStatus,
    ResolveExpenseRequest,
)
from expense_ledger.storage import LedgerStorageInterface


class ExpenseStore:
    """
    Expense records and their status transitions.

    Approval adds the amount to the category's spend total. Whether the
    budget is checked first depends on enforce_budget (off by default:
    the budget is advisory).
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        allocator: SequenceAllocator,
        authorizer: Authorizer,
        categories: CategoryStore,
        user_index: UserIndex,
        enforce_budget: bool = False,
        logger: Optional[LedgerLogger] = None,
    ):
        self._storage = storage
        self._allocator = allocator
        self._authorizer = authorizer
        self._categories = categories
        self._user_index = user_index
        self._enforce_budget = enforce_budget
        self._logger = logger

    def create_expense(self, request: CreateExpenseRequest, caller: str) -> Expense:
        """
        Submit a pending expense claim.

        Raises:
            InvalidAmountError: amount is 0
            CategoryNotFoundError: category does not exist
            InvalidDateError: date is 0
        """
        if request.amount == 0:
            raise InvalidAmountError(amount=request.amount)
        if self._categories.get_category(request.category_id) is None:
            raise CategoryNotFoundError(
                f"Category {request.category_id} does not exist",
                category_id=request.category_id,
            )
        if request.date == 0:
            raise InvalidDateError(date=request.date)

        user_expenses = self._user_index.load(caller)

        # The ID is drawn only once the record has validated.
        expense = Expense(
            id=self._allocator.peek_expense_id(),
            creator=caller,
            amount=request.amount,
            description=request.description,
            category_id=request.category_id,
            date=request.date,
        )
        self._allocator.next_expense_id()
        self._storage.put_expense(expense)
        self._user_index.append_expense(caller, expense.id, user_expenses)

        if self._logger:
            self._logger.log_expense_created(expense)

        return expense

    def approve_expense(self, request: ResolveExpenseRequest, caller: str) -> Expense:
        """
        Move a pending expense to APPROVED and book its amount.

        Raises:
            ExpenseNotFoundError: Unknown expense ID
            NotAuthorizedError: Caller is not the creator or the admin
            AlreadyApprovedError: Expense is approved or rejected already
            BudgetExceededError: Only with enforce_budget on
        """
        expense = self._require_pending(request.expense_id, caller, AlreadyApprovedError)

        if self._enforce_budget and self._categories.is_budget_exceeded(
            expense.category_id, expense.amount
        ):
            category = self._categories.require_category(expense.category_id)
            raise BudgetExceededError(
                expense_id=expense.id,
                category_id=category.id,
                budget=category.budget,
                spent=self._categories.get_spent(category.id),
                amount=expense.amount,
            )

        approved = self._resolve(expense, ExpenseStatus.APPROVED, request.notes, caller)
        spent = self._categories.record_spend(approved.category_id, approved.amount)

        if self._logger:
            self._logger.log_expense_approved(approved, spent)

        return approved

    def reject_expense(self, request: ResolveExpenseRequest, caller: str) -> Expense:
        """
        Move a pending expense to REJECTED. Spend totals are untouched.

        Raises:
            ExpenseNotFoundError: Unknown expense ID
            NotAuthorizedError: Caller is not the creator or the admin
            AlreadyRejectedError: Expense is approved or rejected already
        """
        expense = self._require_pending(request.expense_id, caller, AlreadyRejectedError)
        rejected = self._resolve(expense, ExpenseStatus.REJECTED, request.notes, caller)

        if self._logger:
            self._logger.log_expense_rejected(rejected)

        return rejected

    def get_expense(self, expense_id: int) -> Optional[Expense]:
        return self._storage.get_expense(expense_id)

    def _require_pending(
        self,
        expense_id: int,
        caller: str,
        resolved_error: type[LedgerError],
    ) -> Expense:
        """Lookup, then authorization, then the pending check."""
        expense = self._storage.get_expense(expense_id)
        if expense is None:
            raise ExpenseNotFoundError(
                f"Expense {expense_id} does not exist",
                expense_id=expense_id,
            )

        self._authorizer.require_resolve(caller, expense)

        if expense.status is not ExpenseStatus.PENDING:
            raise resolved_error(
                f"Expense {expense_id} is already {expense.status.value}",
                expense_id=expense_id,
                current_status=expense.status.value,
            )

        return expense

    def _resolve(
        self,
        expense: Expense,
        status: ExpenseStatus,
        notes: Optional[str],
        caller: str,
    ) -> Expense:
        resolved = expense.model_copy(
            update={"status": status, "approver": caller, "notes": notes}
        )
        self._storage.put_expense(resolved)
        return resolved
