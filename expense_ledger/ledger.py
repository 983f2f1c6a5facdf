"""
Expense Ledger Facade

This module ties the components together and defines the public
operation surface:
1. Mutations (create/approve/reject expense, create category,
   update budget, set admin) - each returns an OperationResult
2. Reads (expense, category, spend, user index, summaries)

DESIGN DECISION: The facade enforces the boundaries the stores rely on:
- One operation at a time (a single re-entrant lock)
- Failures come back as values, never as escaping LedgerErrors
- Every refused operation is logged with its caller and error kind

Inputs that break type bounds (negative integers, over-long text, a
non-string caller) raise pydantic.ValidationError before any ID is
drawn or anything is written; those are malformed calls, not ledger
outcomes.
"""

import threading
from typing import Any, Callable, Optional

from expense_ledger.config import LedgerSettings, get_settings
from expense_ledger.core import (
    AdminManager,
    Authorizer,
    CategoryStore,
    ExpenseStore,
    LedgerError,
    SequenceAllocator,
    UserIndex,
)
from expense_ledger.logs import LedgerLogger, configure_logging
from expense_ledger.models.ledger import (
    Category,
    CategorySummary,
    CreateCategoryRequest,
    CreateExpenseRequest,
    Expense,
    OperationResult,
    ResolveExpenseRequest,
    SetAdminRequest,
    UpdateBudgetRequest,
)
from expense_ledger.queries import LedgerQueries
from expense_ledger.storage import InMemoryLedgerStorage, LedgerStorageInterface


class ExpenseLedger:
    """
    The ledger as seen by the host.

    Every method takes the authenticated caller principal first. The
    host is trusted to have verified it.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        settings: Optional[LedgerSettings] = None,
        logger: Optional[LedgerLogger] = None,
    ):
        settings = settings or get_settings()
        self._logger = logger or LedgerLogger()
        self._lock = threading.RLock()

        authorizer = Authorizer(storage)
        allocator = SequenceAllocator(storage)
        user_index = UserIndex(
            storage,
            capacity=settings.user_index_capacity,
            logger=self._logger,
        )

        self.authorizer = authorizer
        self.categories = CategoryStore(storage, allocator, authorizer, logger=self._logger)
        self.expenses = ExpenseStore(
            storage,
            allocator,
            authorizer,
            self.categories,
            user_index,
            enforce_budget=settings.enforce_budget,
            logger=self._logger,
        )
        self.admin = AdminManager(storage, authorizer, logger=self._logger)
        self.queries = LedgerQueries(
            storage,
            self.expenses,
            self.categories,
            user_index,
            allocator,
        )

    def _execute(
        self,
        operation: str,
        caller: str,
        action: Callable[[], Any],
        unit: bool = False,
    ) -> OperationResult:
        """
        Run one operation under the lock and fold LedgerErrors into a result.

        With unit=True the action's return value is dropped and the
        successful result carries no value.
        """
        with self._lock:
            try:
                value = action()
            except LedgerError as e:
                self._logger.log_operation_failed(
                    operation=operation,
                    caller=caller,
                    error_kind=e.kind,
                    error_message=e.message,
                    details=e.details,
                )
                return OperationResult.failed(operation, e.kind, e.message)
        return OperationResult.ok(operation, None if unit else value)

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def create_expense(
        self,
        caller: str,
        amount: int,
        description: str,
        category_id: int,
        date: int,
    ) -> OperationResult:
        """Submit an expense claim. Success value: the new expense ID."""
        request = CreateExpenseRequest(
            amount=amount,
            description=description,
            category_id=category_id,
            date=date,
        )
        return self._execute(
            "create_expense",
            caller,
            lambda: self.expenses.create_expense(request, caller).id,
        )

    def approve_expense(
        self,
        caller: str,
        expense_id: int,
        notes: Optional[str] = None,
    ) -> OperationResult:
        request = ResolveExpenseRequest(expense_id=expense_id, notes=notes)
        return self._execute(
            "approve_expense",
            caller,
            lambda: self.expenses.approve_expense(request, caller),
            unit=True,
        )

    def reject_expense(
        self,
        caller: str,
        expense_id: int,
        notes: Optional[str] = None,
    ) -> OperationResult:
        request = ResolveExpenseRequest(expense_id=expense_id, notes=notes)
        return self._execute(
            "reject_expense",
            caller,
            lambda: self.expenses.reject_expense(request, caller),
            unit=True,
        )

    def create_category(
        self,
        caller: str,
        name: str,
        budget: int,
        description: str,
    ) -> OperationResult:
        """Create a budget category. Success value: the new category ID."""
        request = CreateCategoryRequest(name=name, budget=budget, description=description)
        return self._execute(
            "create_category",
            caller,
            lambda: self.categories.create_category(request, caller).id,
        )

    def update_category_budget(
        self,
        caller: str,
        category_id: int,
        new_budget: int,
    ) -> OperationResult:
        request = UpdateBudgetRequest(category_id=category_id, new_budget=new_budget)
        return self._execute(
            "update_category_budget",
            caller,
            lambda: self.categories.update_budget(request, caller),
            unit=True,
        )

    def set_admin(self, caller: str, new_admin: str) -> OperationResult:
        request = SetAdminRequest(new_admin=new_admin)
        return self._execute(
            "set_admin",
            caller,
            lambda: self.admin.set_admin(request, caller),
        )

    # =========================================================================
    # READS
    # =========================================================================

    def get_expense(self, expense_id: int) -> Optional[Expense]:
        with self._lock:
            return self.queries.get_expense(expense_id)

    def get_category(self, category_id: int) -> Optional[Category]:
        with self._lock:
            return self.queries.get_category(category_id)

    def get_category_spent(self, category_id: int) -> int:
        with self._lock:
            return self.queries.get_category_spent(category_id)

    def get_user_expenses(self, user: str) -> list[int]:
        with self._lock:
            return self.queries.get_user_expenses(user)

    def get_admin(self) -> str:
        with self._lock:
            return self.queries.get_admin()

    def get_category_summary(self, category_id: int) -> Optional[CategorySummary]:
        with self._lock:
            return self.queries.category_summary(category_id)

    def get_expense_count(self) -> int:
        with self._lock:
            return self.queries.get_expense_count()

    def get_category_count(self) -> int:
        with self._lock:
            return self.queries.get_category_count()


def create_ledger(
    admin: Optional[str] = None,
    settings: Optional[LedgerSettings] = None,
    storage: Optional[LedgerStorageInterface] = None,
) -> ExpenseLedger:
    """
    Factory function to create a ready-to-use ledger.

    Args:
        admin: Initial administrator (the deployer).
               Defaults to settings.admin_principal.
        settings: Ledger settings. Defaults to get_settings().
        storage: Backend to use. Defaults to a fresh in-memory store;
                 when given, its stored admin wins over `admin`.

    Returns:
        An ExpenseLedger with logging configured
    """
    settings = settings or get_settings()
    configure_logging(settings)

    if storage is None:
        storage = InMemoryLedgerStorage(admin=admin or settings.admin_principal)

    return ExpenseLedger(storage, settings=settings)
