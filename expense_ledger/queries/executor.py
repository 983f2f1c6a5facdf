"""
Query Surface

DESIGN DECISION: Reads never go through the mutating stores' write paths.
This module composes the stores into the read-only accessors external
consumers use, plus a per-category budget summary.

GUARANTEES:
- No read changes state (no counter draws, no lazy initialization)
- Unknown IDs give None / empty / 0, never an exception
"""

from typing import Optional

from expense_ledger.core.categories import CategoryStore
from expense_ledger.core.expenses import ExpenseStore
from expense_ledger.core.sequence import SequenceAllocator
from expense_ledger.core.user_index import UserIndex
from expense_ledger.models.ledger import (
    Category,
    CategorySummary,
    Expense,
    ExpenseStatus,
)
from expense_ledger.storage import LedgerStorageInterface


class LedgerQueries:
    """
    Read-only accessors over the ledger state.

    Everything returned is either a frozen record or a fresh copy, so
    callers cannot reach back into the store.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        expenses: ExpenseStore,
        categories: CategoryStore,
        user_index: UserIndex,
        allocator: SequenceAllocator,
    ):
        self._storage = storage
        self._expenses = expenses
        self._categories = categories
        self._user_index = user_index
        self._allocator = allocator

    def get_expense(self, expense_id: int) -> Optional[Expense]:
        return self._expenses.get_expense(expense_id)

    def get_category(self, category_id: int) -> Optional[Category]:
        return self._categories.get_category(category_id)

    def get_category_spent(self, category_id: int) -> int:
        return self._categories.get_spent(category_id)

    def get_user_expenses(self, user: str) -> list[int]:
        return self._user_index.get_expenses(user)

    def get_admin(self) -> str:
        return self._storage.get_admin()

    def get_expense_count(self) -> int:
        """Number of expense IDs issued so far."""
        return self._allocator.peek_expense_id() - 1

    def get_category_count(self) -> int:
        """Number of category IDs issued so far."""
        return self._allocator.peek_category_id() - 1

    def category_summary(self, category_id: int) -> Optional[CategorySummary]:
        """
        Budget position of a category.

        Returns None for an unknown category.
        """
        category = self._categories.get_category(category_id)
        if category is None:
            return None

        spent = self._categories.get_spent(category_id)
        return CategorySummary(
            category_id=category.id,
            name=category.name,
            budget=category.budget,
            spent=spent,
            remaining=max(category.budget - spent, 0),
            over_budget=self._categories.is_budget_exceeded(category_id),
        )

    def approved_total(self, category_id: int) -> int:
        """
        Sum of approved amounts in a category, recomputed from the records.

        Walks every issued expense; meant for consistency checks, not for
        hot paths. Always equals get_category_spent().
        """
        total = 0
        for expense_id in range(1, self._allocator.peek_expense_id()):
            expense = self._expenses.get_expense(expense_id)
            if (
                expense is not None
                and expense.category_id == category_id
                and expense.status is ExpenseStatus.APPROVED
            ):
                total += expense.amount
        return total
