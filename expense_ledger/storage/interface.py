"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for the ledger's state.
This allows us to:
1. Swap the in-memory backend for a real database later
2. Give every test its own isolated ledger state
3. Keep the approval rules decoupled from where records live

The interface is intentionally primitive - plain reads and writes of
records, aggregates and counters. All rules live in expense_ledger.core;
a backend never validates or authorizes anything.
"""

from abc import ABC, abstractmethod
from typing import Optional

from expense_ledger.models.ledger import Category, Expense


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger state.

    Any storage implementation (in-memory, SQL, key-value)
    must implement these methods.
    """

    # -------------------------------------------------------------------------
    # Expenses
    # -------------------------------------------------------------------------

    @abstractmethod
    def get_expense(self, expense_id: int) -> Optional[Expense]:
        """
        Retrieve an expense by its ID.

        Returns:
            The expense if found, None otherwise
        """
        pass

    @abstractmethod
    def put_expense(self, expense: Expense) -> None:
        """
        Insert or replace an expense, keyed by its ID.
        """
        pass

    # -------------------------------------------------------------------------
    # Categories
    # -------------------------------------------------------------------------

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """
        Retrieve a category by its ID.

        Returns:
            The category if found, None otherwise
        """
        pass

    @abstractmethod
    def put_category(self, category: Category) -> None:
        """
        Insert or replace a category, keyed by its ID.
        """
        pass

    @abstractmethod
    def get_spent(self, category_id: int) -> Optional[int]:
        """
        Get the approved-spend accumulator of a category.

        Returns:
            The accumulated amount, or None if never initialized
        """
        pass

    @abstractmethod
    def set_spent(self, category_id: int, amount: int) -> None:
        """Overwrite the approved-spend accumulator of a category."""
        pass

    # -------------------------------------------------------------------------
    # Per-user index
    # -------------------------------------------------------------------------

    @abstractmethod
    def get_user_expenses(self, user: str) -> Optional[list[int]]:
        """
        Get the stored expense-ID sequence of a user.

        Returns:
            A copy of the sequence, or None if the user has none
        """
        pass

    @abstractmethod
    def set_user_expenses(self, user: str, expense_ids: list[int]) -> None:
        """Replace the stored expense-ID sequence of a user."""
        pass

    # -------------------------------------------------------------------------
    # Counters and admin
    # -------------------------------------------------------------------------

    @abstractmethod
    def get_counter(self, name: str) -> int:
        """
        Get the current value of a sequence counter.

        Counters start at 1.
        """
        pass

    @abstractmethod
    def set_counter(self, name: str, value: int) -> None:
        """Overwrite a sequence counter."""
        pass

    @abstractmethod
    def get_admin(self) -> str:
        """Get the current administrator principal."""
        pass

    @abstractmethod
    def set_admin(self, principal: str) -> None:
        """Replace the administrator principal."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class UnknownCounterError(StorageError):
    """A sequence counter name the backend does not know."""
    pass
