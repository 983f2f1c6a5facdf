"""
User Index

A bounded list of expense IDs per user.

The overflow rule is deliberate and unusual: when a list is full, the
next append replaces the whole list with a single entry. It is not a
ring buffer and older IDs are not rotated out one by one.
"""

from typing import Iterable, Iterator, Optional

from expense_ledger.logs import LedgerLogger
from expense_ledger.storage import LedgerStorageInterface


DEFAULT_CAPACITY = 100


class BoundedExpenseList:
    """
    Expense IDs in insertion order, reset to one entry on overflow.

    A seed longer than the capacity (a list written under a larger
    capacity) is kept as-is and counts as full.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, expense_ids: Iterable[int] = ()):
        if capacity < 1:
            raise ValueError("Capacity must be at least 1")
        self.capacity = capacity
        self._ids = list(expense_ids)

    def append(self, expense_id: int) -> bool:
        """
        Append an ID.

        Returns:
            True if the list was full and has been reset to [expense_id]
        """
        if not self.is_full:
            self._ids.append(expense_id)
            return False
        self._ids = [expense_id]
        return True

    @property
    def is_full(self) -> bool:
        return len(self._ids) >= self.capacity

    def to_list(self) -> list[int]:
        return list(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[int]:
        return iter(self._ids)


class UserIndex:
    """Per-user expense lists, created lazily on a user's first expense."""

    def __init__(
        self,
        storage: LedgerStorageInterface,
        capacity: int = DEFAULT_CAPACITY,
        logger: Optional[LedgerLogger] = None,
    ):
        self._storage = storage
        self._capacity = capacity
        self._logger = logger

    def load(self, user: str) -> BoundedExpenseList:
        return BoundedExpenseList(
            self._capacity,
            self._storage.get_user_expenses(user) or [],
        )

    def append_expense(
        self,
        user: str,
        expense_id: int,
        expenses: Optional[BoundedExpenseList] = None,
    ) -> None:
        """
        Record a new expense ID for a user.

        Pass the list from an earlier load() to append without reading
        storage again.
        """
        if expenses is None:
            expenses = self.load(user)
        dropped = len(expenses)
        was_reset = expenses.append(expense_id)
        self._storage.set_user_expenses(user, expenses.to_list())

        if was_reset and self._logger:
            self._logger.log_user_index_reset(user, dropped, expense_id)

    def get_expenses(self, user: str) -> list[int]:
        """Expense IDs recorded for a user; empty if none."""
        return self.load(user).to_list()
