"""
Sequence Allocator

Issues expense and category IDs. A drawn ID is never handed out again,
so callers must finish all validation before drawing one.
"""

from expense_ledger.storage import (
    CATEGORY_COUNTER,
    EXPENSE_COUNTER,
    LedgerStorageInterface,
)


class SequenceAllocator:
    """Monotonic ID counters, both starting at 1."""

    def __init__(self, storage: LedgerStorageInterface):
        self._storage = storage

    def _draw(self, counter: str) -> int:
        current = self._storage.get_counter(counter)
        self._storage.set_counter(counter, current + 1)
        return current

    def next_expense_id(self) -> int:
        return self._draw(EXPENSE_COUNTER)

    def next_category_id(self) -> int:
        return self._draw(CATEGORY_COUNTER)

    def peek_expense_id(self) -> int:
        """The ID the next expense will get. Does not advance the counter."""
        return self._storage.get_counter(EXPENSE_COUNTER)

    def peek_category_id(self) -> int:
        """The ID the next category will get. Does not advance the counter."""
        return self._storage.get_counter(CATEGORY_COUNTER)
