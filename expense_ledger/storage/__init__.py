"""
Storage Package

Provides the abstract ledger storage interface and its in-memory
implementation. Designed to be swappable.
"""

from expense_ledger.storage.interface import (
    LedgerStorageInterface,
    StorageError,
    UnknownCounterError,
)
from expense_ledger.storage.memory import (
    CATEGORY_COUNTER,
    EXPENSE_COUNTER,
    InMemoryLedgerStorage,
)

__all__ = [
    # Interface
    "LedgerStorageInterface",
    # Exceptions
    "StorageError",
    "UnknownCounterError",
    # In-memory implementation
    "CATEGORY_COUNTER",
    "EXPENSE_COUNTER",
    "InMemoryLedgerStorage",
]
