"""
In-Memory Storage Implementation

DESIGN DECISION: The ledger state is an explicit object, constructed at
startup and handed to every component, rather than module-level globals.
Two InMemoryLedgerStorage instances never share anything, which is what
makes test isolation trivial.

TRADEOFFS:
- Nothing survives the process (persistence is the host's concern)
- No locking here; the ExpenseLedger facade serializes access
"""

from typing import Optional

from expense_ledger.models.ledger import Category, Expense
from expense_ledger.storage.interface import (
    LedgerStorageInterface,
    UnknownCounterError,
)


EXPENSE_COUNTER = "expense"
CATEGORY_COUNTER = "category"


class InMemoryLedgerStorage(LedgerStorageInterface):
    """
    Dictionary-backed ledger state.

    Records are frozen pydantic models, so handing them out directly is
    safe. Lists are copied on the way in and out.
    """

    def __init__(self, admin: str):
        """
        Initialize empty ledger state.

        Args:
            admin: Principal that starts as administrator (the deployer).
        """
        self._expenses: dict[int, Expense] = {}
        self._categories: dict[int, Category] = {}
        self._category_spent: dict[int, int] = {}
        self._user_expenses: dict[str, list[int]] = {}
        self._counters: dict[str, int] = {
            EXPENSE_COUNTER: 1,
            CATEGORY_COUNTER: 1,
        }
        self._admin = admin

    def get_expense(self, expense_id: int) -> Optional[Expense]:
        return self._expenses.get(expense_id)

    def put_expense(self, expense: Expense) -> None:
        self._expenses[expense.id] = expense

    def get_category(self, category_id: int) -> Optional[Category]:
        return self._categories.get(category_id)

    def put_category(self, category: Category) -> None:
        self._categories[category.id] = category

    def get_spent(self, category_id: int) -> Optional[int]:
        return self._category_spent.get(category_id)

    def set_spent(self, category_id: int, amount: int) -> None:
        self._category_spent[category_id] = amount

    def get_user_expenses(self, user: str) -> Optional[list[int]]:
        expense_ids = self._user_expenses.get(user)
        if expense_ids is None:
            return None
        return list(expense_ids)

    def set_user_expenses(self, user: str, expense_ids: list[int]) -> None:
        self._user_expenses[user] = list(expense_ids)

    def get_counter(self, name: str) -> int:
        if name not in self._counters:
            raise UnknownCounterError(f"Unknown sequence counter: {name}")
        return self._counters[name]

    def set_counter(self, name: str, value: int) -> None:
        if name not in self._counters:
            raise UnknownCounterError(f"Unknown sequence counter: {name}")
        self._counters[name] = value

    def get_admin(self) -> str:
        return self._admin

    def set_admin(self, principal: str) -> None:
        self._admin = principal
