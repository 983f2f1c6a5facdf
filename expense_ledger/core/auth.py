"""
Identity & Authorization

Pure predicates over the caller principal. The caller is supplied by the
host and trusted as-is; nothing here authenticates anyone.
"""

from expense_ledger.core.errors import NotAuthorizedError
from expense_ledger.models.ledger import Category, Expense
from expense_ledger.storage import LedgerStorageInterface


class Authorizer:
    """
    Decides whether a caller is the administrator or a record's owner.

    The require_* helpers raise NotAuthorizedError; the predicates never
    have side effects.
    """

    def __init__(self, storage: LedgerStorageInterface):
        self._storage = storage

    def is_admin(self, caller: str) -> bool:
        return caller == self._storage.get_admin()

    def can_resolve(self, caller: str, expense: Expense) -> bool:
        """Admin or the expense's creator may approve/reject it."""
        return self.is_admin(caller) or caller == expense.creator

    def can_modify_category(self, caller: str, category: Category) -> bool:
        """Admin or the category's creator may change its budget."""
        return self.is_admin(caller) or caller == category.created_by

    def require_admin(self, caller: str) -> None:
        if not self.is_admin(caller):
            raise NotAuthorizedError(
                "Only the administrator can do this",
                caller=caller,
            )

    def require_resolve(self, caller: str, expense: Expense) -> None:
        if not self.can_resolve(caller, expense):
            raise NotAuthorizedError(
                f"Caller cannot resolve expense {expense.id}",
                caller=caller,
                expense_id=expense.id,
            )

    def require_modify_category(self, caller: str, category: Category) -> None:
        if not self.can_modify_category(caller, category):
            raise NotAuthorizedError(
                f"Caller cannot modify category {category.id}",
                caller=caller,
                category_id=category.id,
            )
