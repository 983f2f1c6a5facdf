"""
Category Store

Owns category records and the approved-spend accumulator of each one.
"""

from typing import Optional

from expense_ledger.core.auth import Authorizer
from expense_ledger.core.errors import CategoryNotFoundError
from expense_ledger.core.sequence import SequenceAllocator
from expense_ledger.logs import LedgerLogger
from expense_ledger.models.ledger import (
    Category,
    CreateCategoryRequest,
    UpdateBudgetRequest,
)
from expense_ledger.storage import LedgerStorageInterface


class CategoryStore:
    """
    Category definitions, budgets and spend totals.

    Anyone may create a category. Only its creator or the administrator
    may change its budget. The spend total only grows, and only through
    record_spend() on the approval path.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        allocator: SequenceAllocator,
        authorizer: Authorizer,
        logger: Optional[LedgerLogger] = None,
    ):
        self._storage = storage
        self._allocator = allocator
        self._authorizer = authorizer
        self._logger = logger

    def create_category(self, request: CreateCategoryRequest, caller: str) -> Category:
        """
        Create a category owned by the caller, with zero spend.

        Never fails once the request has passed its type bounds.
        """
        category = Category(
            id=self._allocator.peek_category_id(),
            name=request.name,
            budget=request.budget,
            description=request.description,
            created_by=caller,
        )
        self._allocator.next_category_id()
        self._storage.put_category(category)
        self._storage.set_spent(category.id, 0)

        if self._logger:
            self._logger.log_category_created(category)

        return category

    def update_budget(self, request: UpdateBudgetRequest, caller: str) -> Category:
        """
        Replace a category's budget. Accumulated spend is untouched.

        Raises:
            CategoryNotFoundError: Unknown category ID
            NotAuthorizedError: Caller is not the creator or the admin
        """
        category = self.require_category(request.category_id)
        self._authorizer.require_modify_category(caller, category)

        updated = category.model_copy(update={"budget": request.new_budget})
        self._storage.put_category(updated)

        if self._logger:
            self._logger.log_category_budget_updated(
                updated,
                old_budget=category.budget,
                caller=caller,
            )

        return updated

    def record_spend(self, category_id: int, amount: int) -> int:
        """
        Add an approved amount to a category's spend total.

        Internal to the approval path, which has already resolved the
        category. Returns the new total.
        """
        total = self.get_spent(category_id) + amount
        self._storage.set_spent(category_id, total)
        return total

    def get_category(self, category_id: int) -> Optional[Category]:
        return self._storage.get_category(category_id)

    def require_category(self, category_id: int) -> Category:
        category = self._storage.get_category(category_id)
        if category is None:
            raise CategoryNotFoundError(
                f"Category {category_id} does not exist",
                category_id=category_id,
            )
        return category

    def get_spent(self, category_id: int) -> int:
        """Approved spend of a category; 0 if never initialized."""
        spent = self._storage.get_spent(category_id)
        return spent if spent is not None else 0

    def is_budget_exceeded(self, category_id: int, extra_amount: int = 0) -> bool:
        """
        Would spend plus extra_amount go over the budget?

        Raises:
            CategoryNotFoundError: Unknown category ID
        """
        category = self.require_category(category_id)
        return self.get_spent(category_id) + extra_amount > category.budget
