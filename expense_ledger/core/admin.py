"""Admin management."""

from typing import Optional

from expense_ledger.core.auth import Authorizer
from expense_ledger.logs import LedgerLogger
from expense_ledger.models.ledger import SetAdminRequest
from expense_ledger.storage import LedgerStorageInterface


class AdminManager:
    """
    Hands the administrator role over.

    Single step, no confirmation by the new admin, and setting the
    current admin again is allowed.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        authorizer: Authorizer,
        logger: Optional[LedgerLogger] = None,
    ):
        self._storage = storage
        self._authorizer = authorizer
        self._logger = logger

    def set_admin(self, request: SetAdminRequest, caller: str) -> None:
        """
        Raises:
            NotAuthorizedError: Caller is not the current admin
        """
        self._authorizer.require_admin(caller)

        old_admin = self._storage.get_admin()
        self._storage.set_admin(request.new_admin)

        if self._logger:
            self._logger.log_admin_changed(old_admin, request.new_admin)

    def get_admin(self) -> str:
        return self._storage.get_admin()
