"""
Ledger Logger

DESIGN DECISION: Every outcome of a ledger operation is logged as one
structured event. This provides:
1. Traceability of who created, approved or rejected what
2. Debugging capability when an operation is refused
3. Machine-readable output (JSON) for whatever collects the logs

The logger:
- Is local only (stdlib logging via structlog); nothing is persisted
- Is synchronous, like the ledger itself
"""

import logging
import sys
from typing import Optional

import structlog

from expense_ledger.config import LedgerSettings, get_settings
from expense_ledger.models.ledger import Category, Expense, LedgerErrorKind


LOGGER_NAME = "expense_ledger"


def configure_logging(settings: Optional[LedgerSettings] = None) -> None:
    """
    Configure structlog on top of stdlib logging.

    A stdout handler is only installed when the root logger has none,
    so handlers set up by the host application stay in place. The
    level is applied to the ledger's own logger on every call.
    """
    settings = settings or get_settings()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=settings.log_level,
    )
    logging.getLogger(LOGGER_NAME).setLevel(settings.log_level)

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class LedgerLogger:
    """
    Structured logging for ledger operations.

    One method per outcome, so call sites stay one line and every
    event of a kind carries the same keys.
    """

    def __init__(self, logger: Optional[structlog.stdlib.BoundLogger] = None):
        self._logger = logger or structlog.get_logger(LOGGER_NAME)

    def log_expense_created(self, expense: Expense) -> None:
        self._logger.info(
            "expense_created",
            expense_id=expense.id,
            creator=expense.creator,
            amount=expense.amount,
            category_id=expense.category_id,
            date=expense.date,
        )

    def log_expense_approved(self, expense: Expense, spent: int) -> None:
        """Log an approval together with the category's new spend total."""
        self._logger.info(
            "expense_approved",
            expense_id=expense.id,
            approver=expense.approver,
            amount=expense.amount,
            category_id=expense.category_id,
            category_spent=spent,
        )

    def log_expense_rejected(self, expense: Expense) -> None:
        self._logger.info(
            "expense_rejected",
            expense_id=expense.id,
            approver=expense.approver,
            category_id=expense.category_id,
        )

    def log_category_created(self, category: Category) -> None:
        self._logger.info(
            "category_created",
            category_id=category.id,
            name=category.name,
            budget=category.budget,
            created_by=category.created_by,
        )

    def log_category_budget_updated(
        self,
        category: Category,
        old_budget: int,
        caller: str,
    ) -> None:
        self._logger.info(
            "category_budget_updated",
            category_id=category.id,
            old_budget=old_budget,
            new_budget=category.budget,
            caller=caller,
        )

    def log_admin_changed(self, old_admin: str, new_admin: str) -> None:
        self._logger.info(
            "admin_changed",
            old_admin=old_admin,
            new_admin=new_admin,
        )

    def log_user_index_reset(self, user: str, dropped: int, expense_id: int) -> None:
        """The per-user index hit capacity and was replaced by one entry."""
        self._logger.warning(
            "user_index_reset",
            user=user,
            dropped_entries=dropped,
            kept_expense_id=expense_id,
        )

    def log_operation_failed(
        self,
        operation: str,
        caller: str,
        error_kind: LedgerErrorKind,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        self._logger.warning(
            "operation_failed",
            operation=operation,
            caller=caller,
            error_kind=error_kind.value,
            error_message=error_message,
            details=details or {},
        )
