"""Structured logging package."""

from expense_ledger.logs.logger import LOGGER_NAME, LedgerLogger, configure_logging

__all__ = ["LOGGER_NAME", "LedgerLogger", "configure_logging"]
