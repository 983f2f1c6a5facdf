"""Read-only query package."""

from expense_ledger.queries.executor import LedgerQueries

__all__ = ["LedgerQueries"]
