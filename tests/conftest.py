"""Shared fixtures for the ledger tests."""

from unittest.mock import MagicMock

import pytest

from expense_ledger.config import LedgerSettings
from expense_ledger.core import (
    AdminManager,
    Authorizer,
    CategoryStore,
    ExpenseStore,
    SequenceAllocator,
    UserIndex,
)
from expense_ledger.ledger import ExpenseLedger
from expense_ledger.logs import LedgerLogger
from expense_ledger.storage import InMemoryLedgerStorage


ADMIN = "admin"
USER = "alice"
OTHER = "bob"


@pytest.fixture
def settings():
    """Default settings, ignoring any .env file on the machine."""
    return LedgerSettings(_env_file=None)


@pytest.fixture
def storage():
    return InMemoryLedgerStorage(admin=ADMIN)


@pytest.fixture
def log_sink():
    """Stand-in for the structlog logger; records every call."""
    return MagicMock()


@pytest.fixture
def ledger_logger(log_sink):
    return LedgerLogger(logger=log_sink)


@pytest.fixture
def ledger(storage, settings, ledger_logger):
    return ExpenseLedger(storage, settings=settings, logger=ledger_logger)


@pytest.fixture
def strict_ledger(storage, ledger_logger):
    """A ledger that refuses approvals over budget."""
    settings = LedgerSettings(_env_file=None, enforce_budget=True)
    return ExpenseLedger(storage, settings=settings, logger=ledger_logger)


@pytest.fixture
def components(storage, ledger_logger):
    """The core components wired together without the facade."""
    authorizer = Authorizer(storage)
    allocator = SequenceAllocator(storage)
    user_index = UserIndex(storage, capacity=100, logger=ledger_logger)
    categories = CategoryStore(storage, allocator, authorizer, logger=ledger_logger)
    expenses = ExpenseStore(
        storage,
        allocator,
        authorizer,
        categories,
        user_index,
        logger=ledger_logger,
    )
    admin = AdminManager(storage, authorizer, logger=ledger_logger)
    return {
        "authorizer": authorizer,
        "allocator": allocator,
        "user_index": user_index,
        "categories": categories,
        "expenses": expenses,
        "admin": admin,
    }


@pytest.fixture
def travel(ledger):
    """Category 1: Travel, budget 1000, created by USER."""
    result = ledger.create_category(USER, "Travel", 1000, "trips")
    assert result.success
    return result.value
