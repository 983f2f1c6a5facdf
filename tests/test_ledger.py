"""Behavioural tests through the ExpenseLedger facade."""

import logging
import random
import threading

import pytest
from pydantic import ValidationError

from expense_ledger.config import LedgerSettings
from expense_ledger.ledger import ExpenseLedger, create_ledger
from expense_ledger.logs import LOGGER_NAME, configure_logging
from expense_ledger.models.ledger import ExpenseStatus, LedgerErrorKind
from expense_ledger.storage import InMemoryLedgerStorage

from tests.conftest import ADMIN, OTHER, USER


class TestScenarios:
    """End-to-end walkthroughs of the approval workflow."""

    def test_approve_once_then_refused(self, ledger):
        """Category, expense, approval, second approval refused."""
        category = ledger.create_category(USER, "Travel", 1000, "trips")
        assert category.success and category.value == 1
        assert ledger.get_category_spent(1) == 0

        created = ledger.create_expense(USER, 500, "flight", 1, 20240101)
        assert created.success and created.value == 1
        assert ledger.get_expense(1).status == ExpenseStatus.PENDING

        approved = ledger.approve_expense(USER, 1)
        assert approved.success
        assert approved.value is None
        assert ledger.get_expense(1).status == ExpenseStatus.APPROVED
        assert ledger.get_category_spent(1) == 500

        again = ledger.approve_expense(USER, 1)
        assert again.success is False
        assert again.error == LedgerErrorKind.ALREADY_APPROVED
        assert ledger.get_category_spent(1) == 500

    def test_unknown_category_creates_nothing(self, ledger):
        result = ledger.create_expense(USER, 100, "taxi", 99, 20240101)
        assert result.success is False
        assert result.error == LedgerErrorKind.CATEGORY_NOT_FOUND
        assert ledger.get_expense_count() == 0
        assert ledger.get_user_expenses(USER) == []

        ledger.create_category(USER, "Travel", 1000, "trips")
        assert ledger.create_expense(USER, 100, "taxi", 1, 20240101).value == 1


class TestCreateExpense:
    """Tests for create_expense failures."""

    @pytest.mark.parametrize("caller", [ADMIN, USER, OTHER])
    @pytest.mark.parametrize(
        "amount, category_id, date, expected",
        [
            (0, 1, 20240101, LedgerErrorKind.INVALID_AMOUNT),
            (0, 99, 0, LedgerErrorKind.INVALID_AMOUNT),
            (10, 99, 20240101, LedgerErrorKind.CATEGORY_NOT_FOUND),
            (10, 99, 0, LedgerErrorKind.CATEGORY_NOT_FOUND),
            (10, 1, 0, LedgerErrorKind.INVALID_DATE),
        ],
    )
    def test_failures_independent_of_caller(
        self, ledger, travel, caller, amount, category_id, date, expected
    ):
        result = ledger.create_expense(caller, amount, "x", category_id, date)
        assert result.success is False
        assert result.error == expected
        assert ledger.get_expense_count() == 0

    def test_type_bounds_raise(self, ledger, travel):
        """Malformed calls never reach the store."""
        with pytest.raises(ValidationError):
            ledger.create_expense(USER, -1, "x", travel, 20240101)
        with pytest.raises(ValidationError):
            ledger.create_expense(USER, 1, "x" * 101, travel, 20240101)
        assert ledger.get_expense_count() == 0

    def test_malformed_caller_draws_no_id(self, ledger, travel):
        with pytest.raises(ValidationError):
            ledger.create_expense(None, 10, "x", travel, 20240101)
        assert ledger.get_expense_count() == 0
        assert ledger.get_user_expenses(USER) == []

        assert ledger.create_expense(USER, 10, "x", travel, 20240101).value == 1


class TestResolution:
    """Tests for approve/reject authorization and state."""

    @pytest.fixture
    def pending(self, ledger, travel):
        return ledger.create_expense(USER, 200, "hotel", travel, 20240102).value

    def test_admin_can_approve(self, ledger, travel, pending):
        assert ledger.approve_expense(ADMIN, pending, "fine").success
        expense = ledger.get_expense(pending)
        assert expense.approver == ADMIN
        assert expense.notes == "fine"

    def test_creator_can_reject(self, ledger, travel, pending):
        assert ledger.reject_expense(USER, pending, "duplicate").success
        assert ledger.get_expense(pending).status == ExpenseStatus.REJECTED
        assert ledger.get_category_spent(travel) == 0

    @pytest.mark.parametrize("operation", ["approve_expense", "reject_expense"])
    def test_stranger_is_refused(self, ledger, pending, operation):
        before = ledger.get_expense(pending)
        result = getattr(ledger, operation)(OTHER, pending)
        assert result.error == LedgerErrorKind.NOT_AUTHORIZED
        assert ledger.get_expense(pending) == before

    def test_unknown_expense(self, ledger):
        assert ledger.approve_expense(ADMIN, 3).error == LedgerErrorKind.EXPENSE_NOT_FOUND
        assert ledger.reject_expense(ADMIN, 3).error == LedgerErrorKind.EXPENSE_NOT_FOUND

    def test_terminal_state_is_final(self, ledger, travel, pending):
        """Once resolved, every further attempt fails and changes nothing."""
        ledger.approve_expense(USER, pending, "first")
        resolved = ledger.get_expense(pending)

        assert ledger.approve_expense(ADMIN, pending).error == LedgerErrorKind.ALREADY_APPROVED
        assert ledger.reject_expense(ADMIN, pending).error == LedgerErrorKind.ALREADY_REJECTED
        assert ledger.get_expense(pending) == resolved
        assert ledger.get_category_spent(travel) == 200

    def test_approve_ignores_budget_by_default(self, ledger):
        """The budget is advisory unless enforcement is switched on."""
        category = ledger.create_category(USER, "Tiny", 10, "").value
        expense = ledger.create_expense(USER, 50, "over", category, 1).value
        assert ledger.approve_expense(USER, expense).success
        summary = ledger.get_category_summary(category)
        assert summary.spent == 50
        assert summary.remaining == 0
        assert summary.over_budget is True


class TestBudgetEnforcement:
    """Tests for the opt-in budget ceiling."""

    def test_over_budget_approval_refused(self, strict_ledger):
        category = strict_ledger.create_category(USER, "Tiny", 100, "").value
        first = strict_ledger.create_expense(USER, 60, "a", category, 1).value
        second = strict_ledger.create_expense(USER, 50, "b", category, 1).value

        assert strict_ledger.approve_expense(USER, first).success
        result = strict_ledger.approve_expense(USER, second)
        assert result.error == LedgerErrorKind.BUDGET_EXCEEDED
        assert strict_ledger.get_expense(second).status == ExpenseStatus.PENDING
        assert strict_ledger.get_category_spent(category) == 60

    def test_exact_budget_allowed(self, strict_ledger):
        category = strict_ledger.create_category(USER, "Tiny", 100, "").value
        expense = strict_ledger.create_expense(USER, 100, "a", category, 1).value
        assert strict_ledger.approve_expense(USER, expense).success

    def test_raised_budget_unblocks(self, strict_ledger):
        category = strict_ledger.create_category(USER, "Tiny", 10, "").value
        expense = strict_ledger.create_expense(USER, 20, "a", category, 1).value
        assert strict_ledger.approve_expense(USER, expense).error == LedgerErrorKind.BUDGET_EXCEEDED
        assert strict_ledger.update_category_budget(USER, category, 20).success
        assert strict_ledger.approve_expense(USER, expense).success


class TestCategories:
    """Tests for category creation and budget updates."""

    def test_anyone_can_create(self, ledger):
        assert ledger.create_category(OTHER, "Food", 0, "").value == 1
        assert ledger.create_category(ADMIN, "Food", 0, "").value == 2
        assert ledger.get_category(1).created_by == OTHER
        assert ledger.get_category_count() == 2

    def test_owner_and_admin_update_budget(self, ledger, travel):
        assert ledger.update_category_budget(USER, travel, 5).success
        assert ledger.update_category_budget(ADMIN, travel, 7).success
        assert ledger.get_category(travel).budget == 7

    def test_stranger_cannot_update_budget(self, ledger, travel):
        result = ledger.update_category_budget(OTHER, travel, 5)
        assert result.error == LedgerErrorKind.NOT_AUTHORIZED
        assert ledger.get_category(travel).budget == 1000

    def test_update_unknown_category(self, ledger):
        result = ledger.update_category_budget(ADMIN, 4, 5)
        assert result.error == LedgerErrorKind.CATEGORY_NOT_FOUND

    def test_unknown_category_reads(self, ledger):
        assert ledger.get_category(8) is None
        assert ledger.get_category_spent(8) == 0
        assert ledger.get_category_summary(8) is None

    def test_malformed_caller_draws_no_id(self, ledger):
        with pytest.raises(ValidationError):
            ledger.create_category(None, "x", 1, "")
        assert ledger.get_category_count() == 0

        assert ledger.create_category(USER, "x", 1, "").value == 1
        assert ledger.get_category_count() == 1

    def test_summary_uses_budget_predicate(self, ledger, travel, monkeypatch):
        """over_budget comes from is_budget_exceeded, not a separate comparison."""
        monkeypatch.setattr(ledger.categories, "is_budget_exceeded", lambda category_id: True)
        summary = ledger.get_category_summary(travel)
        assert summary.spent == 0
        assert summary.over_budget is True


class TestAdmin:
    """Tests for set_admin through the facade."""

    def test_handover(self, ledger):
        assert ledger.set_admin(ADMIN, USER).success
        assert ledger.get_admin() == USER
        assert ledger.set_admin(ADMIN, OTHER).error == LedgerErrorKind.NOT_AUTHORIZED
        assert ledger.get_admin() == USER

    def test_new_admin_can_resolve_any_expense(self, ledger, travel):
        expense = ledger.create_expense(USER, 5, "x", travel, 1).value
        ledger.set_admin(ADMIN, OTHER)
        assert ledger.approve_expense(ADMIN, expense).error == LedgerErrorKind.NOT_AUTHORIZED
        assert ledger.approve_expense(OTHER, expense).success


class TestUserIndexOverflow:
    """Tests for the per-user expense list."""

    def test_insertion_order(self, ledger, travel):
        ids = [ledger.create_expense(USER, 1, "x", travel, 1).value for _ in range(3)]
        ledger.create_expense(OTHER, 1, "x", travel, 1)
        assert ledger.get_user_expenses(USER) == ids
        assert ledger.get_user_expenses(OTHER) == [4]

    def test_101st_expense_resets_list(self, ledger, travel):
        for _ in range(100):
            ledger.create_expense(USER, 1, "x", travel, 1)
        assert len(ledger.get_user_expenses(USER)) == 100

        assert ledger.create_expense(USER, 1, "x", travel, 1).value == 101
        assert ledger.get_user_expenses(USER) == [101]

    def test_capacity_from_settings(self, storage, ledger_logger):
        settings = LedgerSettings(_env_file=None, user_index_capacity=2)
        small = ExpenseLedger(storage, settings=settings, logger=ledger_logger)
        category = small.create_category(USER, "c", 0, "").value
        for _ in range(3):
            small.create_expense(USER, 1, "x", category, 1)
        assert small.get_user_expenses(USER) == [3]

    def test_storage_reused_with_smaller_capacity(self, storage, ledger, travel, ledger_logger):
        for _ in range(3):
            ledger.create_expense(USER, 1, "x", travel, 1)

        settings = LedgerSettings(_env_file=None, user_index_capacity=2)
        small = ExpenseLedger(storage, settings=settings, logger=ledger_logger)
        assert small.get_user_expenses(USER) == [1, 2, 3]

        result = small.create_expense(USER, 1, "x", travel, 1)
        assert result.success and result.value == 4
        assert small.get_user_expenses(USER) == [4]
        assert small.get_expense(4).creator == USER


class TestInvariants:
    """Randomized checks of the ledger-wide invariants."""

    def test_random_workflow_keeps_accounts_consistent(self, ledger):
        rng = random.Random(1234)
        principals = [ADMIN, USER, OTHER, "carol"]
        category_ids = []
        expense_ids = []

        for _ in range(400):
            caller = rng.choice(principals)
            action = rng.random()
            if action < 0.1 or not category_ids:
                result = ledger.create_category(caller, "c", rng.randint(0, 500), "")
                category_ids.append(result.value)
            elif action < 0.5:
                result = ledger.create_expense(
                    caller,
                    rng.randint(0, 100),
                    "e",
                    rng.choice(category_ids + [999]),
                    rng.randint(0, 3),
                )
                if result.success:
                    expense_ids.append(result.value)
            elif expense_ids:
                target = rng.choice(expense_ids)
                before = ledger.get_expense(target)
                if action < 0.75:
                    result = ledger.approve_expense(caller, target)
                else:
                    result = ledger.reject_expense(caller, target)
                if before.status.is_terminal:
                    assert result.success is False
                    assert ledger.get_expense(target) == before

        assert category_ids == sorted(set(category_ids))
        assert expense_ids == sorted(set(expense_ids))
        for category_id in category_ids:
            assert ledger.get_category_spent(category_id) == ledger.queries.approved_total(
                category_id
            )


class TestLogging:
    """Tests for the structured events the facade emits."""

    def test_success_events(self, ledger, log_sink):
        ledger.create_category(USER, "Travel", 1000, "trips")
        ledger.create_expense(USER, 500, "flight", 1, 20240101)
        ledger.approve_expense(ADMIN, 1)

        events = [c.args[0] for c in log_sink.info.call_args_list]
        assert events == ["category_created", "expense_created", "expense_approved"]
        assert log_sink.info.call_args_list[-1].kwargs["category_spent"] == 500

    def test_failure_event(self, ledger, log_sink):
        ledger.set_admin(USER, OTHER)
        log_sink.warning.assert_called_once()
        args, kwargs = log_sink.warning.call_args
        assert args == ("operation_failed",)
        assert kwargs["operation"] == "set_admin"
        assert kwargs["caller"] == USER
        assert kwargs["error_kind"] == "not_authorized"

    def test_configure_keeps_host_handlers(self, settings):
        """configure_logging leaves handlers installed by the host in place."""
        root = logging.getLogger()
        handler = logging.NullHandler()
        root.addHandler(handler)
        try:
            configure_logging(settings)
            assert handler in root.handlers
            assert logging.getLogger(LOGGER_NAME).level == logging.INFO
        finally:
            root.removeHandler(handler)


class TestConcurrency:
    """Tests for serialized access."""

    def test_parallel_creations_get_unique_ids(self, ledger, travel):
        results = []

        def submit():
            for _ in range(25):
                results.append(ledger.create_expense(USER, 1, "x", travel, 1).value)

        threads = [threading.Thread(target=submit) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sorted(results) == list(range(1, 101))
        assert ledger.get_expense_count() == 100


class TestFactory:
    """Tests for create_ledger."""

    def test_default_admin_from_settings(self):
        settings = LedgerSettings(_env_file=None, admin_principal="root", log_json=False)
        ledger = create_ledger(settings=settings)
        assert ledger.get_admin() == "root"

    def test_explicit_admin(self, settings):
        ledger = create_ledger(admin="deployer-1", settings=settings)
        assert ledger.get_admin() == "deployer-1"

    def test_existing_storage_keeps_its_admin(self, settings):
        storage = InMemoryLedgerStorage(admin="kept")
        ledger = create_ledger(admin="ignored", settings=settings, storage=storage)
        assert ledger.get_admin() == "kept"
