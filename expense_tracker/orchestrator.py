"""
Main Orchestrator for Expense Tracker

This module ties together validation, storage, the budget ledger, the
filter engine and the audit trail, and defines the flows for:
1. Accounts (register → login → logout)
2. Expenses (add, modify, remove, view, report, manage budget)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing is stored unless every field passed validation
- Reads go through the filter engine and never mutate
- Every commit, rejection and cancellation is audited

The flows do not prompt. Console screens call the per-field check_*
methods so a bad field can be re-asked on its own, then commit.
"""

from datetime import date
from decimal import Decimal
from typing import Callable, Optional, Union
from uuid import UUID

from expense_tracker.audit import AuditLogger
from expense_tracker.budget import BudgetLedger
from expense_tracker.config import get_settings
from expense_tracker.models.expense import (
    Expense,
    ExpenseQuery,
    ExpenseReport,
    FilterResult,
    User,
)
from expense_tracker.queries import ExpenseQueryExecutor
from expense_tracker.services.storage import (
    AccountRegistryInterface,
    AuthenticationError,
    ExpenseStorageInterface,
    InMemoryAccountRegistry,
    InMemoryAuditStorage,
    InMemoryExpenseStore,
)
from expense_tracker.validation import (
    DuplicateUsernameError,
    ExpenseTrackerError,
    InputValidator,
    NegativeBudgetError,
)


class AccountFlow:
    """
    Orchestrates registration and login.

    Flow:
    1. Username → not empty, valid, not taken
    2. Password → valid
    3. Initial budget → positive number
    4. Confirm → register (second registration of a name is refused)
    5. Login → ExpenseFlow for the user
    """

    def __init__(
        self,
        registry: AccountRegistryInterface,
        validator: Optional[InputValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        today_provider: Callable[[], date] = date.today,
    ):
        self._registry = registry
        self._validator = validator or InputValidator()
        self._audit_logger = audit_logger
        self._today = today_provider

    @property
    def registry(self) -> AccountRegistryInterface:
        return self._registry

    def _checked(self, operation: str, check: Callable, *args, correlation_id=None):
        try:
            return check(*args)
        except ExpenseTrackerError as e:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(
                    operation=operation,
                    error=e,
                    correlation_id=correlation_id,
                )
            raise

    def check_username(self, raw: str, correlation_id: Optional[UUID] = None) -> str:
        return self._checked(
            "registration", self._check_username, raw, correlation_id=correlation_id
        )

    def _check_username(self, raw: str) -> str:
        InputValidator.validate_not_empty(raw, field="username")
        InputValidator.validate_username(raw)
        if self._validator.is_username_taken(raw) or self._registry.get_user(raw) is not None:
            raise DuplicateUsernameError(field="username")
        return raw

    def check_password(self, raw: str, correlation_id: Optional[UUID] = None) -> str:
        return self._checked(
            "registration", self._check_password, raw, correlation_id=correlation_id
        )

    @staticmethod
    def _check_password(raw: str) -> str:
        InputValidator.validate_not_empty(raw, field="password")
        InputValidator.validate_password(raw)
        return raw

    def check_initial_budget(self, raw: str, correlation_id: Optional[UUID] = None) -> Decimal:
        return self._checked(
            "registration",
            InputValidator.validate_initial_budget,
            raw,
            correlation_id=correlation_id,
        )

    def register(
        self,
        username: str,
        password: str,
        budget: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """
        Register an account from already-checked values.

        Returns False if the username was taken in the meantime.
        """
        if not self._registry.register(username, password, budget):
            if self._audit_logger:
                self._audit_logger.log_registration_rejected(
                    username=username,
                    reason="Username already exists",
                    correlation_id=correlation_id,
                )
            return False

        self._validator.add_username(username)
        if self._audit_logger:
            self._audit_logger.log_user_registered(
                username=username,
                budget=budget,
                correlation_id=correlation_id,
            )
        return True

    def login(
        self,
        username: str,
        password: str,
        correlation_id: Optional[UUID] = None,
    ) -> "ExpenseFlow":
        """
        Log in and open an expense session.

        Raises:
            UnknownUserError / WrongPasswordError
        """
        try:
            user = self._registry.login(username, password)
        except AuthenticationError as e:
            if self._audit_logger:
                self._audit_logger.log_login_failed(
                    username=username,
                    reason=str(e),
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            self._audit_logger.log_login_succeeded(
                username=username,
                correlation_id=correlation_id,
            )
        return ExpenseFlow(
            user,
            audit_logger=self._audit_logger,
            today_provider=self._today,
        )

    def logout(self, flow: "ExpenseFlow") -> None:
        if self._audit_logger:
            self._audit_logger.log_logout(flow.user.username)

    def cancel(self, operation: str, correlation_id: Optional[UUID] = None) -> None:
        if self._audit_logger:
            self._audit_logger.log_operation_cancelled(
                operation=operation,
                correlation_id=correlation_id,
            )


class ExpenseFlow:
    """
    Orchestrates expense operations for one logged-in user.

    Budget rule: an amount is accepted only if it fits the remaining budget.
    For edits the record's current amount is added back first unless the
    edit_check_includes_current_amount setting is off.
    """

    def __init__(
        self,
        user: User,
        store: Optional[ExpenseStorageInterface] = None,
        ledger: Optional[BudgetLedger] = None,
        executor: Optional[ExpenseQueryExecutor] = None,
        audit_logger: Optional[AuditLogger] = None,
        today_provider: Callable[[], date] = date.today,
    ):
        self._user = user
        self._store = store or InMemoryExpenseStore(user)
        self._ledger = ledger or BudgetLedger(user)
        self._executor = executor or ExpenseQueryExecutor(today_provider=today_provider)
        self._audit_logger = audit_logger
        self._today = today_provider

    @property
    def user(self) -> User:
        return self._user

    @property
    def store(self) -> ExpenseStorageInterface:
        return self._store

    @property
    def ledger(self) -> BudgetLedger:
        return self._ledger

    def has_expenses(self) -> bool:
        return self._store.count() > 0

    def remaining_budget(self) -> Decimal:
        return self._ledger.remaining()

    def _checked(self, operation: str, check: Callable, *args, correlation_id=None):
        try:
            return check(*args)
        except ExpenseTrackerError as e:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(
                    operation=operation,
                    error=e,
                    username=self._user.username,
                    correlation_id=correlation_id,
                )
            raise

    # -------------------------------------------------------------------------
    # Add
    # -------------------------------------------------------------------------

    def check_new_amount(self, raw: str, correlation_id: Optional[UUID] = None) -> Decimal:
        return self._checked("add", self._check_amount, raw, None, correlation_id=correlation_id)

    def check_new_category(self, raw: str, correlation_id: Optional[UUID] = None) -> str:
        return self._checked("add", self._check_new_category, raw, correlation_id=correlation_id)

    def check_new_date(self, raw: str, correlation_id: Optional[UUID] = None) -> str:
        return self._checked("add", self._check_date, raw, correlation_id=correlation_id)

    def _check_amount(self, raw: str, replacing: Optional[Expense]) -> Decimal:
        amount = InputValidator.parse_amount(raw.strip())
        self._ledger.ensure_affordable(amount, replacing=replacing)
        return amount

    @staticmethod
    def _check_new_category(raw: str) -> str:
        category = raw.strip()
        InputValidator.validate_not_empty(category, field="category")
        return category

    def _check_date(self, raw: str) -> str:
        return InputValidator.validate_expense_date(raw.strip(), today=self._today())

    def commit_expense(
        self,
        amount: Decimal,
        category: str,
        expense_date: str,
        correlation_id: Optional[UUID] = None,
    ) -> Expense:
        """Store an expense whose fields were already checked."""
        expense = self._store.add_expense(category, amount, expense_date)
        if self._audit_logger:
            self._audit_logger.log_expense_added(
                username=self._user.username,
                expense=expense,
                remaining_budget=self._ledger.remaining(),
                correlation_id=correlation_id,
            )
        return expense

    def add_expense(
        self,
        amount_raw: str,
        category_raw: str,
        date_raw: str,
        correlation_id: Optional[UUID] = None,
    ) -> Expense:
        """
        Validate all three fields, then store.

        Nothing is stored if any field is rejected.
        """
        amount = self.check_new_amount(amount_raw, correlation_id)
        category = self.check_new_category(category_raw, correlation_id)
        expense_date = self.check_new_date(date_raw, correlation_id)
        return self.commit_expense(amount, category, expense_date, correlation_id)

    # -------------------------------------------------------------------------
    # Modify
    # -------------------------------------------------------------------------

    def find_expense(self, expense_id: int) -> Expense:
        return self._store.get_expense_by_id(expense_id)

    def check_amount_change(
        self,
        expense: Expense,
        raw: str,
        correlation_id: Optional[UUID] = None,
    ) -> Decimal:
        return self._checked(
            "modify", self._check_amount, raw, expense, correlation_id=correlation_id
        )

    def check_category_change(self, raw: str, correlation_id: Optional[UUID] = None) -> str:
        return self._checked(
            "modify",
            InputValidator.validate_category_name,
            raw.strip(),
            correlation_id=correlation_id,
        )

    def check_date_change(self, raw: str, correlation_id: Optional[UUID] = None) -> str:
        return self._checked("modify", self._check_date, raw, correlation_id=correlation_id)

    def commit_changes(
        self,
        expense_id: int,
        amount: Optional[Decimal] = None,
        category: Optional[str] = None,
        expense_date: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> Expense:
        """Apply already-checked changes; None keeps the current value."""
        before = self._store.get_expense_by_id(expense_id).to_dict()
        expense = self._store.update_expense(
            expense_id,
            amount=amount,
            category=category,
            expense_date=expense_date,
        )
        if self._audit_logger:
            self._audit_logger.log_expense_updated(
                username=self._user.username,
                before=before,
                after=expense,
                correlation_id=correlation_id,
            )
        return expense

    def modify_expense(
        self,
        expense_id: int,
        amount_raw: str = "",
        category_raw: str = "",
        date_raw: str = "",
        correlation_id: Optional[UUID] = None,
    ) -> Expense:
        """
        Edit an expense in place.

        Blank fields keep their previous value. The id never changes.
        """
        expense = self.find_expense(expense_id)

        amount = None
        if amount_raw.strip():
            amount = self.check_amount_change(expense, amount_raw, correlation_id)
        category = None
        if category_raw.strip():
            category = self.check_category_change(category_raw, correlation_id)
        expense_date = None
        if date_raw.strip():
            expense_date = self.check_date_change(date_raw, correlation_id)

        return self.commit_changes(
            expense_id,
            amount=amount,
            category=category,
            expense_date=expense_date,
            correlation_id=correlation_id,
        )

    # -------------------------------------------------------------------------
    # Remove
    # -------------------------------------------------------------------------

    def remove_expense(
        self,
        expense_id: int,
        correlation_id: Optional[UUID] = None,
    ) -> Expense:
        """Delete an expense. Its id is never handed out again."""
        expense = self._store.delete_expense(expense_id)
        if self._audit_logger:
            self._audit_logger.log_expense_deleted(
                username=self._user.username,
                expense=expense,
                correlation_id=correlation_id,
            )
        return expense

    # -------------------------------------------------------------------------
    # View and report
    # -------------------------------------------------------------------------

    def categories(self) -> list[str]:
        return self._executor.available_categories(self._store.list_expenses())

    def view(
        self,
        query: ExpenseQuery,
        correlation_id: Optional[UUID] = None,
    ) -> FilterResult:
        result = self._executor.execute(self._store.list_expenses(), query)
        if self._audit_logger:
            self._audit_logger.log_expenses_viewed(
                username=self._user.username,
                filter_kind=query.kind.value,
                result_count=result.result_count,
                correlation_id=correlation_id,
            )
        return result

    def report(
        self,
        query: ExpenseQuery,
        correlation_id: Optional[UUID] = None,
    ) -> ExpenseReport:
        """Filter result plus the remaining budget at report time."""
        result = self._executor.execute(self._store.list_expenses(), query)
        report = ExpenseReport(
            result=result,
            remaining_budget=self._ledger.remaining(),
        )
        if self._audit_logger:
            self._audit_logger.log_report_generated(
                username=self._user.username,
                filter_kind=query.kind.value,
                total=report.total_matched,
                remaining_budget=report.remaining_budget,
                correlation_id=correlation_id,
            )
        return report

    # -------------------------------------------------------------------------
    # Budget
    # -------------------------------------------------------------------------

    def set_budget(
        self,
        new_budget: Union[str, Decimal],
        correlation_id: Optional[UUID] = None,
    ) -> Decimal:
        """
        Replace the budget ceiling.

        Accepts typed text or a Decimal. Negative values raise
        NegativeBudgetError and leave the budget unchanged.
        """
        if isinstance(new_budget, str):
            new_budget = self._checked(
                "budget",
                InputValidator.parse_budget,
                new_budget.strip(),
                correlation_id=correlation_id,
            )

        try:
            old_budget = self._ledger.set_budget(new_budget)
        except NegativeBudgetError as e:
            if self._audit_logger:
                self._audit_logger.log_budget_update_rejected(
                    username=self._user.username,
                    attempted=str(new_budget),
                    reason=e.message,
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            self._audit_logger.log_budget_updated(
                username=self._user.username,
                old_budget=old_budget,
                new_budget=new_budget,
                correlation_id=correlation_id,
            )
        return new_budget

    def cancel(self, operation: str, correlation_id: Optional[UUID] = None) -> None:
        if self._audit_logger:
            self._audit_logger.log_operation_cancelled(
                operation=operation,
                username=self._user.username,
                correlation_id=correlation_id,
            )


def create_app_components(
    today_provider: Callable[[], date] = date.today,
) -> tuple[AccountFlow, AuditLogger]:
    """
    Factory function to create all application components.

    One registry and one audit trail exist per process; both are created
    here and handed to the flows.

    Returns:
        (account_flow, audit_logger)
    """
    settings = get_settings().app
    audit_logger = AuditLogger(InMemoryAuditStorage(settings.audit_history_limit))
    registry = InMemoryAccountRegistry()

    account_flow = AccountFlow(
        registry=registry,
        validator=InputValidator(),
        audit_logger=audit_logger,
        today_provider=today_provider,
    )

    return account_flow, audit_logger
