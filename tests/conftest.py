"""
Shared fixtures for Expense Tracker tests.

No test touches the real terminal: console screens run against a
ScriptedTerminal fed with the lines a user would type.
"""

from collections import deque
from datetime import date
from decimal import Decimal

import pytest

from expense_tracker.audit import AuditLogger
from expense_tracker.budget import BudgetLedger
from expense_tracker.config import get_settings
from expense_tracker.models.expense import Expense, FilterResult, User
from expense_tracker.orchestrator import AccountFlow, ExpenseFlow
from expense_tracker.queries import ExpenseQueryExecutor
from expense_tracker.services.storage import (
    InMemoryAccountRegistry,
    InMemoryAuditStorage,
    InMemoryExpenseStore,
)
from expense_tracker.services.terminal import TerminalInterface
from expense_tracker.validation import InputValidator


TODAY = date(2024, 6, 15)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Reload settings per test so monkeypatched env vars take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class ScriptedTerminal(TerminalInterface):
    """Terminal that replays typed lines and records everything shown."""

    def __init__(self, lines=()):
        self.lines = deque(lines)
        self.prompts: list[str] = []
        self.headers: list[str] = []
        self.messages: list[str] = []
        self.errors: list[str] = []
        self.results: list[FilterResult] = []
        self.shown_expenses: list[Expense] = []

    def _next_line(self) -> str:
        if not self.lines:
            raise EOFError("script exhausted")
        return self.lines.popleft()

    def prompt(self, label: str) -> str:
        self.prompts.append(label)
        return self._next_line()

    def confirm(self, question: str) -> bool:
        while True:
            self.prompts.append(question)
            answer = self._next_line().strip().lower()
            if answer in ("y", "n"):
                return answer == "y"
            self.errors.append("Invalid Answer!")

    def show_header(self, title: str) -> None:
        self.headers.append(title)

    def show_message(self, text: str) -> None:
        self.messages.append(text)

    def show_error(self, text: str) -> None:
        self.errors.append(text)

    def show_expenses(self, result: FilterResult) -> None:
        self.results.append(result)

    def show_expense(self, expense: Expense, title: str = "Expense Details") -> None:
        self.shown_expenses.append(expense)

    def show_categories(self, categories: list[str]) -> None:
        self.messages.append(", ".join(categories))

    def pause(self) -> None:
        pass

    @property
    def output(self) -> str:
        return "\n".join(self.messages + self.errors)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def today_provider():
    return lambda: TODAY


@pytest.fixture
def user() -> User:
    return User(username="alice", password="secret", budget=Decimal("100"))


@pytest.fixture
def audit_storage() -> InMemoryAuditStorage:
    return InMemoryAuditStorage(max_events=500)


@pytest.fixture
def audit_logger(audit_storage) -> AuditLogger:
    return AuditLogger(audit_storage)


@pytest.fixture
def expense_flow(user, audit_logger, today_provider) -> ExpenseFlow:
    return ExpenseFlow(
        user,
        store=InMemoryExpenseStore(user),
        ledger=BudgetLedger(user, edit_check_includes_current_amount=True),
        executor=ExpenseQueryExecutor(today_provider=today_provider, weekly_window_days=7),
        audit_logger=audit_logger,
        today_provider=today_provider,
    )


@pytest.fixture
def registry() -> InMemoryAccountRegistry:
    return InMemoryAccountRegistry()


@pytest.fixture
def account_flow(registry, audit_logger, today_provider) -> AccountFlow:
    return AccountFlow(
        registry=registry,
        validator=InputValidator(),
        audit_logger=audit_logger,
        today_provider=today_provider,
    )


@pytest.fixture
def script():
    """Build a ScriptedTerminal from the lines a user would type."""
    return ScriptedTerminal
