"""
In-Memory Storage Implementation

All tracker data lives for the lifetime of the process and is lost at exit.
These classes implement the storage interfaces over plain Python lists and
dicts; they are used by the app and by the tests alike.
"""

from collections import deque
from decimal import Decimal
from typing import Optional
from uuid import UUID

import structlog

from expense_tracker.config import get_settings
from expense_tracker.models.audit import AuditEvent
from expense_tracker.models.expense import Expense, User
from expense_tracker.services.storage.interface import (
    AccountRegistryInterface,
    AuditStorageInterface,
    ExpenseStorageInterface,
    UnknownUserError,
    WrongPasswordError,
)
from expense_tracker.validation.errors import RecordNotFoundError


logger = structlog.get_logger(__name__)


class InMemoryExpenseStore(ExpenseStorageInterface):
    """
    Expense collection of one user.

    Reads and writes go straight to user.expenses, so the budget ledger
    built on the same user always sees the current state.
    """

    def __init__(self, user: User):
        self._user = user

    @property
    def user(self) -> User:
        return self._user

    def add_expense(self, category: str, amount: Decimal, expense_date: str) -> Expense:
        expense = Expense(
            id=self._user.next_expense_id,
            category=category,
            amount=amount,
            expense_date=expense_date,
        )
        self._user.expenses.append(expense)
        self._user.next_expense_id += 1
        return expense

    def get_expense_by_id(self, expense_id: int) -> Expense:
        for expense in self._user.expenses:
            if expense.id == expense_id:
                return expense
        raise RecordNotFoundError(field="id")

    def update_expense(
        self,
        expense_id: int,
        amount: Optional[Decimal] = None,
        category: Optional[str] = None,
        expense_date: Optional[str] = None,
    ) -> Expense:
        expense = self.get_expense_by_id(expense_id)
        if amount is not None:
            expense.amount = amount
        if category is not None:
            expense.category = category
        if expense_date is not None:
            expense.expense_date = expense_date
        return expense

    def delete_expense(self, expense_id: int) -> Expense:
        expense = self.get_expense_by_id(expense_id)
        self._user.expenses.remove(expense)
        return expense

    def list_expenses(self) -> list[Expense]:
        return list(self._user.expenses)

    def count(self) -> int:
        return len(self._user.expenses)


class InMemoryAccountRegistry(AccountRegistryInterface):
    """
    All registered accounts for this process.

    Created once at startup and passed to whoever needs it.
    """

    def __init__(self):
        self._users: dict[str, User] = {}

    def register(self, username: str, password: str, budget: Decimal) -> bool:
        if username in self._users:
            logger.info("registration_duplicate", username=username)
            return False
        self._users[username] = User(
            username=username,
            password=password,
            budget=budget,
        )
        return True

    def login(self, username: str, password: str) -> User:
        user = self._users.get(username)
        if user is None:
            raise UnknownUserError(username)
        if not user.verify_password(password):
            raise WrongPasswordError(username)
        return user

    def get_user(self, username: str) -> Optional[User]:
        return self._users.get(username)

    def list_usernames(self) -> list[str]:
        return list(self._users)


class InMemoryAuditStorage(AuditStorageInterface):
    """
    Bounded, append-only audit log.

    The oldest events drop off once max_events is reached.
    """

    def __init__(self, max_events: Optional[int] = None):
        if max_events is None:
            max_events = get_settings().app.audit_history_limit
        self._events: deque[AuditEvent] = deque(maxlen=max_events)

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_events_by_correlation_id(self, correlation_id: UUID) -> list[AuditEvent]:
        return [event for event in self._events if event.correlation_id == correlation_id]

    def get_events_by_entity(self, entity_type: str, entity_id: str) -> list[AuditEvent]:
        return [
            event for event in self._events
            if event.entity_type == entity_type and event.entity_id == entity_id
        ]

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
