"""
Abstract Storage Interface

DESIGN DECISION: We define abstract interfaces for storage operations.
This allows us to:
1. Keep the session flows independent of where data lives
2. Use the in-memory implementations for both the app and the tests
3. Keep business logic decoupled from storage implementation

The interfaces are intentionally small - just the operations the menus need.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional
from uuid import UUID

from expense_tracker.models.audit import AuditEvent
from expense_tracker.models.expense import Expense, User


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for one user's expense collection.

    Expenses are kept in insertion order. Ids are handed out by the store
    and are never reused.
    """

    @abstractmethod
    def add_expense(self, category: str, amount: Decimal, expense_date: str) -> Expense:
        """
        Append a new expense.

        Args:
            category: Already validated category
            amount: Already validated amount
            expense_date: Already validated YYYY-MM-DD date

        Returns:
            The stored expense with its new id
        """
        pass

    @abstractmethod
    def get_expense_by_id(self, expense_id: int) -> Expense:
        """
        Retrieve an expense by its id.

        Raises:
            RecordNotFoundError: If no expense has this id
        """
        pass

    @abstractmethod
    def update_expense(
        self,
        expense_id: int,
        amount: Optional[Decimal] = None,
        category: Optional[str] = None,
        expense_date: Optional[str] = None,
    ) -> Expense:
        """
        Update an expense in place. None leaves a field unchanged.

        Raises:
            RecordNotFoundError: If no expense has this id
        """
        pass

    @abstractmethod
    def delete_expense(self, expense_id: int) -> Expense:
        """
        Remove an expense and return it.

        Raises:
            RecordNotFoundError: If no expense has this id
        """
        pass

    @abstractmethod
    def list_expenses(self) -> list[Expense]:
        """All expenses in insertion order."""
        pass

    @abstractmethod
    def count(self) -> int:
        pass


class AccountRegistryInterface(ABC):
    """
    Abstract interface for the set of registered accounts.

    Usernames are unique across the registry at all times.
    """

    @abstractmethod
    def register(self, username: str, password: str, budget: Decimal) -> bool:
        """
        Create an account.

        Returns:
            False (and changes nothing) if the username is taken
        """
        pass

    @abstractmethod
    def login(self, username: str, password: str) -> User:
        """
        Look up an account by exact username and password.

        Raises:
            UnknownUserError: No account has this username
            WrongPasswordError: The password does not match
        """
        pass

    @abstractmethod
    def get_user(self, username: str) -> Optional[User]:
        pass

    @abstractmethod
    def list_usernames(self) -> list[str]:
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a correlation ID (e.g., one add-expense session).

        Returns:
            List of related events in chronological order
        """
        pass

    @abstractmethod
    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        """
        Get all events for a specific entity.

        Returns:
            List of events in chronological order
        """
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class AuthenticationError(StorageError):
    """Login did not match a registered account."""
    pass


class UnknownUserError(AuthenticationError):
    """No account with this username."""

    def __init__(self, username: str):
        self.username = username
        super().__init__("User doesn't exist.")


class WrongPasswordError(AuthenticationError):
    """Username exists but the password does not match."""

    def __init__(self, username: str):
        self.username = username
        super().__init__("Invalid password!")
