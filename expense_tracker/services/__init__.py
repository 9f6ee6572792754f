"""Services package."""

from expense_tracker.services.storage import (
    AccountRegistryInterface,
    AuditStorageInterface,
    AuthenticationError,
    ExpenseStorageInterface,
    InMemoryAccountRegistry,
    InMemoryAuditStorage,
    InMemoryExpenseStore,
    StorageError,
    UnknownUserError,
    WrongPasswordError,
)
from expense_tracker.services.terminal import (
    RichTerminal,
    TerminalInterface,
    format_amount,
)

__all__ = [
    # Storage services
    "AccountRegistryInterface",
    "AuditStorageInterface",
    "AuthenticationError",
    "ExpenseStorageInterface",
    "InMemoryAccountRegistry",
    "InMemoryAuditStorage",
    "InMemoryExpenseStore",
    "StorageError",
    "UnknownUserError",
    "WrongPasswordError",
    # Terminal services
    "RichTerminal",
    "TerminalInterface",
    "format_amount",
]
