"""
Storage Services Package

Provides abstract interfaces and the in-memory implementations the tracker
runs on. Nothing is persisted between runs.
"""

from expense_tracker.services.storage.interface import (
    AccountRegistryInterface,
    AuditStorageInterface,
    AuthenticationError,
    ExpenseStorageInterface,
    StorageError,
    UnknownUserError,
    WrongPasswordError,
)
from expense_tracker.services.storage.memory import (
    InMemoryAccountRegistry,
    InMemoryAuditStorage,
    InMemoryExpenseStore,
)

__all__ = [
    # Interfaces
    "AccountRegistryInterface",
    "AuditStorageInterface",
    "ExpenseStorageInterface",
    # Exceptions
    "AuthenticationError",
    "StorageError",
    "UnknownUserError",
    "WrongPasswordError",
    # In-memory implementation
    "InMemoryAccountRegistry",
    "InMemoryAuditStorage",
    "InMemoryExpenseStore",
]
