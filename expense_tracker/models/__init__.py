"""
Data Models Package

This package contains all Pydantic models used in the Expense Tracker.
All data flowing through the tracker must conform to these schemas.
"""

from expense_tracker.models.expense import (
    DATE_FORMAT,
    DATE_PATTERN,
    Expense,
    ExpenseQuery,
    ExpenseReport,
    FilterKind,
    FilterResult,
    User,
    ValidationIssue,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "DATE_FORMAT",
    "DATE_PATTERN",
    "Expense",
    "ExpenseQuery",
    "ExpenseReport",
    "FilterKind",
    "FilterResult",
    "User",
    "ValidationIssue",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
