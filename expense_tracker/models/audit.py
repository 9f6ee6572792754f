"""
Audit Models for Expense Tracker

Every significant action in a session is logged for audit purposes.
This provides:
1. Traceability of every change to expenses and budget
2. Debugging information when input is rejected
3. Ability to reconstruct what happened during a run

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Every operation session in the menu has its own event types.
    """
    # Accounts
    USER_REGISTERED = "user_registered"
    REGISTRATION_REJECTED = "registration_rejected"
    LOGIN_SUCCEEDED = "login_succeeded"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"

    # Expenses
    EXPENSE_ADDED = "expense_added"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_DELETED = "expense_deleted"

    # Budget
    BUDGET_UPDATED = "budget_updated"
    BUDGET_UPDATE_REJECTED = "budget_update_rejected"

    # Input handling
    VALIDATION_FAILED = "validation_failed"
    OPERATION_CANCELLED = "operation_cancelled"

    # Read operations
    EXPENSES_VIEWED = "expenses_viewed"
    REPORT_GENERATED = "report_generated"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the event occurred (local time)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'user', 'budget')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )
    username: Optional[str] = Field(
        default=None,
        description="Account the event happened under"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., all events in one add-expense session)"
    )

    # Event details
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )

    # Additional data (event-specific)
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    # User action tracking
    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "username": self.username,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(username, expense, correlation_id)
        event = AuditEventBuilder.login_failed(username, reason, correlation_id)
    """

    @staticmethod
    def user_registered(
        username: str,
        budget: Decimal,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_REGISTERED,
            entity_type="user",
            entity_id=username,
            username=username,
            correlation_id=correlation_id,
            description=f"Account registered: {username}",
            details={
                "initial_budget": str(budget),
            },
            is_user_action=True,
        )

    @staticmethod
    def registration_rejected(
        username: str,
        reason: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REGISTRATION_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="user",
            entity_id=username,
            correlation_id=correlation_id,
            description=f"Registration rejected for {username}",
            error_message=reason,
        )

    @staticmethod
    def login_succeeded(
        username: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_SUCCEEDED,
            entity_type="user",
            entity_id=username,
            username=username,
            correlation_id=correlation_id,
            description=f"User logged in: {username}",
            is_user_action=True,
        )

    @staticmethod
    def login_failed(
        username: str,
        reason: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGIN_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="user",
            entity_id=username,
            correlation_id=correlation_id,
            description=f"Login failed for {username}",
            error_message=reason,
            is_user_action=True,
        )

    @staticmethod
    def logout(username: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOGOUT,
            entity_type="user",
            entity_id=username,
            username=username,
            description=f"User logged out: {username}",
            is_user_action=True,
        )

    @staticmethod
    def expense_added(
        username: str,
        expense: dict,
        remaining_budget: Decimal,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=str(expense["id"]),
            username=username,
            correlation_id=correlation_id,
            description=f"Expense added: {expense['category']} - {expense['amount']}",
            details={
                "expense": expense,
                "remaining_budget": str(remaining_budget),
            },
            is_user_action=True,
        )

    @staticmethod
    def expense_updated(
        username: str,
        before: dict,
        after: dict,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        changed = sorted(key for key in after if before.get(key) != after[key])
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATED,
            entity_type="expense",
            entity_id=str(after["id"]),
            username=username,
            correlation_id=correlation_id,
            description=f"Expense {after['id']} updated ({', '.join(changed) or 'no changes'})",
            details={
                "before": before,
                "after": after,
                "changed_fields": changed,
            },
            is_user_action=True,
        )

    @staticmethod
    def expense_deleted(
        username: str,
        expense: dict,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=str(expense["id"]),
            username=username,
            correlation_id=correlation_id,
            description=f"Expense {expense['id']} deleted",
            details={
                "expense": expense,
            },
            is_user_action=True,
        )

    @staticmethod
    def budget_updated(
        username: str,
        old_budget: Decimal,
        new_budget: Decimal,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_UPDATED,
            entity_type="budget",
            entity_id=username,
            username=username,
            correlation_id=correlation_id,
            description=f"Budget changed from {old_budget} to {new_budget}",
            details={
                "old_budget": str(old_budget),
                "new_budget": str(new_budget),
            },
            is_user_action=True,
        )

    @staticmethod
    def budget_update_rejected(
        username: str,
        attempted: str,
        reason: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_UPDATE_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="budget",
            entity_id=username,
            username=username,
            correlation_id=correlation_id,
            description="Budget change rejected",
            details={
                "attempted": attempted,
            },
            error_message=reason,
            is_user_action=True,
        )

    @staticmethod
    def validation_failed(
        operation: str,
        issues: list[dict],
        username: Optional[str] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="input",
            username=username,
            correlation_id=correlation_id,
            description=f"{operation.capitalize()} input rejected with {len(issues)} issues",
            details={
                "operation": operation,
                "issues": issues,
            },
        )

    @staticmethod
    def operation_cancelled(
        operation: str,
        username: Optional[str] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.OPERATION_CANCELLED,
            username=username,
            correlation_id=correlation_id,
            description=f"Operation cancelled: {operation}",
            details={
                "operation": operation,
            },
            is_user_action=True,
        )

    @staticmethod
    def expenses_viewed(
        username: str,
        filter_kind: str,
        result_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_VIEWED,
            entity_type="query",
            username=username,
            correlation_id=correlation_id,
            description=f"Expenses viewed: {filter_kind} returned {result_count} results",
            details={
                "filter_kind": filter_kind,
                "result_count": result_count,
            },
        )

    @staticmethod
    def report_generated(
        username: str,
        filter_kind: str,
        total: Decimal,
        remaining_budget: Decimal,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_GENERATED,
            entity_type="query",
            username=username,
            correlation_id=correlation_id,
            description=f"Report generated: {filter_kind} total {total}",
            details={
                "filter_kind": filter_kind,
                "total": str(total),
                "remaining_budget": str(remaining_budget),
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
