"""
Audit Logger

DESIGN DECISION: Every significant action in a session is logged.
This provides:
1. Traceability of changes to expenses and budget
2. Debugging capability for rejected input
3. A history the session can inspect

The audit logger:
- Always logs locally through structlog
- Appends to audit storage when one is configured
- Never crashes the app if the storage write fails
- Supports correlation IDs to trace related events
"""

from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

import structlog

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder
from expense_tracker.models.expense import Expense
from expense_tracker.services.storage import AuditStorageInterface
from expense_tracker.validation.errors import ExpenseTrackerError


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage (for in-session history)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for the audit trail.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("expense_tracker.audit")

    @property
    def storage(self) -> Optional[AuditStorageInterface]:
        return self._storage

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value == "error":
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_user_registered(
        self,
        username: str,
        budget: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.user_registered(
            username=username,
            budget=budget,
            correlation_id=correlation_id,
        ))

    def log_registration_rejected(
        self,
        username: str,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.registration_rejected(
            username=username,
            reason=reason,
            correlation_id=correlation_id,
        ))

    def log_login_succeeded(
        self,
        username: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.login_succeeded(
            username=username,
            correlation_id=correlation_id,
        ))

    def log_login_failed(
        self,
        username: str,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.login_failed(
            username=username,
            reason=reason,
            correlation_id=correlation_id,
        ))

    def log_logout(self, username: str) -> None:
        self.log(AuditEventBuilder.logout(username))

    def log_expense_added(
        self,
        username: str,
        expense: Expense,
        remaining_budget: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a committed add."""
        self.log(AuditEventBuilder.expense_added(
            username=username,
            expense=expense.to_dict(),
            remaining_budget=remaining_budget,
            correlation_id=correlation_id,
        ))

    def log_expense_updated(
        self,
        username: str,
        before: dict,
        after: Expense,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a committed modification; before is the pre-edit to_dict()."""
        self.log(AuditEventBuilder.expense_updated(
            username=username,
            before=before,
            after=after.to_dict(),
            correlation_id=correlation_id,
        ))

    def log_expense_deleted(
        self,
        username: str,
        expense: Expense,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.expense_deleted(
            username=username,
            expense=expense.to_dict(),
            correlation_id=correlation_id,
        ))

    def log_budget_updated(
        self,
        username: str,
        old_budget: Decimal,
        new_budget: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.budget_updated(
            username=username,
            old_budget=old_budget,
            new_budget=new_budget,
            correlation_id=correlation_id,
        ))

    def log_budget_update_rejected(
        self,
        username: str,
        attempted: str,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.budget_update_rejected(
            username=username,
            attempted=attempted,
            reason=reason,
            correlation_id=correlation_id,
        ))

    def log_validation_failed(
        self,
        operation: str,
        error: ExpenseTrackerError,
        username: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log one rejected input."""
        self.log(AuditEventBuilder.validation_failed(
            operation=operation,
            issues=[error.to_issue().model_dump()],
            username=username,
            correlation_id=correlation_id,
        ))

    def log_operation_cancelled(
        self,
        operation: str,
        username: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.operation_cancelled(
            operation=operation,
            username=username,
            correlation_id=correlation_id,
        ))

    def log_expenses_viewed(
        self,
        username: str,
        filter_kind: str,
        result_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.expenses_viewed(
            username=username,
            filter_kind=filter_kind,
            result_count=result_count,
            correlation_id=correlation_id,
        ))

    def log_report_generated(
        self,
        username: str,
        filter_kind: str,
        total: Decimal,
        remaining_budget: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(AuditEventBuilder.report_generated(
            username=username,
            filter_kind=filter_kind,
            total=total,
            remaining_budget=remaining_budget,
            correlation_id=correlation_id,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new operation session (e.g., add expense).
    Pass it through all subsequent operations.
    """
    return uuid4()
