"""Tests for the audit logger."""

import pytest
from decimal import Decimal

from expense_tracker.audit import AuditLogger, create_correlation_id
from expense_tracker.models.audit import AuditEventBuilder, AuditEventType, AuditSeverity
from expense_tracker.models.expense import Expense
from expense_tracker.services.storage import InMemoryAuditStorage
from expense_tracker.validation import InsufficientBudgetError


class FailingAuditStorage(InMemoryAuditStorage):
    def append_event(self, event):
        raise RuntimeError("disk full")


class TestAuditLogger:
    """Tests for AuditLogger."""

    def test_events_reach_storage(self):
        storage = InMemoryAuditStorage(max_events=50)
        audit_logger = AuditLogger(storage)
        correlation_id = create_correlation_id()
        expense = Expense(id=1, category="Food", amount=Decimal("5"), expense_date="2024-06-01")

        audit_logger.log_expense_added("alice", expense, Decimal("95"), correlation_id)

        events = storage.get_events_by_correlation_id(correlation_id)
        assert len(events) == 1
        assert events[0].event_type == AuditEventType.EXPENSE_ADDED
        assert events[0].details["expense"]["amount"] == "5"

    def test_without_storage_logs_locally(self):
        """Test that no storage means local logging only."""
        audit_logger = AuditLogger()
        assert audit_logger.storage is None
        assert audit_logger.log(AuditEventBuilder.logout("alice")) is True

    def test_storage_failure_does_not_raise(self):
        """Test that a broken audit store never crashes the app."""
        audit_logger = AuditLogger(FailingAuditStorage(max_events=50))
        assert audit_logger.log(AuditEventBuilder.logout("alice")) is False
        audit_logger.log_error("RuntimeError", "boom")

    def test_validation_failure_records_issue(self):
        storage = InMemoryAuditStorage(max_events=50)
        audit_logger = AuditLogger(storage)

        audit_logger.log_validation_failed(
            operation="add",
            error=InsufficientBudgetError(field="amount"),
            username="alice",
        )

        event = storage.get_recent_events()[0]
        assert event.severity == AuditSeverity.WARNING
        assert event.details["issues"][0]["issue_type"] == "insufficient_budget"
        assert event.details["operation"] == "add"

    def test_correlation_ids_are_unique(self):
        assert create_correlation_id() != create_correlation_id()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
