"""
Tests for Expense Tracker

Test strategy:
1. Unit tests for individual components (models, validators, filters, ledger)
2. Flow tests for the orchestrator with in-memory storage
3. Console tests driven by a scripted terminal (no real stdin)
"""

import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4

from pydantic import ValidationError

from expense_tracker.models.expense import (
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
from expense_tracker.validation import FutureDateError


class TestExpenseModels:
    """Tests for expense-related Pydantic models."""

    def test_expense_creation(self):
        """Test Expense model creation."""
        expense = Expense(
            id=1,
            category="Food",
            amount=Decimal("12.50"),
            expense_date="2024-06-01",
        )
        assert expense.category == "Food"
        assert expense.amount == Decimal("12.50")
        assert expense.calendar_date == date(2024, 6, 1)

    def test_expense_strips_whitespace(self):
        """Test that whitespace is stripped from the category."""
        expense = Expense(id=1, category="  Food  ", amount=Decimal("1"), expense_date="2024-06-01")
        assert expense.category == "Food"

    def test_expense_rejects_negative_amount(self):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValidationError):
            Expense(id=1, category="Food", amount=Decimal("-1"), expense_date="2024-06-01")

    def test_expense_rejects_badly_formatted_date(self):
        """Test that the date must look like YYYY-MM-DD."""
        with pytest.raises(ValidationError):
            Expense(id=1, category="Food", amount=Decimal("1"), expense_date="06/01/2024")

    def test_impossible_date_has_no_calendar_date(self):
        """Test that a well-formed but impossible date parses to None."""
        expense = Expense(id=1, category="Food", amount=Decimal("1"), expense_date="2024-13-45")
        assert expense.calendar_date is None

    def test_assignment_is_validated(self):
        """Test that in-place edits go through the field constraints."""
        expense = Expense(id=1, category="Food", amount=Decimal("1"), expense_date="2024-06-01")
        with pytest.raises(ValidationError):
            expense.amount = Decimal("-5")
        assert expense.amount == Decimal("1")

    def test_expense_to_dict(self):
        """Test conversion to a plain dictionary."""
        expense = Expense(id=3, category="Rent", amount=Decimal("900"), expense_date="2024-06-01")
        assert expense.to_dict() == {
            "id": 3,
            "category": "Rent",
            "amount": "900",
            "expense_date": "2024-06-01",
        }


class TestUserModel:
    """Tests for the User model."""

    def test_user_defaults(self):
        """Test a fresh user has no expenses and starts ids at 1."""
        user = User(username="alice", password="secret", budget=Decimal("100"))
        assert user.expenses == []
        assert user.next_expense_id == 1

    def test_user_rejects_non_alphanumeric_username(self):
        """Test that usernames must be ASCII letters and digits."""
        with pytest.raises(ValidationError):
            User(username="al ice", password="secret", budget=Decimal("100"))

    def test_verify_password_is_case_sensitive(self):
        """Test password comparison."""
        user = User(username="alice", password="Secret", budget=Decimal("100"))
        assert user.verify_password("Secret") is True
        assert user.verify_password("secret") is False


class TestQueryModels:
    """Tests for ExpenseQuery, FilterResult and ExpenseReport."""

    def test_monthly_query_requires_month(self):
        """Test that monthly queries need a month."""
        with pytest.raises(ValidationError):
            ExpenseQuery(kind=FilterKind.MONTHLY)

    def test_month_out_of_range_rejected(self):
        """Test the month bounds."""
        with pytest.raises(ValidationError):
            ExpenseQuery(kind=FilterKind.MONTHLY, month=13)

    def test_category_query_requires_category(self):
        """Test that category queries need a name."""
        with pytest.raises(ValidationError):
            ExpenseQuery(kind=FilterKind.CATEGORY)

    def test_all_query_needs_no_parameters(self):
        query = ExpenseQuery(kind=FilterKind.ALL)
        assert query.month is None
        assert query.category is None

    def test_report_total_matched(self):
        """Test that the report exposes the filter total."""
        result = FilterResult(
            kind=FilterKind.ALL,
            expenses=[
                Expense(id=1, category="Food", amount=Decimal("5"), expense_date="2024-06-01"),
                Expense(id=2, category="Rent", amount=Decimal("7"), expense_date="2024-06-02"),
            ],
            total=Decimal("12"),
            found=True,
            result_count=2,
            description="All expenses",
        )
        report = ExpenseReport(result=result, remaining_budget=Decimal("88"))
        assert report.total_matched == Decimal("12")
        assert result.ids == [1, 2]


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            description="Test expense added",
        )
        assert event.event_type == AuditEventType.EXPENSE_ADDED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.BUDGET_UPDATED,
            description="Budget changed",
            details={"old_budget": "100", "new_budget": "200"},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "budget_updated"
        assert log_dict["details"]["new_budget"] == "200"

    def test_audit_event_builder_expense_added(self):
        """Test AuditEventBuilder.expense_added."""
        correlation_id = uuid4()
        expense = Expense(id=4, category="Food", amount=Decimal("5"), expense_date="2024-06-01")

        event = AuditEventBuilder.expense_added(
            username="alice",
            expense=expense.to_dict(),
            remaining_budget=Decimal("95"),
            correlation_id=correlation_id,
        )

        assert event.event_type == AuditEventType.EXPENSE_ADDED
        assert event.entity_id == "4"
        assert event.correlation_id == correlation_id
        assert event.details["remaining_budget"] == "95"
        assert event.is_user_action is True

    def test_audit_event_builder_expense_updated_lists_changes(self):
        """Test that only changed fields are listed."""
        before = {"id": 1, "category": "Food", "amount": "50", "expense_date": "2024-06-01"}
        after = {"id": 1, "category": "Food", "amount": "30", "expense_date": "2024-06-01"}

        event = AuditEventBuilder.expense_updated("alice", before, after)

        assert event.details["changed_fields"] == ["amount"]
        assert "amount" in event.description

    def test_audit_event_builder_login_failed_is_warning(self):
        event = AuditEventBuilder.login_failed("bob", "User doesn't exist.")
        assert event.severity == AuditSeverity.WARNING
        assert event.error_message == "User doesn't exist."


class TestValidationIssue:
    """Tests for ValidationIssue and its conversion from errors."""

    def test_error_converts_to_issue(self):
        """Test ExpenseTrackerError.to_issue."""
        issue = FutureDateError(field="expense_date").to_issue()
        assert issue.field == "expense_date"
        assert issue.issue_type == "future_date"
        assert issue.severity == "error"
        assert issue.message == "Date cannot be in the future."

    def test_issue_rejects_unknown_severity(self):
        with pytest.raises(ValidationError):
            ValidationIssue(field="amount", issue_type="x", message="m", severity="fatal")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
