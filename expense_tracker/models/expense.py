"""
Core Data Models for Expense Tracker

These models define the schemas for all data flowing through the tracker.
They are designed to:
1. Enforce type safety at runtime
2. Keep money as Decimal end to end
3. Be serializable for logging and the audit trail

DESIGN DECISION: Models use validate_assignment so in-place edits made by
the modify flow go through the same field constraints as creation.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)


DATE_FORMAT = "%Y-%m-%d"
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class FilterKind(str, Enum):
    """
    Ways of selecting expenses for display and reports.

    Order matches the display-type menu.
    """
    CATEGORY = "category"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    ALL = "all"


# =============================================================================
# CORE EXPENSE MODELS
# =============================================================================

class Expense(BaseModel):
    """
    A single dated expense entry owned by one user.

    The id is assigned by the store and never changes. The date is kept as
    YYYY-MM-DD text; calendar_date gives the parsed value or None when the
    text is not a real calendar date.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
        frozen=False,
    )

    id: int = Field(
        ...,
        ge=1,
        description="Identifier unique within the owner's expenses"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Free-text category, matched case-insensitively"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount spent"
    )
    expense_date: str = Field(
        ...,
        pattern=DATE_PATTERN,
        description="Date of the expense (YYYY-MM-DD)"
    )

    @property
    def calendar_date(self) -> Optional[date]:
        """Parsed expense date, or None if it is not a real date."""
        try:
            return datetime.strptime(self.expense_date, DATE_FORMAT).date()
        except ValueError:
            return None

    def to_dict(self) -> dict:
        """Convert to a plain dictionary for logs and audit details."""
        return {
            "id": self.id,
            "category": self.category,
            "amount": str(self.amount),
            "expense_date": self.expense_date,
        }


class User(BaseModel):
    """
    A registered account and everything it owns.

    Passwords are kept in plain text; this tracker has no security model.
    """
    model_config = ConfigDict(validate_assignment=True)

    username: str = Field(
        ...,
        min_length=1,
        pattern=r"^[A-Za-z0-9]+$",
        description="Unique ASCII alphanumeric login name"
    )
    password: str = Field(
        ...,
        min_length=1,
        description="Plain-text password, no spaces"
    )
    budget: Decimal = Field(
        ...,
        ge=0,
        description="Budget ceiling"
    )
    expenses: list[Expense] = Field(
        default_factory=list,
        description="Expenses in insertion order"
    )
    next_expense_id: int = Field(
        default=1,
        ge=1,
        description="Next id to hand out; only ever increases"
    )

    def verify_password(self, candidate: str) -> bool:
        return self.password == candidate


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single rejected input, as recorded in the audit trail."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Kind of rejection (e.g., 'not_a_number', 'future_date')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


# =============================================================================
# QUERY MODELS
# =============================================================================

class ExpenseQuery(BaseModel):
    """
    A request to select expenses.

    Monthly queries carry the month; category queries carry the name.
    """

    kind: FilterKind = Field(
        ...,
        description="Which filter to run"
    )
    month: Optional[int] = Field(
        default=None,
        ge=1,
        le=12,
        description="Month number for monthly queries"
    )
    category: Optional[str] = Field(
        default=None,
        description="Category name for category queries"
    )

    @model_validator(mode='after')
    def validate_parameters(self) -> 'ExpenseQuery':
        """Each filter kind needs its own parameter."""
        if self.kind == FilterKind.MONTHLY and self.month is None:
            raise ValueError("Monthly queries need a month (1 - 12)")
        if self.kind == FilterKind.CATEGORY and not self.category:
            raise ValueError("Category queries need a category name")
        return self


class FilterResult(BaseModel):
    """
    Result of running a filter over a user's expenses.

    expenses are copies in display order; total is 0 when nothing matched.
    """

    kind: FilterKind
    expenses: list[Expense] = Field(
        default_factory=list,
        description="Matching expenses in insertion order"
    )
    total: Decimal = Field(
        default=Decimal("0"),
        description="Sum of matching amounts"
    )
    found: bool = Field(
        ...,
        description="Was anything matched?"
    )
    result_count: int = Field(
        ge=0,
        description="Number of matching expenses"
    )
    description: str = Field(
        ...,
        description="Human-readable description of what was selected"
    )

    @property
    def ids(self) -> list[int]:
        return [expense.id for expense in self.expenses]


class ExpenseReport(BaseModel):
    """A filter result paired with the budget position at report time."""

    result: FilterResult
    remaining_budget: Decimal
    generated_at: datetime = Field(
        default_factory=datetime.now
    )

    @property
    def total_matched(self) -> Decimal:
        return self.result.total
