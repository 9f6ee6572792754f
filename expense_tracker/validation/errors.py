"""
Error Taxonomy

Every rejection the tracker can produce has a kind and a short English
message. Flows catch these at the prompt that produced them, show the
message and ask again; nothing here is fatal.
"""

from enum import Enum
from typing import Optional

from expense_tracker.models.expense import ValidationIssue


class ErrorKind(str, Enum):
    """Finite set of rejection reasons."""
    EMPTY_INPUT = "empty_input"
    NOT_A_NUMBER = "not_a_number"
    OUT_OF_RANGE = "out_of_range"
    CONTAINS_SPACE = "contains_space"
    INVALID_USERNAME = "invalid_username"
    INVALID_PASSWORD = "invalid_password"
    INVALID_CATEGORY = "invalid_category"
    DUPLICATE_USERNAME = "duplicate_username"
    BAD_DATE_FORMAT = "bad_date_format"
    FUTURE_DATE = "future_date"
    INSUFFICIENT_BUDGET = "insufficient_budget"
    NEGATIVE_BUDGET = "negative_budget"
    RECORD_NOT_FOUND = "record_not_found"


class ExpenseTrackerError(Exception):
    """
    Base class for all user-facing rejections.

    Subclasses pin the kind and a default message; callers may pass a more
    specific message and the name of the field being validated.
    """

    kind: ErrorKind
    default_message: str = "Invalid input."

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)

    def to_issue(self) -> ValidationIssue:
        """Convert to a ValidationIssue for the audit trail."""
        return ValidationIssue(
            field=self.field or "input",
            issue_type=self.kind.value,
            message=self.message,
            severity="error",
        )


class EmptyInputError(ExpenseTrackerError):
    kind = ErrorKind.EMPTY_INPUT
    default_message = "Input cannot be empty."


class NotANumberError(ExpenseTrackerError):
    kind = ErrorKind.NOT_A_NUMBER
    default_message = "Input must be a number."


class OutOfRangeError(ExpenseTrackerError):
    kind = ErrorKind.OUT_OF_RANGE
    default_message = "Input is out of valid range."


class ContainsSpaceError(ExpenseTrackerError):
    kind = ErrorKind.CONTAINS_SPACE
    default_message = "Input cannot contain spaces."


class InvalidUsernameError(ExpenseTrackerError):
    kind = ErrorKind.INVALID_USERNAME
    default_message = "Username can only contain letters and numbers."


class InvalidPasswordError(ExpenseTrackerError):
    kind = ErrorKind.INVALID_PASSWORD
    default_message = "Password cannot contain spaces."


class InvalidCategoryError(ExpenseTrackerError):
    kind = ErrorKind.INVALID_CATEGORY
    default_message = "Category can only contain letters, numbers and spaces."


class DuplicateUsernameError(ExpenseTrackerError):
    kind = ErrorKind.DUPLICATE_USERNAME
    default_message = "Username already exists. Please choose a different username."


class BadDateFormatError(ExpenseTrackerError):
    kind = ErrorKind.BAD_DATE_FORMAT
    default_message = "Date must be in YYYY-MM-DD format."


class FutureDateError(ExpenseTrackerError):
    kind = ErrorKind.FUTURE_DATE
    default_message = "Date cannot be in the future."


class InsufficientBudgetError(ExpenseTrackerError):
    kind = ErrorKind.INSUFFICIENT_BUDGET
    default_message = "Insufficient Budget! Cannot exceed the available budget."


class NegativeBudgetError(ExpenseTrackerError):
    kind = ErrorKind.NEGATIVE_BUDGET
    default_message = "Budget cannot be negative!"


class RecordNotFoundError(ExpenseTrackerError):
    kind = ErrorKind.RECORD_NOT_FOUND
    default_message = "Expense ID not found."
