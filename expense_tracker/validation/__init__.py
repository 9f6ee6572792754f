"""Input validation package."""

from expense_tracker.validation.errors import (
    BadDateFormatError,
    ContainsSpaceError,
    DuplicateUsernameError,
    EmptyInputError,
    ErrorKind,
    ExpenseTrackerError,
    FutureDateError,
    InsufficientBudgetError,
    InvalidCategoryError,
    InvalidPasswordError,
    InvalidUsernameError,
    NegativeBudgetError,
    NotANumberError,
    OutOfRangeError,
    RecordNotFoundError,
)
from expense_tracker.validation.validator import InputValidator

__all__ = [
    "BadDateFormatError",
    "ContainsSpaceError",
    "DuplicateUsernameError",
    "EmptyInputError",
    "ErrorKind",
    "ExpenseTrackerError",
    "FutureDateError",
    "InputValidator",
    "InsufficientBudgetError",
    "InvalidCategoryError",
    "InvalidPasswordError",
    "InvalidUsernameError",
    "NegativeBudgetError",
    "NotANumberError",
    "OutOfRangeError",
    "RecordNotFoundError",
]
