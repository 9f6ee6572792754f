"""
Input Validation

Every raw string typed at a prompt passes through one of these checks
before it can touch the store or the ledger.

Checks come in two layers:

FIELD CHECKS - shape of a single input:
- Empty / numeric / range / spaces
- Username and password rules
- YYYY-MM-DD format

SEMANTIC CHECKS - meaning of a value:
- Date is a real calendar date and not in the future
- Category text uses only letters, digits and spaces
- Initial budget is positive

A check either returns normally or raises one of the errors in
expense_tracker.validation.errors. Validation NEVER silently fixes input.
"""

import re
import string
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from expense_tracker.models.expense import DATE_FORMAT, DATE_PATTERN
from expense_tracker.validation.errors import (
    BadDateFormatError,
    ContainsSpaceError,
    DuplicateUsernameError,
    EmptyInputError,
    FutureDateError,
    InvalidCategoryError,
    InvalidPasswordError,
    InvalidUsernameError,
    NotANumberError,
    OutOfRangeError,
)


_DATE_RE = re.compile(DATE_PATTERN)
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

Number = Union[int, Decimal]


class InputValidator:
    """
    Validates raw console input.

    Most checks are static. The instance additionally remembers every
    username accepted during the process so a name cannot be handed out
    twice.
    """

    def __init__(self):
        self._usernames: set[str] = set()

    # -------------------------------------------------------------------------
    # Field checks
    # -------------------------------------------------------------------------

    @staticmethod
    def validate_not_empty(value: str, field: Optional[str] = None) -> None:
        if len(value) == 0:
            raise EmptyInputError(field=field)

    @staticmethod
    def validate_is_numeric(value: str, field: Optional[str] = None) -> None:
        """
        Accept ASCII digits with at most one decimal point.

        The value must not be empty and must not start with the point.
        """
        has_decimal = False
        for char in value:
            if char in string.digits:
                continue
            if char == "." and not has_decimal:
                has_decimal = True
                continue
            raise NotANumberError(field=field)

        if not value or value[0] == ".":
            raise NotANumberError(
                "Input must be a valid number (no spaces and not starting with a decimal point).",
                field=field,
            )

    @staticmethod
    def validate_range(
        value: Number,
        minimum: Number,
        maximum: Number,
        field: Optional[str] = None,
    ) -> None:
        if value < minimum or value > maximum:
            raise OutOfRangeError(
                f"Input is out of valid range ({minimum} - {maximum}).",
                field=field,
            )

    @staticmethod
    def validate_no_spaces(value: str, field: Optional[str] = None) -> None:
        if " " in value:
            raise ContainsSpaceError(field=field)

    @staticmethod
    def validate_username(username: str) -> None:
        if not username:
            raise InvalidUsernameError("Username cannot be empty.", field="username")

        if username[0] == " " or username[-1] == " ":
            raise InvalidUsernameError(
                "Username cannot have leading or trailing spaces.",
                field="username",
            )

        for char in username:
            if not (char.isascii() and char.isalnum()):
                raise InvalidUsernameError(field="username")

        # Already implied by the alphanumeric loop
        if " " in username:
            raise InvalidUsernameError("Username cannot contain spaces.", field="username")

    @staticmethod
    def validate_password(password: str) -> None:
        if not password:
            raise InvalidPasswordError("Password cannot be empty.", field="password")

        if " " in password:
            raise InvalidPasswordError(field="password")

    @staticmethod
    def validate_date_format(value: str, field: Optional[str] = "expense_date") -> None:
        """Format only: 2024-13-45 passes here and fails when parsed."""
        if not _DATE_RE.match(value):
            raise BadDateFormatError(field=field)

    @staticmethod
    def to_lower_case(value: str) -> str:
        """ASCII-only lowercase, used for category matching."""
        return value.translate(_ASCII_LOWER)

    # -------------------------------------------------------------------------
    # Username registry
    # -------------------------------------------------------------------------

    def is_username_taken(self, username: str) -> bool:
        return username in self._usernames

    def add_username(self, username: str) -> None:
        """Remember an accepted username, rejecting repeats."""
        if self.is_username_taken(username):
            raise DuplicateUsernameError(field="username")
        self._usernames.add(username)

    # -------------------------------------------------------------------------
    # Semantic checks
    # -------------------------------------------------------------------------

    @staticmethod
    def parse_amount(value: str, field: Optional[str] = "amount") -> Decimal:
        """Numeric check, then conversion to Decimal."""
        InputValidator.validate_is_numeric(value, field=field)
        return Decimal(value)

    @staticmethod
    def parse_budget(value: str) -> Decimal:
        """
        Parse a budget edit.

        A leading minus sign is let through so that negative values reach the
        ledger and are rejected there as negative budgets.
        """
        InputValidator.validate_no_spaces(value, field="budget")
        if value.startswith("-"):
            return -InputValidator.parse_amount(value[1:], field="budget")
        return InputValidator.parse_amount(value, field="budget")

    @staticmethod
    def validate_initial_budget(value: str) -> Decimal:
        """Budget typed at registration: no spaces, numeric, above zero."""
        InputValidator.validate_no_spaces(value, field="budget")
        budget = InputValidator.parse_amount(value, field="budget")
        if budget <= 0:
            raise OutOfRangeError("Budget must be a positive number.", field="budget")
        return budget

    @staticmethod
    def validate_expense_date(value: str, today: Optional[date] = None) -> str:
        """
        Check an expense date.

        Must be YYYY-MM-DD, a real calendar date, and not later than today.
        Returns the value unchanged.
        """
        InputValidator.validate_date_format(value)

        try:
            parsed = datetime.strptime(value, DATE_FORMAT).date()
        except ValueError:
            raise BadDateFormatError(
                "Invalid date. Please enter a valid calendar date.",
                field="expense_date",
            ) from None

        if parsed > (today or date.today()):
            raise FutureDateError(field="expense_date")

        return value

    @staticmethod
    def validate_category_name(value: str) -> str:
        """Category edits: letters, digits and spaces only."""
        InputValidator.validate_not_empty(value, field="category")
        for char in value:
            if not ((char.isascii() and char.isalnum()) or char == " "):
                raise InvalidCategoryError(field="category")
        return value
