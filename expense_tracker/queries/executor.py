"""
Expense Filter Engine

DESIGN DECISION: Every view and report goes through one executor.
The menu turns the user's choice into an ExpenseQuery; this engine runs
that query over the user's expenses and returns copies plus a total.

GUARANTEES:
- Read-only: the expense list passed in is never modified
- Matches keep their insertion order
- Clear "no expenses" result (found=False, total=0) when nothing matches
"""

from datetime import date
from decimal import Decimal
from typing import Callable, Iterable, Optional

from expense_tracker.config import get_settings
from expense_tracker.models.expense import (
    Expense,
    ExpenseQuery,
    FilterKind,
    FilterResult,
)
from expense_tracker.validation import InputValidator


MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


class QueryExecutionError(Exception):
    """Error during query execution."""
    pass


class ExpenseQueryExecutor:
    """
    Runs expense filters.

    Dates are compared against a "today" that defaults to the local calendar
    date and can be fixed by passing today_provider or an explicit today.
    """

    def __init__(
        self,
        today_provider: Callable[[], date] = date.today,
        weekly_window_days: Optional[int] = None,
    ):
        self._today = today_provider
        if weekly_window_days is None:
            weekly_window_days = get_settings().app.weekly_window_days
        self._weekly_window = weekly_window_days

    def execute(
        self,
        expenses: Iterable[Expense],
        query: ExpenseQuery,
        today: Optional[date] = None,
    ) -> FilterResult:
        """Run the filter selected by query.kind."""
        today = today or self._today()
        expenses = list(expenses)

        if query.kind == FilterKind.ALL:
            return self._execute_all(expenses)
        elif query.kind == FilterKind.WEEKLY:
            return self._execute_weekly(expenses, today)
        elif query.kind == FilterKind.MONTHLY:
            return self._execute_monthly(expenses, query.month, today)
        elif query.kind == FilterKind.YEARLY:
            return self._execute_yearly(expenses, today)
        elif query.kind == FilterKind.CATEGORY:
            return self._execute_category(expenses, query.category)
        raise QueryExecutionError(f"Unsupported filter: {query.kind}")

    def available_categories(self, expenses: Iterable[Expense]) -> list[str]:
        """Distinct categories, sorted, as offered before a category view."""
        return sorted({expense.category for expense in expenses})

    def _execute_all(self, expenses: list[Expense]) -> FilterResult:
        return self._build_result(
            FilterKind.ALL,
            expenses,
            description="All expenses",
            empty_description="No expenses to display",
        )

    def _execute_weekly(self, expenses: list[Expense], today: date) -> FilterResult:
        """Expenses dated within the last weekly_window days, today included."""
        matches = []
        for expense in expenses:
            expense_date = expense.calendar_date
            if expense_date is None:
                continue
            days_ago = (today - expense_date).days
            if 0 <= days_ago <= self._weekly_window:
                matches.append(expense)

        return self._build_result(
            FilterKind.WEEKLY,
            matches,
            description=f"Expenses for the past {self._weekly_window} days",
            empty_description="No expenses made in the past week",
        )

    def _execute_monthly(
        self,
        expenses: list[Expense],
        month: int,
        today: date,
    ) -> FilterResult:
        """Expenses in the given month of the current year only."""
        InputValidator.validate_range(month, 1, 12, field="month")

        matches = []
        for expense in expenses:
            expense_date = expense.calendar_date
            if expense_date is None:
                continue
            if expense_date.month == month and expense_date.year == today.year:
                matches.append(expense)

        period = f"{MONTH_NAMES[month - 1]} {today.year}"
        return self._build_result(
            FilterKind.MONTHLY,
            matches,
            description=f"Expenses for {period}",
            empty_description=f"No expenses made for {period}",
        )

    def _execute_yearly(self, expenses: list[Expense], today: date) -> FilterResult:
        matches = []
        for expense in expenses:
            expense_date = expense.calendar_date
            if expense_date is not None and expense_date.year == today.year:
                matches.append(expense)

        return self._build_result(
            FilterKind.YEARLY,
            matches,
            description=f"Expenses for {today.year}",
            empty_description="No expenses made for this year",
        )

    def _execute_category(self, expenses: list[Expense], category: str) -> FilterResult:
        """Case-insensitive exact match on the category name."""
        wanted = InputValidator.to_lower_case(category)
        matches = [
            expense for expense in expenses
            if InputValidator.to_lower_case(expense.category) == wanted
        ]

        return self._build_result(
            FilterKind.CATEGORY,
            matches,
            description=f"Expenses in category: {category}",
            empty_description="No expenses found in this category",
        )

    def _build_result(
        self,
        kind: FilterKind,
        matches: list[Expense],
        description: str,
        empty_description: str,
    ) -> FilterResult:
        total = sum((expense.amount for expense in matches), Decimal("0"))
        return FilterResult(
            kind=kind,
            expenses=[expense.model_copy() for expense in matches],
            total=total,
            found=len(matches) > 0,
            result_count=len(matches),
            description=description if matches else empty_description,
        )
