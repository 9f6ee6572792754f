"""Tests for the expense filter engine."""

import pytest
from datetime import date
from decimal import Decimal

from expense_tracker.models.expense import Expense, ExpenseQuery, FilterKind
from expense_tracker.queries import ExpenseQueryExecutor
from expense_tracker.validation import OutOfRangeError


TODAY = date(2024, 6, 15)


def make_expense(expense_id, category, amount, expense_date):
    return Expense(
        id=expense_id,
        category=category,
        amount=Decimal(amount),
        expense_date=expense_date,
    )


@pytest.fixture
def executor():
    return ExpenseQueryExecutor(today_provider=lambda: TODAY, weekly_window_days=7)


@pytest.fixture
def expenses():
    return [
        make_expense(1, "Food", "10", "2024-06-15"),       # today
        make_expense(2, "Transport", "20", "2024-06-08"),  # 7 days ago
        make_expense(3, "food", "30", "2024-06-07"),       # 8 days ago
        make_expense(4, "Rent", "40", "2024-01-10"),
        make_expense(5, "Food", "50", "2023-06-10"),       # last year
    ]


class TestAllFilter:
    """Tests for the view-all filter."""

    def test_returns_everything_in_order(self, executor, expenses):
        result = executor.execute(expenses, ExpenseQuery(kind=FilterKind.ALL))
        assert result.ids == [1, 2, 3, 4, 5]
        assert result.total == Decimal("150")
        assert result.found is True

    def test_empty_collection(self, executor):
        """Test the 'no expenses' result."""
        result = executor.execute([], ExpenseQuery(kind=FilterKind.ALL))
        assert result.found is False
        assert result.total == Decimal("0")
        assert result.expenses == []


class TestWeeklyFilter:
    """Tests for the past-week filter."""

    def test_window_is_inclusive(self, executor, expenses):
        """Test that today and exactly 7 days ago are both included."""
        result = executor.execute(expenses, ExpenseQuery(kind=FilterKind.WEEKLY))
        assert result.ids == [1, 2]
        assert result.total == Decimal("30")

    def test_future_dated_entries_excluded(self, executor):
        expenses = [make_expense(1, "Food", "5", "2024-06-20")]
        result = executor.execute(expenses, ExpenseQuery(kind=FilterKind.WEEKLY))
        assert result.found is False

    def test_nothing_recent(self, executor, expenses):
        result = executor.execute(
            expenses[3:], ExpenseQuery(kind=FilterKind.WEEKLY)
        )
        assert result.found is False
        assert result.description == "No expenses made in the past week"

    def test_window_is_configurable(self, expenses):
        executor = ExpenseQueryExecutor(today_provider=lambda: TODAY, weekly_window_days=8)
        result = executor.execute(expenses, ExpenseQuery(kind=FilterKind.WEEKLY))
        assert result.ids == [1, 2, 3]


class TestMonthlyFilter:
    """Tests for the month-of-current-year filter."""

    def test_current_year_only(self, executor, expenses):
        """Test that June of last year is not included."""
        result = executor.execute(expenses, ExpenseQuery(kind=FilterKind.MONTHLY, month=6))
        assert result.ids == [1, 2, 3]
        assert result.description == "Expenses for June 2024"

    def test_month_without_expenses(self, executor, expenses):
        result = executor.execute(expenses, ExpenseQuery(kind=FilterKind.MONTHLY, month=3))
        assert result.found is False
        assert result.description == "No expenses made for March 2024"

    def test_month_out_of_range(self, executor, expenses):
        """Test the range check when a query bypasses model validation."""
        query = ExpenseQuery.model_construct(kind=FilterKind.MONTHLY, month=13, category=None)
        with pytest.raises(OutOfRangeError):
            executor.execute(expenses, query)


class TestYearlyFilter:
    def test_current_year(self, executor, expenses):
        result = executor.execute(expenses, ExpenseQuery(kind=FilterKind.YEARLY))
        assert result.ids == [1, 2, 3, 4]
        assert result.total == Decimal("100")


class TestCategoryFilter:
    """Tests for the category filter."""

    def test_case_insensitive_match(self, executor, expenses):
        """Test that 'FOOD' matches Food and food."""
        result = executor.execute(
            expenses, ExpenseQuery(kind=FilterKind.CATEGORY, category="FOOD")
        )
        assert result.ids == [1, 3, 5]
        assert result.total == Decimal("90")

    def test_exact_match_only(self, executor, expenses):
        result = executor.execute(
            expenses, ExpenseQuery(kind=FilterKind.CATEGORY, category="Foo")
        )
        assert result.found is False
        assert result.description == "No expenses found in this category"

    def test_available_categories(self, executor, expenses):
        assert executor.available_categories(expenses) == ["Food", "Rent", "Transport", "food"]


class TestFilterGuarantees:
    """Tests for properties shared by all filters."""

    def test_impossible_dates_are_skipped(self, executor):
        """Test that an unparseable stored date never matches a date filter."""
        expenses = [make_expense(1, "Food", "5", "2024-13-45")]
        for query in (
            ExpenseQuery(kind=FilterKind.WEEKLY),
            ExpenseQuery(kind=FilterKind.MONTHLY, month=6),
            ExpenseQuery(kind=FilterKind.YEARLY),
        ):
            assert executor.execute(expenses, query).found is False

    def test_results_are_copies(self, executor, expenses):
        """Test that editing a result does not touch the source."""
        result = executor.execute(expenses, ExpenseQuery(kind=FilterKind.ALL))
        result.expenses[0].category = "Changed"
        assert expenses[0].category == "Food"

    def test_explicit_today_overrides_provider(self, executor, expenses):
        result = executor.execute(
            expenses, ExpenseQuery(kind=FilterKind.YEARLY), today=date(2023, 12, 31)
        )
        assert result.ids == [5]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
