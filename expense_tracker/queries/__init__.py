"""Expense filter package."""

from expense_tracker.queries.executor import (
    MONTH_NAMES,
    ExpenseQueryExecutor,
    QueryExecutionError,
)

__all__ = ["MONTH_NAMES", "ExpenseQueryExecutor", "QueryExecutionError"]
