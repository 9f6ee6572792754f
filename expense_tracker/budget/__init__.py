"""Budget ledger package."""

from expense_tracker.budget.ledger import BudgetLedger

__all__ = ["BudgetLedger"]
