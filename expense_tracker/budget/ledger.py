"""
Budget Ledger

Remaining budget is derived on every call from the budget ceiling and the
current expense amounts; it is never stored.
Sums are taken at unbounded precision so large amounts are never rounded
before the affordability comparison.

Lowering the budget below what has already been spent is allowed and simply
makes remaining() negative. Existing expenses are not re-checked.
"""

from decimal import MAX_PREC, Decimal, localcontext
from typing import Optional

from expense_tracker.config import get_settings
from expense_tracker.models.expense import Expense, User
from expense_tracker.validation.errors import (
    InsufficientBudgetError,
    NegativeBudgetError,
)


class BudgetLedger:
    """Budget arithmetic for one user."""

    def __init__(
        self,
        user: User,
        edit_check_includes_current_amount: Optional[bool] = None,
    ):
        """
        Args:
            user: Account whose budget and expenses are read.
            edit_check_includes_current_amount: When checking a new amount for
                an existing record, add the record's current amount back to
                the remaining budget first. Defaults to the app setting.
        """
        self._user = user
        if edit_check_includes_current_amount is None:
            edit_check_includes_current_amount = (
                get_settings().app.edit_check_includes_current_amount
            )
        self._include_current = edit_check_includes_current_amount

    @property
    def budget(self) -> Decimal:
        return self._user.budget

    def total_spent(self) -> Decimal:
        with localcontext() as ctx:
            ctx.prec = MAX_PREC
            return sum((expense.amount for expense in self._user.expenses), Decimal("0"))

    def remaining(self) -> Decimal:
        with localcontext() as ctx:
            ctx.prec = MAX_PREC
            return self._user.budget - self.total_spent()

    def set_budget(self, new_budget: Decimal) -> Decimal:
        """
        Replace the budget ceiling.

        Raises NegativeBudgetError (and changes nothing) for negative values.
        Returns the previous budget.
        """
        if new_budget < 0:
            raise NegativeBudgetError(field="budget")
        old_budget = self._user.budget
        self._user.budget = new_budget
        return old_budget

    def available_for(self, replacing: Optional[Expense] = None) -> Decimal:
        """Ceiling an amount is checked against."""
        available = self.remaining()
        if replacing is not None and self._include_current:
            with localcontext() as ctx:
                ctx.prec = MAX_PREC
                available += replacing.amount
        return available

    def can_afford(self, amount: Decimal, replacing: Optional[Expense] = None) -> bool:
        return amount <= self.available_for(replacing)

    def ensure_affordable(self, amount: Decimal, replacing: Optional[Expense] = None) -> None:
        if not self.can_afford(amount, replacing):
            raise InsufficientBudgetError(field="amount")
