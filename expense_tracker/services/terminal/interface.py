"""
Abstract Terminal Interface

The session flows never touch stdin/stdout directly; they talk to a
TerminalInterface. The app uses the rich implementation, the tests use a
scripted one.
"""

from abc import ABC, abstractmethod

from expense_tracker.models.expense import Expense, FilterResult


class TerminalInterface(ABC):
    """Line-oriented prompts, confirmations and output."""

    @abstractmethod
    def prompt(self, label: str) -> str:
        """Read one raw line (without the newline) after showing label."""
        pass

    @abstractmethod
    def confirm(self, question: str) -> bool:
        """Ask a yes/no question; y/n case-insensitive, re-asks otherwise."""
        pass

    @abstractmethod
    def show_header(self, title: str) -> None:
        pass

    @abstractmethod
    def show_message(self, text: str) -> None:
        pass

    @abstractmethod
    def show_error(self, text: str) -> None:
        pass

    @abstractmethod
    def show_expenses(self, result: FilterResult) -> None:
        """Render a filter result as a table, or its "no expenses" message."""
        pass

    @abstractmethod
    def show_expense(self, expense: Expense, title: str = "Expense Details") -> None:
        pass

    @abstractmethod
    def show_categories(self, categories: list[str]) -> None:
        pass

    @abstractmethod
    def pause(self) -> None:
        """Wait for the user before moving on."""
        pass
