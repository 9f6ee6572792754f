"""
Rich Terminal

Console implementation of the terminal interface using rich for tables,
colour and y/n confirmation.
"""

from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm
from rich.table import Table

from expense_tracker.models.expense import Expense, FilterResult
from expense_tracker.services.terminal.interface import TerminalInterface


def format_amount(amount) -> str:
    return f"{amount:,.2f}"


class RichTerminal(TerminalInterface):
    """Terminal backed by a single rich Console."""

    def __init__(self, console: Optional[Console] = None):
        self._console = console or Console()

    def prompt(self, label: str) -> str:
        return self._console.input(f"[bold cyan]{label}[/bold cyan] ")

    def confirm(self, question: str) -> bool:
        return Confirm.ask(f"\n> {question}", console=self._console)

    def show_header(self, title: str) -> None:
        self._console.print()
        self._console.rule(f"[bold]{title}[/bold]")

    def show_message(self, text: str) -> None:
        self._console.print(escape(text), highlight=False)

    def show_error(self, text: str) -> None:
        self._console.print(f"[bold red]Error:[/bold red] {escape(text)}", highlight=False)

    def show_expenses(self, result: FilterResult) -> None:
        self._console.print(f"\n> {escape(result.description)}", highlight=False)
        if not result.found:
            return

        table = Table(box=box.SIMPLE_HEAVY, show_footer=False)
        table.add_column("ID", justify="right", style="bold")
        table.add_column("AMOUNT", justify="right")
        table.add_column("CATEGORY")
        table.add_column("DATE")

        for expense in result.expenses:
            table.add_row(
                str(expense.id),
                format_amount(expense.amount),
                escape(expense.category),
                expense.expense_date,
            )
        self._console.print(table)

    def show_expense(self, expense: Expense, title: str = "Expense Details") -> None:
        self._console.print(f"\n[bold]{title}:[/bold]")
        self._console.print(f"ID: {expense.id}", highlight=False)
        self._console.print(f"Amount: {format_amount(expense.amount)}", highlight=False)
        self._console.print(f"Category: {escape(expense.category)}", highlight=False)
        self._console.print(f"Date: {expense.expense_date}", highlight=False)

    def show_categories(self, categories: list[str]) -> None:
        self._console.print("\n> Your available categories:")
        for category in categories:
            self._console.print(f"  • {escape(category)}", highlight=False)

    def pause(self) -> None:
        self._console.input("> Press Enter to continue ...")
