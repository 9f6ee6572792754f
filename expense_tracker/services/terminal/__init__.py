"""Terminal I/O package."""

from expense_tracker.services.terminal.interface import TerminalInterface
from expense_tracker.services.terminal.rich_console import RichTerminal, format_amount

__all__ = ["RichTerminal", "TerminalInterface", "format_amount"]
