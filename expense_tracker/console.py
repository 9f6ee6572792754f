"""
Console Screens for Expense Tracker

This is the menu-driven interface a user works through after starting the
app. Each screen is a plain function that talks to a TerminalInterface and
one of the orchestrator flows.

DESIGN PRINCIPLES:
1. Every prompt re-asks until the input is valid
2. The cancel sentinel ('x' by default) leaves the operation at any prompt
3. Nothing is stored before every field has been accepted
4. "Again?" questions are loops, never nested calls

A screen returns to its menu when done. Only Exit from a menu ends the
session.
"""

from typing import Callable, Optional, TypeVar

from expense_tracker.audit import create_correlation_id
from expense_tracker.config import AppSettings, get_settings
from expense_tracker.models.expense import Expense, ExpenseQuery, FilterKind
from expense_tracker.orchestrator import AccountFlow, ExpenseFlow
from expense_tracker.services.storage import AuthenticationError
from expense_tracker.services.terminal import TerminalInterface, format_amount
from expense_tracker.validation import (
    ExpenseTrackerError,
    InputValidator,
    NotANumberError,
)


T = TypeVar("T")

NO_EXPENSES_MESSAGE = "You do not have any expense entries yet."

START_MENU = [
    "1 - Register an account",
    "2 - Login",
    "3 - Exit",
]

MAIN_MENU = [
    "1 - Add Expense",
    "2 - View Expenses",
    "3 - Modify Expenses",
    "4 - Manage Budget",
    "5 - Remove Expenses",
    "6 - Generate Report",
    "7 - Logout",
    "8 - Exit",
]

DISPLAY_TYPES = {
    1: FilterKind.CATEGORY,
    2: FilterKind.WEEKLY,
    3: FilterKind.MONTHLY,
    4: FilterKind.YEARLY,
    5: FilterKind.ALL,
}


class OperationCancelled(Exception):
    """The user typed the cancel sentinel."""
    pass


# -----------------------------------------------------------------------------
# Prompt helpers
# -----------------------------------------------------------------------------

def ask(terminal: TerminalInterface, label: str, settings: AppSettings) -> str:
    """Read one line; raise OperationCancelled on the sentinel."""
    raw = terminal.prompt(label)
    if settings.is_cancel(raw):
        raise OperationCancelled()
    return raw


def ask_until_valid(
    terminal: TerminalInterface,
    label: str,
    check: Callable[[str], T],
    settings: AppSettings,
) -> T:
    """Prompt → validate → (show error, prompt again) until check passes."""
    while True:
        raw = ask(terminal, label, settings)
        try:
            return check(raw)
        except ExpenseTrackerError as e:
            terminal.show_error(e.message)


def parse_whole_number(raw: str, field: str) -> int:
    value = raw.strip()
    InputValidator.validate_not_empty(value, field=field)
    InputValidator.validate_is_numeric(value, field=field)
    if "." in value:
        raise NotANumberError("Input must be a whole number.", field=field)
    return int(value)


def parse_choice(raw: str, maximum: int) -> int:
    """Menu choice: a whole number in 1..maximum."""
    choice = parse_whole_number(raw, field="choice")
    InputValidator.validate_range(choice, 1, maximum, field="choice")
    return choice


def ask_menu_choice(terminal: TerminalInterface, options: list[str]) -> int:
    """Show a numbered menu and return a valid choice. No sentinel here."""
    for option in options:
        terminal.show_message(option)
    while True:
        raw = terminal.prompt("> Please input your choice:")
        try:
            return parse_choice(raw, len(options))
        except ExpenseTrackerError as e:
            terminal.show_error(e.message)


# -----------------------------------------------------------------------------
# Start menu
# -----------------------------------------------------------------------------

def run_start_menu(terminal: TerminalInterface, account_flow: AccountFlow) -> None:
    """Register / Login / Exit until the user exits."""
    while True:
        terminal.show_header("EXPENSE TRACKER")
        choice = ask_menu_choice(terminal, START_MENU)

        if choice == 1:
            expense_flow = render_registration(terminal, account_flow)
        elif choice == 2:
            expense_flow = render_login(terminal, account_flow)
        else:
            terminal.show_message("Thank you for using the Expense Tracker. Goodbye!")
            return

        if expense_flow is None:
            continue

        exit_requested = run_main_menu(terminal, account_flow, expense_flow)
        if exit_requested:
            terminal.show_message("Exiting the program...")
            return


def render_registration(
    terminal: TerminalInterface,
    account_flow: AccountFlow,
) -> Optional[ExpenseFlow]:
    """Collect credentials and a budget, register, then log in."""
    settings = get_settings().app
    correlation_id = create_correlation_id()

    terminal.show_header("REGISTER USER")
    terminal.show_message("> Please enter the following credentials (Case Sensitive).")
    terminal.show_message(f"> Input '{settings.cancel_sentinel}' to cancel anytime.")

    try:
        username = ask_until_valid(
            terminal,
            "Enter username:",
            lambda raw: account_flow.check_username(raw, correlation_id),
            settings,
        )
        password = ask_until_valid(
            terminal,
            "Enter password:",
            lambda raw: account_flow.check_password(raw, correlation_id),
            settings,
        )
        budget = ask_until_valid(
            terminal,
            "Enter initial budget:",
            lambda raw: account_flow.check_initial_budget(raw, correlation_id),
            settings,
        )

        terminal.show_message("\nAccount Summary:")
        terminal.show_message(f"Username: {username}")
        terminal.show_message(f"Initial Budget: {format_amount(budget)}")
        if not terminal.confirm("Confirm registration? (Y/N):"):
            raise OperationCancelled()
    except OperationCancelled:
        account_flow.cancel("registration", correlation_id)
        terminal.show_message("Cancelling registration. Returning to start menu...")
        return None

    if not account_flow.register(username, password, budget, correlation_id):
        terminal.show_error("Username already exists. Please try again.")
        return None

    terminal.show_message("> Registration successful!")
    return account_flow.login(username, password, correlation_id)


def render_login(
    terminal: TerminalInterface,
    account_flow: AccountFlow,
) -> Optional[ExpenseFlow]:
    settings = get_settings().app
    correlation_id = create_correlation_id()

    terminal.show_header("LOGIN")
    terminal.show_message(f"> Input '{settings.cancel_sentinel}' to cancel anytime.")

    while True:
        try:
            username = ask(terminal, "Enter username:", settings)
            password = ask(terminal, "Enter password:", settings)
        except OperationCancelled:
            account_flow.cancel("login", correlation_id)
            return None

        try:
            expense_flow = account_flow.login(username, password, correlation_id)
        except AuthenticationError as e:
            terminal.show_error(str(e))
            continue

        terminal.show_message(f"Welcome, {username}!")
        return expense_flow


# -----------------------------------------------------------------------------
# Main menu
# -----------------------------------------------------------------------------

def run_main_menu(
    terminal: TerminalInterface,
    account_flow: AccountFlow,
    expense_flow: ExpenseFlow,
) -> bool:
    """
    Serve the main menu for a logged-in user.

    Returns True if the user chose Exit, False on Logout.
    """
    screens = {
        1: render_add_expense,
        2: render_view_expenses,
        3: render_modify_expense,
        4: render_manage_budget,
        5: render_remove_expense,
        6: render_report,
    }

    while True:
        terminal.show_header("EXPENSE TRACKER MAIN MENU")
        terminal.show_message(f"Hello, '{expense_flow.user.username}'!")
        choice = ask_menu_choice(terminal, MAIN_MENU)

        if choice == 7:
            account_flow.logout(expense_flow)
            terminal.show_message("Logging out, returning to the start screen ...")
            return False
        if choice == 8:
            account_flow.logout(expense_flow)
            return True

        screens[choice](terminal, expense_flow)


def _has_expenses_or_notify(terminal: TerminalInterface, flow: ExpenseFlow) -> bool:
    if flow.has_expenses():
        return True
    terminal.show_message(f"> {NO_EXPENSES_MESSAGE}")
    terminal.show_message("> Redirecting to the main menu...")
    terminal.pause()
    return False


def ask_display_query(
    terminal: TerminalInterface,
    flow: ExpenseFlow,
    settings: AppSettings,
) -> ExpenseQuery:
    """
    Let the user pick a display type and its parameter.

    Raises OperationCancelled on the sentinel.
    """
    terminal.show_message("> Select display type to view your expenses:")
    terminal.show_message(f"> Input '{settings.cancel_sentinel}' to cancel anytime.")
    terminal.show_message("1 - Category\n2 - Weekly\n3 - Monthly\n4 - Yearly\n5 - View All")

    choice = ask_until_valid(
        terminal,
        "CHOICE:",
        lambda raw: parse_choice(raw, len(DISPLAY_TYPES)),
        settings,
    )
    kind = DISPLAY_TYPES[choice]

    if kind == FilterKind.MONTHLY:
        month = ask_until_valid(
            terminal,
            "Enter month (1-12):",
            lambda raw: parse_choice(raw, 12),
            settings,
        )
        return ExpenseQuery(kind=kind, month=month)

    if kind == FilterKind.CATEGORY:
        terminal.show_categories(flow.categories())

        def check_category(raw: str) -> str:
            category = raw.strip()
            InputValidator.validate_not_empty(category, field="category")
            return category

        category = ask_until_valid(terminal, "Enter category:", check_category, settings)
        return ExpenseQuery(kind=kind, category=category)

    return ExpenseQuery(kind=kind)


def ask_expense_id(
    terminal: TerminalInterface,
    flow: ExpenseFlow,
    label: str,
    settings: AppSettings,
) -> Expense:
    """Ask for an existing expense id. '0' or the sentinel cancels."""

    def check_id(raw: str) -> Expense:
        expense_id = parse_whole_number(raw, field="id")
        if expense_id == 0:
            raise OperationCancelled()
        return flow.find_expense(expense_id)

    return ask_until_valid(terminal, label, check_id, settings)


# -----------------------------------------------------------------------------
# Operation screens
# -----------------------------------------------------------------------------

def render_add_expense(terminal: TerminalInterface, flow: ExpenseFlow) -> None:
    settings = get_settings().app

    while True:
        correlation_id = create_correlation_id()
        terminal.show_header("ADD EXPENSE")
        terminal.show_message(f"> Input '{settings.cancel_sentinel}' to cancel anytime.")
        terminal.show_message(f"REMAINING BUDGET: {format_amount(flow.remaining_budget())}")

        try:
            amount = ask_until_valid(
                terminal,
                "Enter amount:",
                lambda raw: flow.check_new_amount(raw, correlation_id),
                settings,
            )
            category = ask_until_valid(
                terminal,
                "Enter category:",
                lambda raw: flow.check_new_category(raw, correlation_id),
                settings,
            )
            expense_date = ask_until_valid(
                terminal,
                "Enter date (YYYY-MM-DD):",
                lambda raw: flow.check_new_date(raw, correlation_id),
                settings,
            )
        except OperationCancelled:
            flow.cancel("add", correlation_id)
            return

        expense = flow.commit_expense(amount, category, expense_date, correlation_id)
        terminal.show_message("\n> Expense added successfully!")
        terminal.show_expense(expense)
        terminal.show_message(f"\nREMAINING BUDGET: {format_amount(flow.remaining_budget())}")

        if not terminal.confirm("Add another expense? (Y/N):"):
            return


def render_view_expenses(terminal: TerminalInterface, flow: ExpenseFlow) -> None:
    settings = get_settings().app

    terminal.show_header("VIEW EXPENSE")
    if not _has_expenses_or_notify(terminal, flow):
        return

    while True:
        correlation_id = create_correlation_id()
        try:
            query = ask_display_query(terminal, flow, settings)
        except OperationCancelled:
            flow.cancel("view", correlation_id)
            return

        terminal.show_expenses(flow.view(query, correlation_id))

        if not terminal.confirm("View in another display type? (Y/N):"):
            return


def render_modify_expense(terminal: TerminalInterface, flow: ExpenseFlow) -> None:
    """Pick an expense, then edit; a blank answer keeps the current value."""
    settings = get_settings().app

    terminal.show_header("MODIFY EXPENSE")
    if not _has_expenses_or_notify(terminal, flow):
        return

    while True:
        correlation_id = create_correlation_id()
        try:
            query = ask_display_query(terminal, flow, settings)
            terminal.show_expenses(flow.view(query, correlation_id))

            expense = ask_expense_id(
                terminal, flow, "> Input expense ID to modify (or '0' to cancel):", settings
            )
            terminal.show_expense(expense, title="Current Details")
            terminal.show_message("\nEnter new details (leave blank to retain current value):")

            amount = ask_until_valid(
                terminal,
                "New Amount:",
                lambda raw: flow.check_amount_change(expense, raw, correlation_id)
                if raw.strip() else None,
                settings,
            )
            category = ask_until_valid(
                terminal,
                "New Category:",
                lambda raw: flow.check_category_change(raw, correlation_id)
                if raw.strip() else None,
                settings,
            )
            expense_date = ask_until_valid(
                terminal,
                "New Date (YYYY-MM-DD):",
                lambda raw: flow.check_date_change(raw, correlation_id)
                if raw.strip() else None,
                settings,
            )
        except OperationCancelled:
            flow.cancel("modify", correlation_id)
            return

        expense = flow.commit_changes(
            expense.id,
            amount=amount,
            category=category,
            expense_date=expense_date,
            correlation_id=correlation_id,
        )
        terminal.show_message("\n> Expense modified successfully!")
        terminal.show_expense(expense, title="Updated Details")
        terminal.show_message(f"\nREMAINING BUDGET: {format_amount(flow.remaining_budget())}")

        if not terminal.confirm("Modify another expense? (Y/N):"):
            return


def render_remove_expense(terminal: TerminalInterface, flow: ExpenseFlow) -> None:
    settings = get_settings().app

    terminal.show_header("REMOVE EXPENSE")
    if not _has_expenses_or_notify(terminal, flow):
        return

    while True:
        correlation_id = create_correlation_id()
        try:
            query = ask_display_query(terminal, flow, settings)
            terminal.show_expenses(flow.view(query, correlation_id))

            expense = ask_expense_id(
                terminal,
                flow,
                "> Enter the ID of the expense you want to delete (or '0' to cancel):",
                settings,
            )
        except OperationCancelled:
            flow.cancel("remove", correlation_id)
            return

        terminal.show_expense(expense)
        if terminal.confirm("Delete this expense? (Y/N):"):
            flow.remove_expense(expense.id, correlation_id)
            terminal.show_message("\n> Expense deleted successfully!")
        else:
            flow.cancel("remove", correlation_id)
            terminal.show_message("\n> Deletion canceled.")

        terminal.show_message(f"\nREMAINING BUDGET: {format_amount(flow.remaining_budget())}")

        if not flow.has_expenses():
            terminal.show_message(f"> {NO_EXPENSES_MESSAGE}")
            return
        if not terminal.confirm("Delete another expense? (Y/N):"):
            return


def render_report(terminal: TerminalInterface, flow: ExpenseFlow) -> None:
    settings = get_settings().app

    terminal.show_header("EXPENSE REPORT")
    if not _has_expenses_or_notify(terminal, flow):
        return

    while True:
        correlation_id = create_correlation_id()
        try:
            query = ask_display_query(terminal, flow, settings)
        except OperationCancelled:
            flow.cancel("report", correlation_id)
            return

        report = flow.report(query, correlation_id)
        terminal.show_expenses(report.result)
        terminal.show_message(f"\nTOTAL EXPENSE: {format_amount(report.total_matched)}")
        terminal.show_message(f"REMAINING BUDGET: {format_amount(report.remaining_budget)}")

        if terminal.confirm("Return to main menu? (Y/N):"):
            return


def render_manage_budget(terminal: TerminalInterface, flow: ExpenseFlow) -> None:
    settings = get_settings().app
    correlation_id = create_correlation_id()

    terminal.show_header("MANAGE BUDGET")
    terminal.show_message(f"BUDGET: {format_amount(flow.ledger.budget)}")
    terminal.show_message(f"REMAINING BUDGET: {format_amount(flow.remaining_budget())}")

    if not terminal.confirm("Modify existing budget? (Y/N):"):
        terminal.show_message("> Redirecting to the main menu ...")
        return

    try:
        new_budget = ask_until_valid(
            terminal,
            "> Input the amount of the new budget:",
            lambda raw: flow.set_budget(raw, correlation_id),
            settings,
        )
    except OperationCancelled:
        flow.cancel("budget", correlation_id)
        return

    terminal.show_message("> Successfully changed the budget!")
    terminal.show_message(f"\nCURRENT BUDGET: {format_amount(new_budget)}")
    terminal.show_message(f"REMAINING BUDGET: {format_amount(flow.remaining_budget())}")
