"""
Console Frontend for Expense Tracker

Run with:  python app/main.py

DESIGN PRINCIPLES:
1. One registry and one audit trail per run
2. Logs never interleave with the prompts
3. Ctrl+C / Ctrl+D end the session cleanly

All data lives in memory and is gone when the program exits.
"""

import sys

import structlog
from rich.console import Console

from expense_tracker.config import configure_logging, get_settings
from expense_tracker.console import run_start_menu
from expense_tracker.orchestrator import create_app_components
from expense_tracker.services.terminal import RichTerminal


logger = structlog.get_logger("expense_tracker.app")


def get_components():
    """Create application components for this run."""
    configure_logging(get_settings().app)
    account_flow, audit_logger = create_app_components()
    return account_flow, audit_logger


def main() -> int:
    """Main application entry point."""
    account_flow, audit_logger = get_components()
    console = Console()
    terminal = RichTerminal(console)

    logger.info("session_started")
    try:
        run_start_menu(terminal, account_flow)
    except KeyboardInterrupt:
        console.print("\nGoodbye!")
        logger.info("session_interrupted")
        return 130
    except EOFError:
        console.print("\nGoodbye!")
        logger.info("session_input_closed")
        return 0
    except Exception as e:
        audit_logger.log_error(type(e).__name__, str(e))
        raise

    logger.info("session_finished")
    return 0


if __name__ == "__main__":
    sys.exit(main())
