"""Configuration package."""

from expense_tracker.config.settings import (
    AppSettings,
    Settings,
    configure_logging,
    get_settings,
)

__all__ = [
    "AppSettings",
    "Settings",
    "configure_logging",
    "get_settings",
]
