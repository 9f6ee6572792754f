"""
Configuration Management for Expense Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every tunable the session flows rely on (cancel sentinel, weekly window,
edit budget rule, logging destination) is validated once at startup.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Minimum level for local structured logs"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="File receiving structured logs. Unset keeps logs off the terminal"
    )

    # Session behaviour
    cancel_sentinel: str = Field(
        default="x",
        min_length=1,
        description="Input that cancels the operation in progress (case-insensitive)"
    )
    weekly_window_days: int = Field(
        default=7,
        ge=1,
        le=366,
        description="Days back from today covered by the weekly view (inclusive)"
    )
    edit_check_includes_current_amount: bool = Field(
        default=True,
        description=(
            "When editing an amount, add the record's current amount back to the "
            "remaining budget before checking the new value"
        )
    )

    # Audit
    audit_history_limit: int = Field(
        default=1000,
        ge=10,
        description="Maximum audit events kept in memory"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept level names the logging module knows."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator('cancel_sentinel')
    @classmethod
    def normalize_sentinel(cls, v: str) -> str:
        return v.strip().lower()

    def is_cancel(self, raw: str) -> bool:
        """Check whether raw input is the cancel sentinel."""
        return raw.strip().lower() == self.cancel_sentinel


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def configure_logging(app_settings: Optional[AppSettings] = None) -> None:
    """
    Route stdlib logging (and therefore structlog) for a console session.

    With no log file configured, records go to a NullHandler so they never
    interleave with the interactive prompts.
    """
    app_settings = app_settings or get_settings().app
    root = logging.getLogger()
    root.setLevel("DEBUG" if app_settings.debug_mode else app_settings.log_level)

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    if app_settings.log_file:
        handler = logging.FileHandler(app_settings.log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.NullHandler()
    root.addHandler(handler)
