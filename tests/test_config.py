"""Tests for configuration and logging setup."""

import logging

import pytest
from pydantic import ValidationError

from expense_tracker.config import AppSettings, configure_logging, get_settings


class TestAppSettings:
    """Tests for AppSettings."""

    def test_defaults(self):
        settings = AppSettings(_env_file=None)
        assert settings.cancel_sentinel == "x"
        assert settings.weekly_window_days == 7
        assert settings.edit_check_includes_current_amount is True
        assert settings.log_level == "WARNING"
        assert settings.log_file is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("WEEKLY_WINDOW_DAYS", "14")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        settings = AppSettings(_env_file=None)
        assert settings.weekly_window_days == 14
        assert settings.log_level == "DEBUG"

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValidationError):
            AppSettings(_env_file=None, log_level="LOUD")

    def test_sentinel_is_normalized(self):
        settings = AppSettings(_env_file=None, cancel_sentinel=" Q ")
        assert settings.cancel_sentinel == "q"

    @pytest.mark.parametrize("raw", ["x", "X", " x "])
    def test_is_cancel(self, raw):
        """Test case-insensitive sentinel matching."""
        assert AppSettings(_env_file=None).is_cancel(raw) is True

    @pytest.mark.parametrize("raw", ["", "xx", "0", "exit"])
    def test_is_not_cancel(self, raw):
        assert AppSettings(_env_file=None).is_cancel(raw) is False

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.mark.usefixtures("restore_root_logger")
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_without_log_file_uses_null_handler(self):
        configure_logging(AppSettings(_env_file=None))
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.NullHandler)

    def test_log_file(self, tmp_path):
        """Test that records are written to the configured file."""
        log_file = tmp_path / "tracker.log"
        configure_logging(AppSettings(_env_file=None, log_file=str(log_file), log_level="INFO"))

        logging.getLogger("expense_tracker.test").info("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()
            handler.close()

        assert "hello" in log_file.read_text(encoding="utf-8")
        assert logging.getLogger().level == logging.INFO

    def test_reconfigure_closes_previous_file_handler(self, tmp_path):
        configure_logging(AppSettings(_env_file=None, log_file=str(tmp_path / "a.log")))
        (first,) = logging.getLogger().handlers
        assert isinstance(first, logging.FileHandler)

        configure_logging(AppSettings(_env_file=None))

        assert first not in logging.getLogger().handlers
        assert first.stream is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
