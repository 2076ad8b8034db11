"""Tests for environment-driven configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from expense_ledger.config import (
    AppSettings,
    LedgerSettings,
    LoadErrorPolicy,
    get_settings,
    validate_all_settings,
)


class TestLedgerSettings:
    """Tests for LEDGER_* settings."""

    def test_defaults(self):
        settings = LedgerSettings()
        assert settings.data_file == Path("expense_data.csv")
        assert settings.file_encoding == "utf-8"
        assert settings.on_load_error == LoadErrorPolicy.ABORT
        assert settings.currency_symbol == "₹"

    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LEDGER_DATA_FILE", str(tmp_path / "books.csv"))
        monkeypatch.setenv("LEDGER_CURRENCY_SYMBOL", "$")
        settings = LedgerSettings()
        assert settings.data_file == tmp_path / "books.csv"
        assert settings.currency_symbol == "$"

    @pytest.mark.parametrize("raw", ["skip", "SKIP", " Skip "])
    def test_load_policy_normalized(self, monkeypatch, raw):
        monkeypatch.setenv("LEDGER_ON_LOAD_ERROR", raw)
        assert LedgerSettings().on_load_error == LoadErrorPolicy.SKIP

    def test_unknown_load_policy(self, monkeypatch):
        monkeypatch.setenv("LEDGER_ON_LOAD_ERROR", "ignore")
        with pytest.raises(ValidationError):
            LedgerSettings()

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("LEDGER_DATA_FILE=from_env_file.csv\n", encoding="utf-8")
        assert LedgerSettings().data_file == Path("from_env_file.csv")


class TestAppSettings:
    """Tests for application-level settings."""

    def test_log_level_uppercased(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "info")
        assert AppSettings().log_level == "INFO"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError):
            AppSettings()

    def test_debug_mode_forces_debug(self, monkeypatch):
        monkeypatch.setenv("DEBUG_MODE", "true")
        assert AppSettings().effective_log_level == "DEBUG"

    def test_effective_level_default(self):
        assert AppSettings().effective_log_level == "WARNING"


class TestGetSettings:
    """Tests for the cached accessor."""

    def test_cached(self):
        assert get_settings() is get_settings()

    def test_sections(self):
        settings = get_settings()
        assert isinstance(settings.ledger, LedgerSettings)
        assert isinstance(settings.app, AppSettings)

    def test_validate_all_settings_ok(self):
        assert validate_all_settings() == {"ledger": True, "app": True}

    def test_validate_all_settings_reports_errors(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        results = validate_all_settings()
        assert results["ledger"] is True
        assert results["app"] is False
        assert "app_error" in results


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
