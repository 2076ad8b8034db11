"""Configuration package."""

from expense_ledger.config.settings import (
    AppSettings,
    LedgerSettings,
    LoadErrorPolicy,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "LedgerSettings",
    "LoadErrorPolicy",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
