"""Configuration package."""

from finance_tracker.config.settings import (
    AppSettings,
    AuthSettings,
    LogoutPolicy,
    MissingUpdatePolicy,
    Settings,
    StorageBackend,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "AuthSettings",
    "LogoutPolicy",
    "MissingUpdatePolicy",
    "Settings",
    "StorageBackend",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
