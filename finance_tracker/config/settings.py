"""
Configuration Management for Finance Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Policies that the core would otherwise hardcode (who is an admin, what
logout does to stored data, how an unknown update is treated) live here
so they can be changed without touching business logic.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageBackend(str, Enum):
    """Available key-value storage backends."""
    FILE = "file"
    MEMORY = "memory"


class LogoutPolicy(str, Enum):
    """What happens to a user's stored transactions on logout."""
    RETAIN = "retain"  # Data stays for the next login
    ERASE = "erase"    # Data is deleted together with the session


class MissingUpdatePolicy(str, Enum):
    """How an update for an unknown transaction id is treated."""
    IGNORE = "ignore"  # Silent no-op
    RAISE = "raise"    # TransactionNotFoundError


class StorageSettings(BaseSettings):
    """Local key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_STORAGE_",
        extra="ignore"
    )

    backend: StorageBackend = Field(
        default=StorageBackend.FILE,
        description="Storage backend to use"
    )
    data_dir: Path = Field(
        default=Path(".finance_data"),
        description="Directory holding one JSON file per storage key"
    )
    max_audit_events: int = Field(
        default=500,
        ge=0,
        le=10000,
        description="How many audit events to keep in the persisted audit log"
    )


class AuthSettings(BaseSettings):
    """Mock authentication configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FINANCE_AUTH_",
        extra="ignore"
    )

    admin_emails: str = Field(
        default="admin@example.com",
        description="Comma-separated list of emails that sign in as admin"
    )
    identity_key: str = Field(
        default="financeUser",
        min_length=1,
        description="Storage key holding the signed-in identity"
    )

    @field_validator('admin_emails')
    @classmethod
    def normalize_admin_emails(cls, v: str) -> str:
        """Lowercase and strip each configured email."""
        return ",".join(
            email.strip().lower() for email in v.split(",") if email.strip()
        )

    @property
    def admin_emails_list(self) -> list[str]:
        """Get admin emails as a list."""
        return [email for email in self.admin_emails.split(",") if email]


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

    # Display
    currency_symbol: str = Field(
        default="₹",
        min_length=1,
        max_length=5,
        description="Currency symbol used when rendering amounts"
    )

    # Store policies
    logout_policy: LogoutPolicy = Field(
        default=LogoutPolicy.RETAIN,
        description="Keep or erase a user's transactions on logout"
    )
    missing_update_policy: MissingUpdatePolicy = Field(
        default=MissingUpdatePolicy.IGNORE,
        description="Ignore or reject updates for unknown transaction ids"
    )

    # Loan calculator
    allow_zero_rate_loans: bool = Field(
        default=False,
        description="Treat a 0% rate as an interest-free loan instead of a degenerate input"
    )
    default_loan_amount: float = Field(
        default=100000.0,
        ge=0,
        description="Initial principal shown in the loan calculator"
    )
    default_interest_rate: float = Field(
        default=8.0,
        ge=0,
        le=100,
        description="Initial annual interest rate (%) shown in the loan calculator"
    )
    default_loan_term_years: float = Field(
        default=5.0,
        ge=0,
        le=50,
        description="Initial loan term (years) shown in the loan calculator"
    )


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
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def auth(self) -> AuthSettings:
        return AuthSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    "<name>_error" entry for every section that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "auth", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
