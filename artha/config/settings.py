"""
Configuration Management for Artha Sync

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
This makes it easy to see what external dependencies exist and
ensures all required configuration is validated at startup.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from artha.models.backup import SECRET_SETTING_KEYS


class GoogleSheetsSettings(BaseSettings):
    """Google Sheets remote backup store configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GOOGLE_SHEETS_",
        extra="ignore"
    )

    credentials_path: str = Field(
        ...,
        description="Path to Google service account credentials JSON"
    )
    spreadsheet_id: str = Field(
        ...,
        description="ID of the Google Sheets spreadsheet to use"
    )
    backups_sheet_name: str = Field(
        default="Backups",
        description="Name of the sheet holding one backup row per user"
    )

    @field_validator('credentials_path')
    @classmethod
    def validate_credentials_path(cls, v: str) -> str:
        """Warn if credentials file doesn't exist (but don't fail - might be mounted later)."""
        if not Path(v).exists():
            import warnings
            warnings.warn(
                f"Google credentials file not found at {v}. "
                "Make sure it exists before running a backup."
            )
        return v


class LocalStoreSettings(BaseSettings):
    """Local SQLite store configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ARTHA_LOCAL_",
        extra="ignore"
    )

    database_path: str = Field(
        default="./data/artha.db",
        description="Path of the SQLite database file"
    )


class SyncSettings(BaseSettings):
    """Backup/restore engine configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ARTHA_SYNC_",
        extra="ignore"
    )

    remote_backend: str = Field(
        default="google_sheets",
        description="Remote backup store: 'google_sheets' or 'memory'"
    )
    device_label: str = Field(
        default="Artha Python Client",
        max_length=100,
        description="Free-text label written into every backup"
    )
    settings_keys: str = Field(
        default="@theme_preference,@pin_enabled,@notification_settings",
        description="Comma-separated setting keys included in a backup"
    )

    @field_validator('remote_backend')
    @classmethod
    def validate_remote_backend(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in ("google_sheets", "memory"):
            raise ValueError(f"Unknown remote backend: {v}")
        return v

    @field_validator('settings_keys')
    @classmethod
    def validate_settings_keys(cls, v: str) -> str:
        """Secrets must never leave the device, even if misconfigured."""
        keys = [key.strip() for key in v.split(",") if key.strip()]
        secret = [key for key in keys if key in SECRET_SETTING_KEYS]
        if secret:
            raise ValueError(
                f"Secret setting keys cannot be backed up: {', '.join(secret)}"
            )
        return v

    @property
    def settings_keys_list(self) -> list[str]:
        """Get backed-up setting keys as a list."""
        return [key.strip() for key in self.settings_keys.split(",") if key.strip()]


class NotificationSettings(BaseSettings):
    """In-app notification formatting configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ARTHA_NOTIFY_",
        extra="ignore"
    )

    locale: str = Field(
        default="id-ID",
        description="Locale used to group digits in amounts"
    )
    currency_symbol: str = Field(
        default="Rp",
        max_length=5,
        description="Symbol prefixed to formatted amounts"
    )


class IdentitySettings(BaseSettings):
    """
    Optional pre-configured identity.

    Useful for headless runs where no sign-in screen exists.
    """

    model_config = SettingsConfigDict(
        env_prefix="ARTHA_IDENTITY_",
        extra="ignore"
    )

    user_id: Optional[str] = Field(
        default=None,
        description="Signed-in user id"
    )
    email: Optional[str] = Field(
        default=None,
        description="Signed-in user email"
    )


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

    # Note: These are loaded lazily to allow partial configuration

    @property
    def google_sheets(self) -> GoogleSheetsSettings:
        return GoogleSheetsSettings()

    @property
    def local_store(self) -> LocalStoreSettings:
        return LocalStoreSettings()

    @property
    def sync(self) -> SyncSettings:
        return SyncSettings()

    @property
    def notifications(self) -> NotificationSettings:
        return NotificationSettings()

    @property
    def identity(self) -> IdentitySettings:
        return IdentitySettings()

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


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    sections = {
        "google_sheets": lambda: settings.google_sheets,
        "local_store": lambda: settings.local_store,
        "sync": lambda: settings.sync,
        "notifications": lambda: settings.notifications,
        "identity": lambda: settings.identity,
        "app": lambda: settings.app,
    }

    for name, load in sections.items():
        try:
            load()
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
