"""Configuration package."""

from artha.config.settings import (
    AppSettings,
    GoogleSheetsSettings,
    IdentitySettings,
    LocalStoreSettings,
    NotificationSettings,
    Settings,
    SyncSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "GoogleSheetsSettings",
    "IdentitySettings",
    "LocalStoreSettings",
    "NotificationSettings",
    "Settings",
    "SyncSettings",
    "get_settings",
    "validate_all_settings",
]
