"""
Backup Models for Artha Sync

These models define what crosses the boundary between the device and the
remote backup store.

DESIGN DECISION: The domain snapshot is OPAQUE to the sync layer.
The local store owns its shape; the engine only serializes and
deserializes it. This lets the local data model evolve (new tables,
new columns) without touching sync logic.

DESIGN DECISION: The remote document is written as a whole.
There is no field-level merge, so the newest backup always wins.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# Payload format tag written into every backup.
PAYLOAD_FORMAT_VERSION = "2.0.0"

# Major versions of the payload format this build can restore.
SUPPORTED_PAYLOAD_MAJOR_VERSIONS = frozenset({2})

# CRITICAL: Credential material stays on the device.
SECRET_SETTING_KEYS = frozenset({
    "@pin_hash",
    "@pin_salt",
})

NO_BACKUP_FOUND_MESSAGE = "No backup found for this account"

# A settings payload maps a setting key to any JSON-serializable value.
SettingsPayload = dict[str, Any]


class UserIdentity(BaseModel):
    """The signed-in user, as reported by the identity provider."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Stable user id; also the remote document key"
    )
    email: Optional[str] = Field(
        default=None,
        description="Email at sign-in time"
    )


class DomainSnapshot(BaseModel):
    """
    Full-state copy of every locally owned domain record.

    The sync engine never reads the keys of ``data``.
    """

    data: dict[str, Any] = Field(
        default_factory=dict,
        description="JSON-compatible aggregate produced by the local store"
    )


class RemoteBackupDocument(BaseModel):
    """
    The single backup document kept per user id.

    Field aliases match the stored layout (camelCase), so documents written
    by older clients remain readable.
    """
    model_config = ConfigDict(populate_by_name=True)

    backup_data: Optional[str] = Field(
        default=None,
        alias="backupData",
        description="Serialized DomainSnapshot"
    )
    settings_data: Optional[str] = Field(
        default=None,
        alias="settingsData",
        description="Serialized SettingsPayload"
    )
    updated_at: Optional[datetime] = Field(
        default=None,
        alias="updatedAt",
        description="Assigned by the remote store on write; may be unset"
    )
    device: str = Field(
        default="",
        description="Free-text client label"
    )
    email: Optional[str] = Field(
        default=None,
        description="Identity email at backup time"
    )
    version: str = Field(
        default="",
        description="Payload format tag"
    )


class BackupResult(BaseModel):
    """
    Outcome of a backup or restore call.

    The engine never raises; every failure ends up here.
    """

    success: bool
    timestamp: Optional[datetime] = None
    error: Optional[str] = None
    error_code: Optional[str] = Field(
        default=None,
        description="Name of the failure class, for callers that branch on it"
    )


class RestoreResult(BackupResult):
    """
    Restore outcome with explicit per-phase reporting.

    A restore is not transactional: when the settings phase fails after the
    snapshot was imported, ``snapshot_restored`` is True while ``success``
    is False.
    """

    snapshot_restored: bool = False
    settings_restored: bool = False
