"""Backup/restore sync package."""

from artha.sync.engine import BackupSyncEngine
from artha.sync.errors import (
    IncompatibleBackupVersionError,
    LocalPersistFailureError,
    MalformedPayloadError,
    NoBackupFoundError,
    NotAuthenticatedError,
    RemoteUnavailableError,
    SyncError,
)

__all__ = [
    "BackupSyncEngine",
    "IncompatibleBackupVersionError",
    "LocalPersistFailureError",
    "MalformedPayloadError",
    "NoBackupFoundError",
    "NotAuthenticatedError",
    "RemoteUnavailableError",
    "SyncError",
]
