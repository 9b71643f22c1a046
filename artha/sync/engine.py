"""
Backup/Restore Sync Engine

Copies everything the user owns on this device into one remote document,
and brings it back on a new device.

Flow (backup):
1. Check a user is signed in (no I/O otherwise)
2. Capture the domain snapshot from the local store
3. Capture the backed-up settings keys (concurrently)
4. Serialize both halves and write the document (full replace)

Flow (restore):
1. Check a user is signed in
2. Read the document; stop if there is none
3. Check the payload version and parse both halves
4. Import the snapshot (DESTRUCTIVE: replaces local domain data)
5. Write the settings back (concurrently)

DESIGN DECISION: Last writer wins. The remote document carries no
version token and is never merged; each backup replaces it entirely.

DESIGN DECISION: Nothing escapes. Every failure, expected or not, is
returned as a result value with ``error`` and ``error_code``.

KNOWN LIMITATIONS:
- Snapshot and settings capture are two separate reads. A local write
  landing between them is reflected in one half only.
- Restore is not transactional across its two halves. A settings failure
  after the snapshot import leaves the snapshot applied; RestoreResult
  reports which halves were applied.
- Settings keys are read and written with fail-fast semantics: the first
  failing key fails the phase, and keys already in flight are not
  cancelled.
"""

import asyncio
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

import structlog

from artha.audit import AuditLogger, create_correlation_id
from artha.config import get_settings
from artha.config.settings import SyncSettings
from artha.models.backup import (
    NO_BACKUP_FOUND_MESSAGE,
    PAYLOAD_FORMAT_VERSION,
    SECRET_SETTING_KEYS,
    BackupResult,
    DomainSnapshot,
    RemoteBackupDocument,
    RestoreResult,
    SettingsPayload,
    UserIdentity,
)
from artha.services.identity import IdentityProviderInterface
from artha.services.storage import LocalStoreInterface, RemoteBackupStoreInterface
from artha.sync.errors import (
    LocalPersistFailureError,
    NoBackupFoundError,
    NotAuthenticatedError,
    RemoteUnavailableError,
    SyncError,
)
from artha.sync.payload import (
    decode_setting_value,
    deserialize_settings,
    deserialize_snapshot,
    encode_setting_value,
    ensure_compatible_version,
    serialize_settings,
    serialize_snapshot,
)


logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BackupSyncEngine:
    """
    Offline-first backup and restore of local data to the remote store.

    All collaborators are injected, so the engine has no global state.
    """

    def __init__(
        self,
        local_store: LocalStoreInterface,
        remote_store: RemoteBackupStoreInterface,
        identity: IdentityProviderInterface,
        settings: Optional[SyncSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._local_store = local_store
        self._remote_store = remote_store
        self._identity = identity
        self._settings = settings or get_settings().sync
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def settings_keys(self) -> list[str]:
        """Setting keys captured by a backup. Secret keys are never included."""
        return [
            key for key in self._settings.settings_keys_list
            if key not in SECRET_SETTING_KEYS
        ]

    # =========================================================================
    # BACKUP
    # =========================================================================

    async def backup(self) -> BackupResult:
        """
        Back up local data and settings, replacing the remote document.

        Returns:
            BackupResult with the write time on success, or the error
        """
        user = self._identity.current_user()
        if user is None:
            return await self._failure("backup", NotAuthenticatedError(), BackupResult)

        correlation_id = create_correlation_id()
        await self._audit_logger.log_backup_started(user.id, correlation_id)

        try:
            return await self._run_backup(user, correlation_id)
        except SyncError as e:
            return await self._failure(
                "backup", e, BackupResult, user_id=user.id, correlation_id=correlation_id
            )
        except Exception as e:
            logger.exception("backup_unexpected_error", user_id=user.id)
            await self._audit_logger.log_error(
                error_type=type(e).__name__,
                error_message=str(e),
                details={"operation": "backup", "user_id": user.id},
                correlation_id=correlation_id,
            )
            return await self._failure(
                "backup", SyncError(str(e)), BackupResult,
                user_id=user.id, correlation_id=correlation_id,
            )

    async def _run_backup(self, user: UserIdentity, correlation_id: UUID) -> BackupResult:
        snapshot = await self._capture_snapshot()
        settings = await self._capture_settings()

        backup_data = serialize_snapshot(snapshot)
        document = RemoteBackupDocument(
            backup_data=backup_data,
            settings_data=serialize_settings(settings),
            device=self._settings.device_label,
            email=user.email,
            version=PAYLOAD_FORMAT_VERSION,
        )

        try:
            stored = await self._remote_store.set_document(user.id, document)
        except Exception as e:
            raise RemoteUnavailableError(f"Backup upload failed: {e}")

        timestamp = stored.updated_at if stored and stored.updated_at else _utcnow()

        await self._audit_logger.log_backup_completed(
            user_id=user.id,
            correlation_id=correlation_id,
            snapshot_bytes=len(backup_data.encode("utf-8")),
            settings_keys=sorted(settings),
        )
        return BackupResult(success=True, timestamp=timestamp)

    async def _capture_snapshot(self) -> DomainSnapshot:
        try:
            return await self._local_store.export_snapshot()
        except Exception as e:
            raise SyncError(f"Could not read local data: {e}")

    async def _capture_settings(self) -> SettingsPayload:
        """Read all backed-up keys concurrently; absent keys are left out."""
        keys = self.settings_keys
        try:
            raw_values = await asyncio.gather(
                *(self._local_store.get(key) for key in keys)
            )
        except Exception as e:
            raise SyncError(f"Could not read settings: {e}")

        payload: SettingsPayload = {}
        for key, raw in zip(keys, raw_values):
            # JSON null is a stored value; only missing keys are skipped
            if raw:
                payload[key] = decode_setting_value(raw)
        return payload

    # =========================================================================
    # RESTORE
    # =========================================================================

    async def restore(self) -> RestoreResult:
        """
        Restore local data and settings from the remote document.

        DESTRUCTIVE: local domain data is replaced, not merged.

        Returns:
            RestoreResult with the backup's timestamp on success, or the
            error plus which halves were applied before it happened
        """
        user = self._identity.current_user()
        if user is None:
            return await self._failure("restore", NotAuthenticatedError(), RestoreResult)

        correlation_id = create_correlation_id()
        await self._audit_logger.log_restore_started(user.id, correlation_id)

        progress = RestoreResult(success=False)
        try:
            return await self._run_restore(user, correlation_id, progress)
        except SyncError as e:
            return await self._failure(
                "restore", e, RestoreResult,
                user_id=user.id, correlation_id=correlation_id, progress=progress,
            )
        except Exception as e:
            logger.exception("restore_unexpected_error", user_id=user.id)
            await self._audit_logger.log_error(
                error_type=type(e).__name__,
                error_message=str(e),
                details={"operation": "restore", "user_id": user.id},
                correlation_id=correlation_id,
            )
            return await self._failure(
                "restore", SyncError(str(e)), RestoreResult,
                user_id=user.id, correlation_id=correlation_id, progress=progress,
            )

    async def _run_restore(
        self,
        user: UserIdentity,
        correlation_id: UUID,
        progress: RestoreResult,
    ) -> RestoreResult:
        document = await self._read_document(user.id)
        if document is None:
            raise NoBackupFoundError(NO_BACKUP_FOUND_MESSAGE)

        # Validate and parse everything before the first local write
        ensure_compatible_version(document.version)
        snapshot = deserialize_snapshot(document.backup_data) if document.backup_data else None
        settings = deserialize_settings(document.settings_data) if document.settings_data else None

        if snapshot is not None:
            try:
                await self._local_store.import_snapshot(snapshot)
            except Exception as e:
                raise LocalPersistFailureError(f"Could not restore local data: {e}")
            progress.snapshot_restored = True

        if settings is not None:
            await self._apply_settings(settings)
            progress.settings_restored = True

        await self._audit_logger.log_restore_completed(
            user_id=user.id,
            correlation_id=correlation_id,
            version=document.version,
            settings_keys=sorted(settings or {}),
        )
        return progress.model_copy(update={
            "success": True,
            "timestamp": document.updated_at or _utcnow(),
        })

    async def _apply_settings(self, settings: SettingsPayload) -> None:
        """Write settings back concurrently; no ordering between keys."""
        try:
            await asyncio.gather(*(
                self._local_store.set(key, encode_setting_value(value))
                for key, value in settings.items()
            ))
        except Exception as e:
            raise LocalPersistFailureError(f"Could not restore settings: {e}")

    # =========================================================================
    # INFO
    # =========================================================================

    async def get_last_backup_info(self) -> Optional[datetime]:
        """
        When the signed-in user's backup was last written.

        For display only: returns None when signed out, when there is no
        backup, when the timestamp is unset, or when the lookup fails.
        """
        user = self._identity.current_user()
        if user is None:
            return None

        try:
            document = await self._remote_store.get_document(user.id)
        except Exception as e:
            logger.warning("last_backup_info_unavailable", user_id=user.id, error=str(e))
            return None

        return document.updated_at if document else None

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def _read_document(self, user_id: str) -> Optional[RemoteBackupDocument]:
        try:
            return await self._remote_store.get_document(user_id)
        except Exception as e:
            raise RemoteUnavailableError(f"Could not download backup: {e}")

    async def _failure(
        self,
        operation: str,
        error: SyncError,
        result_type: type,
        user_id: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
        progress: Optional[RestoreResult] = None,
    ):
        """Log a failed call and build its result value."""
        details = {}
        if progress is not None:
            details = {
                "snapshot_restored": progress.snapshot_restored,
                "settings_restored": progress.settings_restored,
            }
        await self._audit_logger.log_sync_failed(
            operation=operation,
            error_code=error.code,
            error_message=str(error),
            user_id=user_id,
            correlation_id=correlation_id,
            details=details,
        )

        fields = {"success": False, "error": str(error), "error_code": error.code}
        if progress is not None:
            return progress.model_copy(update=fields)
        return result_type(**fields)
