"""
Application Wiring for Artha Sync

Builds the engine and the notification triggers from configuration.

DESIGN DECISION: Components receive their collaborators explicitly.
There is no global "current user" or "current store"; the factory is
the only place that decides which implementations are used.
"""

from typing import Optional

import structlog

from artha.audit import AuditLogger
from artha.config import Settings, get_settings
from artha.models.backup import UserIdentity
from artha.notifications import NotificationTriggerService
from artha.services.identity import IdentityProviderInterface, SessionIdentityProvider
from artha.services.storage import (
    GoogleSheetsBackupStore,
    GoogleSheetsClient,
    InMemoryBackupStore,
    LocalStoreInterface,
    RemoteBackupStoreInterface,
    SQLiteLocalStore,
)
from artha.sync import BackupSyncEngine


logger = structlog.get_logger(__name__)


def create_remote_store(settings: Settings) -> RemoteBackupStoreInterface:
    """Pick the remote backup store named in configuration."""
    backend = settings.sync.remote_backend
    if backend == "memory":
        return InMemoryBackupStore()

    try:
        sheets_settings = settings.google_sheets
    except Exception as e:
        # Missing Sheets configuration: keep working offline
        logger.warning("remote_store_unconfigured", backend=backend, error=str(e))
        return InMemoryBackupStore()
    return GoogleSheetsBackupStore(GoogleSheetsClient(sheets_settings))


def create_identity_provider(settings: Settings) -> SessionIdentityProvider:
    """Session identity, signed in up front when an identity is configured."""
    configured = settings.identity
    if configured.user_id:
        return SessionIdentityProvider(
            UserIdentity(id=configured.user_id, email=configured.email)
        )
    return SessionIdentityProvider()


def create_app_components(
    settings: Optional[Settings] = None,
    local_store: Optional[LocalStoreInterface] = None,
    remote_store: Optional[RemoteBackupStoreInterface] = None,
    identity: Optional[IdentityProviderInterface] = None,
) -> tuple[BackupSyncEngine, NotificationTriggerService, LocalStoreInterface]:
    """
    Factory function to create all application components.

    Any collaborator passed in is used as-is; the rest come from settings.

    Returns:
        (sync_engine, notification_triggers, local_store)
    """
    settings = settings or get_settings()
    audit_logger = AuditLogger()

    if local_store is None:
        local_store = SQLiteLocalStore(settings.local_store.database_path)
    if remote_store is None:
        remote_store = create_remote_store(settings)
    if identity is None:
        identity = create_identity_provider(settings)

    sync_engine = BackupSyncEngine(
        local_store=local_store,
        remote_store=remote_store,
        identity=identity,
        settings=settings.sync,
        audit_logger=audit_logger,
    )
    notification_triggers = NotificationTriggerService(
        local_store=local_store,
        settings=settings.notifications,
        audit_logger=audit_logger,
    )

    logger.info(
        "app_components_created",
        remote_backend=type(remote_store).__name__,
        local_store=type(local_store).__name__,
    )
    return sync_engine, notification_triggers, local_store
