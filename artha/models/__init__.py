"""
Data Models Package

This package contains all Pydantic models used by Artha Sync.
Everything crossing a storage or service boundary conforms to these schemas.
"""

from artha.models.backup import (
    NO_BACKUP_FOUND_MESSAGE,
    PAYLOAD_FORMAT_VERSION,
    SECRET_SETTING_KEYS,
    SUPPORTED_PAYLOAD_MAJOR_VERSIONS,
    BackupResult,
    DomainSnapshot,
    RemoteBackupDocument,
    RestoreResult,
    SettingsPayload,
    UserIdentity,
)
from artha.models.notification import (
    Notification,
    NotificationDraft,
    NotificationDraftBuilder,
    NotificationPriority,
    NotificationType,
    TransactionType,
    classify_budget_priority,
)
from artha.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Backup models
    "NO_BACKUP_FOUND_MESSAGE",
    "PAYLOAD_FORMAT_VERSION",
    "SECRET_SETTING_KEYS",
    "SUPPORTED_PAYLOAD_MAJOR_VERSIONS",
    "BackupResult",
    "DomainSnapshot",
    "RemoteBackupDocument",
    "RestoreResult",
    "SettingsPayload",
    "UserIdentity",
    # Notification models
    "Notification",
    "NotificationDraft",
    "NotificationDraftBuilder",
    "NotificationPriority",
    "NotificationType",
    "TransactionType",
    "classify_budget_priority",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
