"""
Audit Models for Artha Sync

Every backup, restore and notification delivery is recorded as an
audit event. This provides:
1. Traceability of what was sent to and read from the cloud
2. Debugging information when a restore goes wrong
3. Visibility into notifications that could not be stored

DESIGN DECISION: Audit events never carry snapshot contents or
setting values, only sizes, keys and outcomes.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.
    """
    # Backup
    BACKUP_STARTED = "backup_started"
    BACKUP_COMPLETED = "backup_completed"
    BACKUP_FAILED = "backup_failed"

    # Restore
    RESTORE_STARTED = "restore_started"
    RESTORE_COMPLETED = "restore_completed"
    RESTORE_FAILED = "restore_failed"

    # Notifications
    NOTIFICATION_CREATED = "notification_created"
    NOTIFICATION_FAILED = "notification_failed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Who and what
    user_id: Optional[str] = Field(
        default=None,
        description="User id the operation ran for"
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate the events of one backup or restore call"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "user_id": self.user_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.backup_completed(user_id, correlation_id, ...)
    """

    @staticmethod
    def backup_started(user_id: str, correlation_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BACKUP_STARTED,
            user_id=user_id,
            correlation_id=correlation_id,
            description="Backup started",
        )

    @staticmethod
    def backup_completed(
        user_id: str,
        correlation_id: UUID,
        snapshot_bytes: int,
        settings_keys: list[str],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BACKUP_COMPLETED,
            user_id=user_id,
            correlation_id=correlation_id,
            description=f"Backup written ({snapshot_bytes} bytes of domain data)",
            details={
                "snapshot_bytes": snapshot_bytes,
                "settings_keys": settings_keys,
            },
        )

    @staticmethod
    def restore_started(user_id: str, correlation_id: UUID) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RESTORE_STARTED,
            user_id=user_id,
            correlation_id=correlation_id,
            description="Restore started",
        )

    @staticmethod
    def restore_completed(
        user_id: str,
        correlation_id: UUID,
        version: str,
        settings_keys: list[str],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RESTORE_COMPLETED,
            user_id=user_id,
            correlation_id=correlation_id,
            description="Restore completed",
            details={
                "version": version,
                "settings_keys": settings_keys,
            },
        )

    @staticmethod
    def sync_failed(
        operation: str,
        error_code: str,
        error_message: str,
        user_id: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        event_type = (
            AuditEventType.BACKUP_FAILED
            if operation == "backup"
            else AuditEventType.RESTORE_FAILED
        )
        return AuditEvent(
            event_type=event_type,
            severity=AuditSeverity.ERROR,
            user_id=user_id,
            correlation_id=correlation_id,
            description=f"{operation.capitalize()} failed: {error_code}",
            error_code=error_code,
            error_message=error_message,
            details=details or {},
        )

    @staticmethod
    def notification_created(
        notification_id: str,
        notification_type: str,
        priority: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NOTIFICATION_CREATED,
            severity=AuditSeverity.DEBUG,
            description=f"Notification stored: {notification_type}",
            details={
                "notification_id": notification_id,
                "notification_type": notification_type,
                "priority": priority,
            },
        )

    @staticmethod
    def notification_failed(
        notification_type: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.NOTIFICATION_FAILED,
            severity=AuditSeverity.WARNING,
            description=f"Notification dropped: {notification_type}",
            error_code="LocalPersistFailure",
            error_message=error_message,
            details={
                "notification_type": notification_type,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
