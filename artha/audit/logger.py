"""
Audit Logger

DESIGN DECISION: Every backup, restore and notification delivery is logged.
This provides:
1. Traceability of what left the device and what came back
2. Debugging capability for partial restores

The audit logger:
- Is async so callers can await it inline with their I/O
- Never raises (a broken log must not break a backup)
- Supports correlation IDs to trace the events of one call
"""

from typing import Optional
from uuid import UUID, uuid4

import structlog

from artha.models.audit import AuditEvent, AuditEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Writes audit events to the structured local log.
    """

    def __init__(self):
        self._logger = structlog.get_logger("artha.audit")

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns False if the event could not be written.
        """
        log_dict = event.to_log_dict()

        try:
            if event.severity.value in ("error", "critical"):
                self._logger.error("audit_event", **log_dict)
            elif event.severity.value == "warning":
                self._logger.warning("audit_event", **log_dict)
            elif event.severity.value == "debug":
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception:
            return False

        return True

    async def log_backup_started(self, user_id: str, correlation_id: UUID) -> None:
        """Log start of a backup call."""
        await self.log(AuditEventBuilder.backup_started(user_id, correlation_id))

    async def log_backup_completed(
        self,
        user_id: str,
        correlation_id: UUID,
        snapshot_bytes: int,
        settings_keys: list[str],
    ) -> None:
        """Log a successful remote write."""
        event = AuditEventBuilder.backup_completed(
            user_id=user_id,
            correlation_id=correlation_id,
            snapshot_bytes=snapshot_bytes,
            settings_keys=settings_keys,
        )
        await self.log(event)

    async def log_restore_started(self, user_id: str, correlation_id: UUID) -> None:
        """Log start of a restore call."""
        await self.log(AuditEventBuilder.restore_started(user_id, correlation_id))

    async def log_restore_completed(
        self,
        user_id: str,
        correlation_id: UUID,
        version: str,
        settings_keys: list[str],
    ) -> None:
        """Log a fully applied restore."""
        event = AuditEventBuilder.restore_completed(
            user_id=user_id,
            correlation_id=correlation_id,
            version=version,
            settings_keys=settings_keys,
        )
        await self.log(event)

    async def log_sync_failed(
        self,
        operation: str,
        error_code: str,
        error_message: str,
        user_id: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Log a failed backup or restore."""
        event = AuditEventBuilder.sync_failed(
            operation=operation,
            error_code=error_code,
            error_message=error_message,
            user_id=user_id,
            correlation_id=correlation_id,
            details=details,
        )
        await self.log(event)

    async def log_notification_created(
        self,
        notification_id: str,
        notification_type: str,
        priority: str,
    ) -> None:
        """Log a stored notification."""
        event = AuditEventBuilder.notification_created(
            notification_id=notification_id,
            notification_type=notification_type,
            priority=priority,
        )
        await self.log(event)

    async def log_notification_failed(
        self,
        notification_type: str,
        error_message: str,
    ) -> None:
        """Log a notification that could not be stored."""
        event = AuditEventBuilder.notification_failed(
            notification_type=notification_type,
            error_message=error_message,
        )
        await self.log(event)

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        await self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a backup or restore call.
    Pass it through all subsequent operations.
    """
    return uuid4()
