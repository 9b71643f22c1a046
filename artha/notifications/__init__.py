"""Notification triggers package."""

from artha.notifications.formatting import format_amount, format_number
from artha.notifications.triggers import NotificationTriggerService

__all__ = ["NotificationTriggerService", "format_amount", "format_number"]
