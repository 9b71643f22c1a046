"""
Tests for notification triggers and amount formatting.

Tests cover:
  • Locale digit grouping
  • One stored notification per trigger
  • Budget threshold boundaries
  • Failures swallowed and audited
"""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from artha.config.settings import NotificationSettings
from artha.models.notification import NotificationPriority, NotificationType
from artha.notifications import NotificationTriggerService, format_amount, format_number
from artha.services.storage import LocalStoreInterface, StorageError


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

class TestFormatting:

    @pytest.mark.parametrize("amount,locale,expected", [
        (5000000, "id-ID", "5.000.000"),
        (5000000, "en-US", "5,000,000"),
        (1234.5, "id-ID", "1.234,5"),
        (1234.567, "en-US", "1,234.57"),
        (999, "id-ID", "999"),
        (0, "id-ID", "0"),
        (-2500, "id-ID", "-2.500"),
        (Decimal("1000000.00"), "id-ID", "1.000.000"),
    ])
    def test_format_number(self, amount, locale, expected):
        assert format_number(amount, locale) == expected

    def test_unknown_locale_uses_default_separators(self):
        assert format_number(5000000, "xx-XX") == "5,000,000"

    def test_format_amount(self):
        assert format_amount(5000000) == "Rp 5.000.000"
        assert format_amount(12.5, locale="en-US", currency_symbol="$") == "$ 12.5"

    def test_format_amount_without_symbol(self):
        assert format_amount(1500, currency_symbol="") == "1.500"


# ---------------------------------------------------------------------------
# Triggers
# ---------------------------------------------------------------------------

@pytest.fixture
def triggers(local_store, notification_settings):
    return NotificationTriggerService(local_store, settings=notification_settings)


class TestTriggers:
    """Each trigger stores exactly one notification."""

    @pytest.mark.asyncio
    async def test_budget_over_limit(self, triggers, local_store):
        await triggers.notify_budget_threshold("Transport", 100, budget_id="2024-03")

        [notification] = await local_store.list_notifications()
        assert notification.type == NotificationType.BUDGET_WARNING
        assert notification.priority == NotificationPriority.HIGH
        assert "Over" in notification.title
        assert notification.related_id == "2024-03"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("percentage,priority", [
        (80, NotificationPriority.MEDIUM),
        (79.9, NotificationPriority.LOW),
        (120, NotificationPriority.HIGH),
    ])
    async def test_budget_priorities(self, triggers, local_store, percentage, priority):
        await triggers.notify_budget_threshold("Belanja", percentage)

        [notification] = await local_store.list_notifications()
        assert notification.priority == priority

    @pytest.mark.asyncio
    async def test_zero_budget_infinite_percentage(self, triggers, local_store):
        await triggers.notify_budget_threshold("Transport", float("inf"))

        [notification] = await local_store.list_notifications()
        assert notification.priority == NotificationPriority.HIGH
        assert "inf%" in notification.message

    @pytest.mark.asyncio
    async def test_long_goal_name(self, triggers, local_store):
        goal_name = "G" * 480
        await triggers.notify_goal_achieved(goal_name, 5000000)

        [notification] = await local_store.list_notifications()
        assert goal_name in notification.message

    @pytest.mark.asyncio
    async def test_goal_achieved_formats_amount(self, triggers, local_store):
        await triggers.notify_goal_achieved("Laptop", 5000000, goal_id="g1")

        [notification] = await local_store.list_notifications()
        assert notification.type == NotificationType.GOAL_ACHIEVED
        assert "Rp 5.000.000" in notification.message
        assert notification.related_id == "g1"

    @pytest.mark.asyncio
    async def test_bill_reminder(self, triggers, local_store):
        await triggers.notify_bill_reminder("Listrik", 350000, "2024-03-25", bill_id="r7")

        [notification] = await local_store.list_notifications()
        assert notification.type == NotificationType.BILL_REMINDER
        assert "2024-03-25" in notification.message
        assert "Rp 350.000" in notification.message

    @pytest.mark.asyncio
    async def test_recurring_income_and_expense(self, triggers, local_store):
        await triggers.notify_recurring_transaction("Gaji", 10000000, "income", "r1")
        await triggers.notify_recurring_transaction("Kos", 1500000, "expense", "r2")

        notifications = await local_store.list_notifications()
        titles = {n.related_id: n.title for n in notifications}
        assert "Income" in titles["r1"]
        assert "Expense" in titles["r2"]

    @pytest.mark.asyncio
    async def test_new_notifications_are_unread(self, triggers, local_store):
        before = datetime.now(timezone.utc)
        await triggers.create_welcome_notification()

        [notification] = await local_store.list_notifications()
        assert notification.is_read is False
        assert notification.created_at >= before
        assert await local_store.get_unread_count() == 1

    @pytest.mark.asyncio
    async def test_uses_configured_locale(self, local_store):
        service = NotificationTriggerService(
            local_store,
            settings=NotificationSettings(locale="en-US", currency_symbol="$"),
        )
        await service.notify_goal_achieved("Bike", 2500)

        [notification] = await local_store.list_notifications()
        assert "$ 2,500" in notification.message


class TestTriggerFailures:
    """Notification failures never reach the caller."""

    @pytest.mark.asyncio
    async def test_storage_failure_is_swallowed(self, notification_settings):
        store = AsyncMock(spec=LocalStoreInterface)
        store.create_notification.side_effect = StorageError("disk full")
        audit_logger = AsyncMock()
        service = NotificationTriggerService(
            store, settings=notification_settings, audit_logger=audit_logger
        )

        result = await service.notify_goal_achieved("Laptop", 5000000)

        assert result is None
        store.create_notification.assert_awaited_once()
        audit_logger.log_notification_failed.assert_awaited_once()
        audit_logger.log_notification_created.assert_not_called()

    @pytest.mark.asyncio
    async def test_bad_transaction_type_is_swallowed(self, triggers, local_store):
        await triggers.notify_recurring_transaction("Gaji", 100, "transfer")

        assert await local_store.list_notifications() == []

    @pytest.mark.asyncio
    async def test_bad_amount_is_swallowed(self, triggers, local_store):
        await triggers.notify_bill_reminder("Listrik", "not a number", "2024-03-25")

        assert await local_store.list_notifications() == []

    @pytest.mark.asyncio
    async def test_success_is_audited(self, local_store, notification_settings):
        audit_logger = AsyncMock()
        service = NotificationTriggerService(
            local_store, settings=notification_settings, audit_logger=audit_logger
        )

        await service.notify_budget_threshold("Transport", 85)

        audit_logger.log_notification_created.assert_awaited_once()
        kwargs = audit_logger.log_notification_created.call_args.kwargs
        assert kwargs["notification_type"] == "budget_warning"
        assert kwargs["priority"] == "medium"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
