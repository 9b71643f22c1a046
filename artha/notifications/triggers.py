"""
Notification Trigger Service

Turns domain events into in-app notifications:
- A budget category crossing a usage threshold
- A savings goal being reached
- A bill coming due
- A recurring transaction being posted
- A fresh install (welcome)

CRITICAL: Notifications are a side channel. A failure to store one is
logged and dropped; it never reaches the caller and never blocks the
domain action that triggered it. Every trigger returns None.
"""

from decimal import Decimal
from typing import Callable, Optional, Union

import structlog

from artha.audit import AuditLogger
from artha.config import get_settings
from artha.config.settings import NotificationSettings
from artha.models.notification import (
    NotificationDraft,
    NotificationDraftBuilder,
    NotificationType,
    TransactionType,
)
from artha.notifications.formatting import format_amount
from artha.services.storage import LocalStoreInterface


logger = structlog.get_logger(__name__)

Amount = Union[int, float, Decimal]


class NotificationTriggerService:
    """
    Builds one notification per domain event and stores it locally.

    Holds no state beyond its collaborators.
    """

    def __init__(
        self,
        local_store: LocalStoreInterface,
        settings: Optional[NotificationSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._local_store = local_store
        self._settings = settings or get_settings().notifications
        self._audit_logger = audit_logger or AuditLogger()

    def _format(self, amount: Amount) -> str:
        return format_amount(
            amount,
            locale=self._settings.locale,
            currency_symbol=self._settings.currency_symbol,
        )

    async def _deliver(
        self,
        notification_type: NotificationType,
        build: Callable[[], NotificationDraft],
    ) -> None:
        """
        Build and store a draft, swallowing and logging any failure.

        This is the only place notification errors are handled. Bad event
        data (an unknown transaction type, a non-numeric amount) is dropped
        the same way as a failed write.
        """
        try:
            draft = build()
            notification_id = await self._local_store.create_notification(draft)
        except Exception as e:
            logger.warning(
                "notification_dropped",
                notification_type=notification_type.value,
                error=str(e),
            )
            await self._audit_logger.log_notification_failed(
                notification_type=notification_type.value,
                error_message=str(e),
            )
            return

        await self._audit_logger.log_notification_created(
            notification_id=notification_id,
            notification_type=draft.type.value,
            priority=draft.priority.value,
        )

    async def notify_budget_threshold(
        self,
        category_name: str,
        percentage: float,
        budget_id: Optional[str] = None,
    ) -> None:
        """
        Notify about budget usage for a category.

        Priority: high at 100% or more, medium from 80%, low below.
        """
        await self._deliver(
            NotificationType.BUDGET_WARNING,
            lambda: NotificationDraftBuilder.budget_threshold(
                category_name=category_name,
                percentage=percentage,
                related_id=budget_id,
            ),
        )

    async def notify_goal_achieved(
        self,
        goal_name: str,
        amount: Amount,
        goal_id: Optional[str] = None,
    ) -> None:
        await self._deliver(
            NotificationType.GOAL_ACHIEVED,
            lambda: NotificationDraftBuilder.goal_achieved(
                goal_name=goal_name,
                formatted_amount=self._format(amount),
                related_id=goal_id,
            ),
        )

    async def notify_bill_reminder(
        self,
        description: str,
        amount: Amount,
        due_date: str,
        bill_id: Optional[str] = None,
    ) -> None:
        await self._deliver(
            NotificationType.BILL_REMINDER,
            lambda: NotificationDraftBuilder.bill_reminder(
                description=description,
                formatted_amount=self._format(amount),
                due_date=due_date,
                related_id=bill_id,
            ),
        )

    async def notify_recurring_transaction(
        self,
        description: str,
        amount: Amount,
        transaction_type: Union[TransactionType, str],
        recurring_id: Optional[str] = None,
    ) -> None:
        """Called with the output of the recurring-transaction scheduler."""
        await self._deliver(
            NotificationType.RECURRING_TRANSACTION,
            lambda: NotificationDraftBuilder.recurring_transaction(
                description=description,
                formatted_amount=self._format(amount),
                transaction_type=TransactionType(transaction_type),
                related_id=recurring_id,
            ),
        )

    async def create_welcome_notification(self) -> None:
        """
        Greet a new user.

        Callers invoke this once per fresh install; it is not de-duplicated here.
        """
        await self._deliver(NotificationType.GENERAL, NotificationDraftBuilder.welcome)
