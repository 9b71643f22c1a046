"""
Notification Models for Artha

In-app notifications are produced as a side effect of domain events
(budget thresholds, goals, bills, recurring postings).

DESIGN DECISION: Drafts are built by pure functions in
NotificationDraftBuilder. Persisting them is a separate, best-effort
step, so the wording rules can be tested without any storage.
"""

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class NotificationType(str, Enum):
    """Kinds of in-app notifications."""
    BUDGET_WARNING = "budget_warning"
    GOAL_ACHIEVED = "goal_achieved"
    BILL_REMINDER = "bill_reminder"
    RECURRING_TRANSACTION = "recurring_transaction"
    GENERAL = "general"


class NotificationPriority(str, Enum):
    """How prominently a notification is shown."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TransactionType(str, Enum):
    """Direction of a transaction."""
    INCOME = "income"
    EXPENSE = "expense"


# Budget consumption thresholds, in percent
BUDGET_WARNING_THRESHOLD = 80
BUDGET_EXCEEDED_THRESHOLD = 100


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NotificationDraft(BaseModel):
    """
    A notification that has not been persisted yet.

    The local store assigns the id when it saves the draft.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    type: NotificationType
    title: str = Field(..., min_length=1, max_length=120)
    message: str = Field(..., min_length=1)
    icon: str = Field(default="🔔", max_length=16)
    priority: NotificationPriority = NotificationPriority.MEDIUM
    is_read: bool = False
    created_at: datetime = Field(
        default_factory=_utcnow,
        description="When the notification was produced (UTC)"
    )
    related_id: Optional[str] = Field(
        default=None,
        description="Id of the budget, goal or recurring entry it refers to"
    )


class Notification(NotificationDraft):
    """A persisted notification."""

    id: str


def classify_budget_priority(percentage: float) -> NotificationPriority:
    """Map budget consumption (percent) to a notification priority."""
    if percentage >= BUDGET_EXCEEDED_THRESHOLD:
        return NotificationPriority.HIGH
    if percentage >= BUDGET_WARNING_THRESHOLD:
        return NotificationPriority.MEDIUM
    return NotificationPriority.LOW


def format_percentage(percentage: float) -> str:
    """
    Round to a whole percent, halves away from zero (99.5 -> 100).

    Non-finite values (a zero budget gives infinity) are shown as they are.
    """
    value = Decimal(str(percentage))
    if not value.is_finite():
        return str(percentage)
    return str(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class NotificationDraftBuilder:
    """
    Helper class to build notification drafts for each domain event.

    Amounts arrive already formatted; locale handling lives in
    artha.notifications.formatting.

    Usage:
        draft = NotificationDraftBuilder.budget_threshold("Transport", 85.0)
        draft = NotificationDraftBuilder.goal_achieved("Laptop", "Rp 5.000.000")
    """

    @staticmethod
    def budget_threshold(
        category_name: str,
        percentage: float,
        related_id: Optional[str] = None,
    ) -> NotificationDraft:
        priority = classify_budget_priority(percentage)
        shown = format_percentage(percentage)

        if priority == NotificationPriority.HIGH:
            icon = "🚨"
            title = "Over Budget!"
            message = (
                f"Your {category_name} budget is over its limit at {shown}%. "
                "Time to cut back."
            )
        elif priority == NotificationPriority.MEDIUM:
            icon = "⚠️"
            title = "Approaching Budget Limit"
            message = (
                f"Your {category_name} budget is {shown}% used. "
                "You are approaching the limit."
            )
        else:
            icon = "📊"
            title = "Budget Update"
            message = f"You have used {shown}% of your {category_name} budget."

        return NotificationDraft(
            type=NotificationType.BUDGET_WARNING,
            title=title,
            message=message,
            icon=icon,
            priority=priority,
            related_id=related_id,
        )

    @staticmethod
    def goal_achieved(
        goal_name: str,
        formatted_amount: str,
        related_id: Optional[str] = None,
    ) -> NotificationDraft:
        return NotificationDraft(
            type=NotificationType.GOAL_ACHIEVED,
            title="Goal Achieved!",
            message=(
                f"Congratulations! You reached your \"{goal_name}\" goal "
                f"of {formatted_amount}."
            ),
            icon="🎉",
            priority=NotificationPriority.HIGH,
            related_id=related_id,
        )

    @staticmethod
    def bill_reminder(
        description: str,
        formatted_amount: str,
        due_date: str,
        related_id: Optional[str] = None,
    ) -> NotificationDraft:
        # due_date is shown as given; callers own its format
        return NotificationDraft(
            type=NotificationType.BILL_REMINDER,
            title="Bill Reminder",
            message=f"{description} ({formatted_amount}) is due on {due_date}.",
            icon="📅",
            priority=NotificationPriority.MEDIUM,
            related_id=related_id,
        )

    @staticmethod
    def recurring_transaction(
        description: str,
        formatted_amount: str,
        transaction_type: TransactionType,
        related_id: Optional[str] = None,
    ) -> NotificationDraft:
        if transaction_type == TransactionType.INCOME:
            icon = "💰"
            title = "Recurring Income Recorded"
            message = f"Income \"{description}\" of {formatted_amount} was added automatically."
        else:
            icon = "💸"
            title = "Recurring Expense Recorded"
            message = f"Expense \"{description}\" of {formatted_amount} was recorded automatically."

        return NotificationDraft(
            type=NotificationType.RECURRING_TRANSACTION,
            title=title,
            message=message,
            icon=icon,
            priority=NotificationPriority.LOW,
            related_id=related_id,
        )

    @staticmethod
    def welcome() -> NotificationDraft:
        return NotificationDraft(
            type=NotificationType.GENERAL,
            title="Welcome to Artha!",
            message=(
                "Start tracking your income and expenses, set a monthly budget "
                "and save toward your goals."
            ),
            icon="👋",
            priority=NotificationPriority.LOW,
        )
