"""In-app Notification aggregate shown in the storefront bell."""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Identifier, String, Text

from patisserie.domain import patisserie


class NotificationType(Enum):
    ORDER_PLACED = "order_placed"
    ORDER_STATUS = "order_status"
    GENERAL = "general"


@patisserie.aggregate
class Notification:
    user_id: Identifier(required=True)
    order_number: String(max_length=30)
    notification_type: String(choices=NotificationType, default=NotificationType.GENERAL.value)
    title: String(required=True, max_length=200)
    message: Text(required=True)
    read: Boolean(default=False)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(cls, user_id, title, message, notification_type=NotificationType.GENERAL.value, order_number=None):
        now = datetime.now(UTC)
        return cls(
            user_id=user_id,
            order_number=order_number,
            notification_type=notification_type,
            title=title,
            message=message,
            created_at=now,
            updated_at=now,
        )

    def mark_read(self):
        if not self.read:
            self.read = True
            self.updated_at = datetime.now(UTC)
