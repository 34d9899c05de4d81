"""Notification commands. Users only ever see and touch their own notifications."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from patisserie.domain import patisserie
from patisserie.notification.notification import Notification, NotificationType


@patisserie.command(part_of="Notification")
class CreateNotification:
    user_id: Identifier(required=True)
    title: String(required=True, max_length=200)
    message: Text(required=True)
    notification_type: String(max_length=20, default=NotificationType.GENERAL.value)
    order_number: String(max_length=30)


@patisserie.command(part_of="Notification")
class MarkNotificationRead:
    notification_id: Identifier(required=True)
    user_id: Identifier(required=True)


@patisserie.command(part_of="Notification")
class MarkAllNotificationsRead:
    user_id: Identifier(required=True)


@patisserie.command(part_of="Notification")
class DeleteNotification:
    notification_id: Identifier(required=True)
    user_id: Identifier(required=True)


def _owned(notification_id, user_id) -> Notification:
    notification = current_domain.repository_for(Notification).get_or_none(notification_id)
    if notification is None or str(notification.user_id) != str(user_id):
        raise ObjectNotFoundError("Notification not found")
    return notification


@patisserie.command_handler(part_of=Notification)
class ManageNotificationHandler:
    @handle(CreateNotification)
    def create_notification(self, command):
        notification = Notification.create(
            user_id=command.user_id,
            title=command.title,
            message=command.message,
            notification_type=command.notification_type,
            order_number=command.order_number,
        )
        current_domain.repository_for(Notification).add(notification)
        return str(notification.id)

    @handle(MarkNotificationRead)
    def mark_read(self, command):
        notification = _owned(command.notification_id, command.user_id)
        notification.mark_read()
        current_domain.repository_for(Notification).add(notification)

    @handle(MarkAllNotificationsRead)
    def mark_all_read(self, command):
        repo = current_domain.repository_for(Notification)
        unread = repo._dao.query.filter(user_id=str(command.user_id), read=False).limit(None).all().items
        for notification in unread:
            notification.mark_read()
            repo.add(notification)
        return len(unread)

    @handle(DeleteNotification)
    def delete_notification(self, command):
        notification = _owned(command.notification_id, command.user_id)
        current_domain.repository_for(Notification)._dao.delete(notification)
