"""In-app notifications for the signed-in user."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from patisserie.api.dependencies import Page, current_user, page_params
from patisserie.api.responses import envelope
from patisserie.identity.user import User
from patisserie.notification.management import (
    DeleteNotification,
    MarkAllNotificationsRead,
    MarkNotificationRead,
)
from patisserie.notification.queries import list_notifications

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("")
async def notifications(
    unread_only: bool = False,
    user: User = Depends(current_user),
    paging: Page = Depends(page_params),
):
    data, pagination, unread = list_notifications(
        str(user.id), unread_only=unread_only, page=paging.page, limit=paging.limit
    )
    return envelope(data, pagination=pagination, unreadCount=unread)


@router.patch("/mark-all-read")
async def mark_all_read(user: User = Depends(current_user)):
    updated = current_domain.process(MarkAllNotificationsRead(user_id=str(user.id)), asynchronous=False)
    return envelope({"updated": updated}, "All notifications marked as read")


@router.patch("/{notification_id}/read")
async def mark_read(notification_id: str, user: User = Depends(current_user)):
    command = MarkNotificationRead(notification_id=notification_id, user_id=str(user.id))
    current_domain.process(command, asynchronous=False)
    return envelope(message="Notification marked as read")


@router.delete("/{notification_id}")
async def delete(notification_id: str, user: User = Depends(current_user)):
    command = DeleteNotification(notification_id=notification_id, user_id=str(user.id))
    current_domain.process(command, asynchronous=False)
    return envelope(message="Notification deleted")
