from patisserie.notification.management import CreateNotification
from protean.utils.globals import current_domain


def _notify(user, title="Fresh batch"):
    return current_domain.process(
        CreateNotification(user_id=str(user.id), title=title, message="Brownies are out of the oven"),
        asynchronous=False,
    )


class TestNotificationEndpoints:
    def test_requires_a_token(self, client):
        assert client.get("/api/notifications").status_code == 401

    def test_listing_with_unread_count(self, client, auth_headers, customer):
        _notify(customer)
        _notify(customer, title="Order Confirmed")

        response = client.get("/api/notifications", headers=auth_headers(customer))

        body = response.json()
        assert len(body["data"]) == 2
        assert body["unreadCount"] == 2
        assert body["pagination"]["totalItems"] == 2

    def test_mark_one_then_all_read(self, client, auth_headers, customer):
        first = _notify(customer)
        _notify(customer)
        _notify(customer)

        one = client.patch(f"/api/notifications/{first}/read", headers=auth_headers(customer))
        rest = client.patch("/api/notifications/mark-all-read", headers=auth_headers(customer))
        unread = client.get("/api/notifications", params={"unread_only": True}, headers=auth_headers(customer))

        assert one.json() == {"success": True, "message": "Notification marked as read"}
        assert rest.json()["data"] == {"updated": 2}
        assert unread.json()["data"] == []
        assert unread.json()["unreadCount"] == 0

    def test_delete(self, client, auth_headers, customer):
        notification_id = _notify(customer)

        deleted = client.delete(f"/api/notifications/{notification_id}", headers=auth_headers(customer))
        again = client.delete(f"/api/notifications/{notification_id}", headers=auth_headers(customer))

        assert deleted.json()["message"] == "Notification deleted"
        assert again.status_code == 404

    def test_other_users_notifications_are_hidden(self, client, auth_headers, customer, admin):
        notification_id = _notify(customer)

        response = client.patch(f"/api/notifications/{notification_id}/read", headers=auth_headers(admin))

        assert response.status_code == 404
        assert response.json()["message"] == "Notification not found"
