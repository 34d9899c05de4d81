class TestPublicNewsletter:
    def test_subscribe_then_resubscribe(self, client):
        created = client.post("/api/newsletter/subscribe", json={"email": "asha@example.com"})
        client.post("/api/newsletter/unsubscribe", json={"email": "asha@example.com"})
        again = client.post("/api/newsletter/subscribe", json={"email": "asha@example.com"})

        assert created.status_code == 201
        assert created.json() == {"success": True, "message": "Successfully subscribed to newsletter!"}
        assert again.status_code == 200
        assert again.json()["message"] == "Successfully resubscribed to newsletter!"

    def test_duplicate_subscription(self, client):
        client.post("/api/newsletter/subscribe", json={"email": "asha@example.com"})

        response = client.post("/api/newsletter/subscribe", json={"email": "asha@example.com"})

        assert response.status_code == 400
        assert response.json()["message"] == "Email is already subscribed"

    def test_unsubscribe_unknown(self, client):
        response = client.post("/api/newsletter/unsubscribe", json={"email": "ghost@example.com"})
        assert response.status_code == 404


class TestNewsletterAdmin:
    def test_subscribers_with_counts(self, client, admin, auth_headers):
        client.post("/api/newsletter/subscribe", json={"email": "asha@example.com"})

        response = client.get("/api/newsletter/admin/subscribers", headers=auth_headers(admin))

        body = response.json()
        assert body["counts"] == {"total": 1, "active": 1, "unsubscribed": 0}
        assert body["data"][0]["email"] == "asha@example.com"

    def test_send(self, client, admin, auth_headers, email_channel):
        client.post("/api/newsletter/subscribe", json={"email": "asha@example.com"})

        response = client.post(
            "/api/newsletter/admin/send",
            json={"subject": "Weekend menu", "body": "Tiramisu!"},
            headers=auth_headers(admin),
        )

        assert response.json()["message"] == "Newsletter sent to 1 subscribers"
        assert email_channel.sent_to("asha@example.com")[0]["subject"] == "Weekend menu"

    def test_lookup_by_email(self, client, admin, auth_headers):
        client.post("/api/newsletter/subscribe", json={"email": "asha@example.com"})

        found = client.get("/api/newsletter/admin/user/asha@example.com", headers=auth_headers(admin))
        missing = client.get("/api/newsletter/admin/user/ghost@example.com", headers=auth_headers(admin))

        assert found.json()["data"]["status"] == "active"
        assert missing.status_code == 404

    def test_admin_only(self, client, customer, auth_headers):
        response = client.get("/api/newsletter/admin/stats", headers=auth_headers(customer))
        assert response.status_code == 403
