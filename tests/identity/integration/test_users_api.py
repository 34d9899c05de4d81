from patisserie.identity.registration import find_by_uid


class TestAuthVerify:
    def test_first_login_creates_the_account(self, client, verifier):
        token = verifier.register("uid-new", email="New@Example.com", name="Nila")

        response = client.post("/api/auth/verify", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Authentication successful"
        assert body["data"]["email"] == "new@example.com"
        assert body["data"]["role"] == "user"
        assert find_by_uid("uid-new") is not None

    def test_missing_token(self, client):
        response = client.post("/api/auth/verify")

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Not authorized, no token"}

    def test_bad_token(self, client):
        response = client.post("/api/auth/verify", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized, token failed"


class TestUserEndpoints:
    def test_me(self, client, auth_headers, customer):
        response = client.get("/api/users/me", headers=auth_headers(customer))

        assert response.json()["data"]["uid"] == "uid-asha"

    def test_unregistered_uid(self, client):
        response = client.get("/api/users/me", headers={"Authorization": "Bearer test-token:uid-ghost"})

        assert response.status_code == 404
        assert response.json()["message"] == "User not found"

    def test_update_own_profile(self, client, auth_headers, customer):
        response = client.put(
            f"/api/users/{customer.id}", json={"hostel_name": "Block A"}, headers=auth_headers(customer)
        )

        assert response.json()["message"] == "Profile updated successfully"
        assert response.json()["data"]["hostel_name"] == "Block A"

    def test_cannot_update_someone_else(self, client, auth_headers, customer, register):
        other = register("uid-ravi", email="ravi@example.com")

        response = client.put(f"/api/users/{other.id}", json={"name": "Hacker"}, headers=auth_headers(customer))

        assert response.status_code == 403
        assert response.json()["message"] == "Not authorized to manage this account"

    def test_admin_lists_and_promotes(self, client, auth_headers, admin, customer):
        listing = client.get("/api/users", headers=auth_headers(admin))
        promoted = client.patch(
            f"/api/users/{customer.id}/role", json={"role": "admin"}, headers=auth_headers(admin)
        )

        assert listing.json()["pagination"]["totalItems"] == 2
        assert promoted.json()["message"] == "User role updated successfully"
        assert promoted.json()["data"]["role"] == "admin"

    def test_invalid_role(self, client, auth_headers, admin, customer):
        response = client.patch(f"/api/users/{customer.id}/role", json={"role": "owner"}, headers=auth_headers(admin))

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid role. Must be: user or admin"

    def test_user_listing_is_admin_only(self, client, auth_headers, customer):
        assert client.get("/api/users", headers=auth_headers(customer)).status_code == 403

    def test_delete_own_account(self, client, auth_headers, customer):
        response = client.delete(f"/api/users/{customer.id}", headers=auth_headers(customer))

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "User deleted successfully"
        assert body["data"]["deletedCounts"]["users"] == 1
        assert body["data"]["identityDeleted"] is True
        assert find_by_uid("uid-asha") is None
