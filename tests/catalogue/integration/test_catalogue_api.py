class TestCategoryEndpoints:
    def test_public_listing(self, client, make_category):
        make_category(name="Cookies")
        make_category(name="Brownies")

        response = client.get("/api/categories")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert [category["name"] for category in body["data"]] == ["Brownies", "Cookies"]

    def test_create_requires_a_token(self, client):
        response = client.post("/api/categories", json={"name": "Cookies"})

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Not authorized, no token"}

    def test_create_requires_an_admin(self, client, customer, auth_headers):
        response = client.post("/api/categories", json={"name": "Cookies"}, headers=auth_headers(customer))

        assert response.status_code == 403
        assert response.json()["message"] == "Not authorized as an admin"

    def test_admin_creates_a_category(self, client, admin, auth_headers):
        response = client.post(
            "/api/categories",
            json={"name": "Cookies", "images": ["https://cdn.example.com/cookie.jpg"]},
            headers=auth_headers(admin),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Category created successfully"
        assert body["data"]["name"] == "Cookies"
        assert body["data"]["featured_image"] == "https://cdn.example.com/cookie.jpg"

    def test_duplicate_name_is_a_bad_request(self, client, admin, auth_headers, make_category):
        make_category(name="Cookies")

        response = client.post("/api/categories", json={"name": "cookies"}, headers=auth_headers(admin))

        assert response.status_code == 400
        assert response.json()["message"] == "Category with this name already exists"

    def test_unknown_category_is_not_found(self, client):
        response = client.get("/api/categories/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Category not found"}

    def test_products_of_a_category(self, client, make_category, make_product):
        cookies = make_category(name="Cookies")
        make_product(name="Oatmeal Cookie", category=cookies)
        make_product(name="Fudge Brownie")

        response = client.get(f"/api/categories/{cookies.id}/products")

        body = response.json()
        assert [product["name"] for product in body["data"]] == ["Oatmeal Cookie"]
        assert body["pagination"]["totalItems"] == 1

    def test_delete_blocked_by_products(self, client, admin, auth_headers, make_product):
        product = make_product()

        response = client.delete(f"/api/categories/{product.category_id}", headers=auth_headers(admin))

        assert response.status_code == 400
        assert "Cannot delete category" in response.json()["message"]


class TestProductEndpoints:
    def test_admin_creates_a_product(self, client, admin, auth_headers, make_category):
        category = make_category(name="Brownies")

        response = client.post(
            "/api/products",
            json={
                "name": "Belgian Chocolate Brownie",
                "category_id": str(category.id),
                "variants": [
                    {
                        "quantity": 1,
                        "measuring_unit": "pcs",
                        "price": 120,
                        "discount_type": "flat",
                        "discount_value": 20,
                    }
                ],
            },
            headers=auth_headers(admin),
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["code"] == "BROWN-001"
        assert data["variants"][0]["final_price"] == 100.0

    def test_product_needs_a_variant(self, client, admin, auth_headers, make_category):
        category = make_category()

        response = client.post(
            "/api/products",
            json={"name": "Empty Brownie", "category_id": str(category.id), "variants": []},
            headers=auth_headers(admin),
        )

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_listing_with_search_and_paging(self, client, make_product):
        for name in ["Blondie", "Fudge Brownie", "Walnut Brownie"]:
            make_product(name=name)

        response = client.get("/api/products", params={"search": "brownie", "sort": "name", "order": "asc", "limit": 1})

        body = response.json()
        assert [product["name"] for product in body["data"]] == ["Fudge Brownie"]
        assert body["pagination"]["totalItems"] == 2
        assert body["pagination"]["hasNext"] is True

    def test_detail_by_code(self, client, make_product):
        product = make_product()

        response = client.get(f"/api/products/{product.code}")

        assert response.status_code == 200
        assert response.json()["data"]["id"] == str(product.id)

    def test_update_then_soft_delete(self, client, admin, auth_headers, make_product):
        product = make_product()

        updated = client.put(
            f"/api/products/{product.id}", json={"badge": "Chef's pick"}, headers=auth_headers(admin)
        )
        deleted = client.delete(f"/api/products/{product.id}", headers=auth_headers(admin))
        listing = client.get("/api/products")

        assert updated.json()["data"]["badge"] == "Chef's pick"
        assert deleted.json() == {"success": True, "message": "Product deleted successfully"}
        assert listing.json()["data"] == []

    def test_unknown_product(self, client):
        response = client.get("/api/products/NOPE-404")

        assert response.status_code == 404
        assert response.json()["message"] == "Product not found"
