from patisserie.product.management import DeleteProduct
from protean.utils.globals import current_domain


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestSeo:
    def test_robots(self, client):
        response = client.get("/robots.txt")

        assert response.status_code == 200
        assert "User-agent: *" in response.text
        assert "Sitemap: https://lapatisserie.shop/sitemap.xml" in response.text

    def test_sitemap_lists_active_catalogue(self, client, make_product):
        product = make_product()
        retired = make_product(name="Walnut Brownie")
        current_domain.process(DeleteProduct(product_id=retired.id), asynchronous=False)

        response = client.get("/sitemap.xml")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/xml")
        assert "<loc>https://lapatisserie.shop/</loc>" in response.text
        assert f"<loc>https://lapatisserie.shop/product/{product.id}</loc>" in response.text
        assert f"https://lapatisserie.shop/product/{retired.id}" not in response.text
        assert f"/products?category={product.category_id}" in response.text
