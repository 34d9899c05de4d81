import pytest
from patisserie.category.category import Category
from patisserie.category.management import CreateCategory, DeleteCategory, UpdateCategory
from patisserie.category.queries import get_category, list_categories
from patisserie.product.management import DeleteProduct
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain


class TestCreateCategory:
    def test_category_is_persisted(self):
        category_id = current_domain.process(
            CreateCategory(name="Cookies", description="Chewy and crisp"), asynchronous=False
        )

        category = current_domain.repository_for(Category).get(category_id)
        assert category.name == "Cookies"
        assert category.description == "Chewy and crisp"

    def test_duplicate_name_is_rejected_case_insensitively(self, make_category):
        make_category(name="Cookies")

        with pytest.raises(ValidationError) as exc:
            current_domain.process(CreateCategory(name="cOOkies"), asynchronous=False)
        assert exc.value.messages["name"] == ["Category with this name already exists"]


class TestUpdateCategory:
    def test_rename(self, make_category):
        category = make_category(name="Cookies")

        current_domain.process(UpdateCategory(category_id=category.id, name="Biscuits"), asynchronous=False)

        assert get_category(category.id).name == "Biscuits"

    def test_keeping_its_own_name_is_allowed(self, make_category):
        category = make_category(name="Cookies")

        current_domain.process(
            UpdateCategory(category_id=category.id, name="COOKIES", description="Fresh daily"),
            asynchronous=False,
        )

        updated = get_category(category.id)
        assert updated.name == "COOKIES"
        assert updated.description == "Fresh daily"

    def test_taking_another_categorys_name_is_rejected(self, make_category):
        make_category(name="Cookies")
        cakes = make_category(name="Cakes")

        with pytest.raises(ValidationError):
            current_domain.process(UpdateCategory(category_id=cakes.id, name="cookies"), asynchronous=False)

    def test_images_arrive_as_json(self, make_category):
        category = make_category(name="Cookies")

        current_domain.process(
            UpdateCategory(category_id=category.id, images='["https://cdn.example.com/cookie.jpg"]'),
            asynchronous=False,
        )

        assert get_category(category.id).images == ["https://cdn.example.com/cookie.jpg"]


class TestDeleteCategory:
    def test_delete_deactivates(self, make_category):
        category = make_category(name="Cookies")

        current_domain.process(DeleteCategory(category_id=category.id), asynchronous=False)

        assert get_category(category.id).is_active is False

    def test_delete_is_blocked_by_active_products(self, make_category, make_product):
        category = make_category(name="Cookies")
        make_product(name="Oatmeal Cookie", category=category)
        make_product(name="Choco Chip Cookie", category=category)

        with pytest.raises(ValidationError) as exc:
            current_domain.process(DeleteCategory(category_id=category.id), asynchronous=False)
        assert "It has 2 active product(s)" in exc.value.messages["category"][0]

    def test_inactive_products_do_not_block_deletion(self, make_category, make_product):
        category = make_category(name="Cookies")
        product = make_product(name="Oatmeal Cookie", category=category)
        current_domain.process(DeleteProduct(product_id=product.id), asynchronous=False)

        current_domain.process(DeleteCategory(category_id=category.id), asynchronous=False)

        assert get_category(category.id).is_active is False


class TestCategoryQueries:
    def test_public_list_is_sorted_and_active_only(self, make_category):
        make_category(name="Cookies")
        make_category(name="Brownies")
        retired = make_category(name="Macarons")
        current_domain.process(DeleteCategory(category_id=retired.id), asynchronous=False)

        names = [category["name"] for category in list_categories()]
        assert names == ["Brownies", "Cookies"]

    def test_admin_list_includes_inactive(self, make_category):
        make_category(name="Cookies")
        retired = make_category(name="Macarons")
        current_domain.process(DeleteCategory(category_id=retired.id), asynchronous=False)

        names = [category["name"] for category in list_categories(include_inactive=True)]
        assert names == ["Cookies", "Macarons"]

    def test_public_list_cache_is_invalidated_on_change(self, make_category):
        make_category(name="Cookies")
        assert len(list_categories()) == 1

        make_category(name="Brownies")

        assert len(list_categories()) == 2

    def test_unknown_category(self):
        with pytest.raises(ObjectNotFoundError):
            get_category("does-not-exist")
