"""Read-side helpers for categories."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from patisserie.category.category import Category
from patisserie.utils.cache import cache
from patisserie.utils.serialization import to_data

PUBLIC_CATEGORIES_KEY = "categories:public"


def category_data(category: Category) -> dict:
    return to_data(category, featured_image=category.featured_image)


def list_categories(include_inactive: bool = False) -> list[dict]:
    """Active categories sorted by name; the public list is cached."""

    def _load():
        query = current_domain.repository_for(Category)._dao.query
        if not include_inactive:
            query = query.filter(is_active=True)
        return [category_data(category) for category in query.order_by("name").limit(None).all().items]

    if include_inactive:
        return _load()
    return cache.get_or_set(PUBLIC_CATEGORIES_KEY, _load)


def get_category(category_id: str) -> Category:
    category = current_domain.repository_for(Category).get_or_none(category_id)
    if category is None:
        raise ObjectNotFoundError("Category not found")
    return category
