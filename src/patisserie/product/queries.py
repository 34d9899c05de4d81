"""Read-side helpers for the storefront product listing."""

from protean import Q
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from patisserie.product.product import Product
from patisserie.utils.pagination import paginate
from patisserie.utils.serialization import to_data

SORTABLE_FIELDS = {"created_at", "updated_at", "name", "total_order_count", "code"}


def product_data(product: Product) -> dict:
    variants = []
    for index, variant in enumerate(product.ordered_variants()):
        variant_data = to_data(variant)
        variant_data.update(
            index=index,
            final_price=product.final_price(index),
            discount_percentage=product.discount_percentage(index),
        )
        variants.append(variant_data)

    return to_data(
        product,
        variants=variants,
        featured_image=product.featured_image,
        is_best_seller=product.is_best_seller,
    )


def list_products(
    category_id=None,
    search=None,
    sort="created_at",
    order="desc",
    page=1,
    limit=10,
    include_inactive=False,
):
    query = current_domain.repository_for(Product)._dao.query
    if not include_inactive:
        query = query.filter(is_active=True)
    if category_id:
        query = query.filter(category_id=category_id)
    if search:
        query = query.filter(Q(name__icontains=search) | Q(description__icontains=search))

    sort_field = sort if sort in SORTABLE_FIELDS else "created_at"
    query = query.order_by(f"-{sort_field}" if order == "desc" else sort_field)

    products, pagination = paginate(query, page, limit)
    return [product_data(product) for product in products], pagination


def get_product(product_id_or_code: str) -> Product:
    repo = current_domain.repository_for(Product)
    product = repo.get_or_none(product_id_or_code)
    if product is None:
        matches = repo._dao.query.filter(code=product_id_or_code).all().items
        product = matches[0] if matches else None
    if product is None:
        raise ObjectNotFoundError("Product not found")
    return product
