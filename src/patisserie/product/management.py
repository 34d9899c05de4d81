"""Product management: creation, updates, soft deletion."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, List, String, Text
from protean.utils.globals import current_domain

from patisserie.category.category import Category
from patisserie.domain import patisserie
from patisserie.product.product import Product


@patisserie.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=200)
    description: Text()
    category_id: Identifier(required=True)
    images: List(content_type=str)
    videos: List(content_type=str)
    tags: List(content_type=str)
    is_veg: Boolean(default=True)
    has_egg: Boolean(default=False)
    badge: String(max_length=50)
    cancel_offer: Boolean(default=False)
    variants: List(content_type=dict)


@patisserie.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=200)
    description: Text()
    category_id: Identifier()
    images: Text(sanitize=False)  # JSON arrays, omitted when unchanged
    videos: Text(sanitize=False)
    tags: Text(sanitize=False)
    variants: Text(sanitize=False)
    is_veg: Boolean()
    has_egg: Boolean()
    badge: String(max_length=50)
    cancel_offer: Boolean()
    is_active: Boolean()


@patisserie.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


def _category_or_error(category_id) -> Category:
    category = current_domain.repository_for(Category).get_or_none(category_id)
    if category is None:
        raise ValidationError({"category_id": ["Category not found"]})
    return category


def next_product_code(category: Category) -> str:
    """``PREFIX-NNN`` where PREFIX is the first five letters of the category name."""
    prefix = category.name[:5].upper() if category.name else "PRD"
    taken = current_domain.repository_for(Product)._dao.query.filter(code__startswith=f"{prefix}-").count()
    return f"{prefix}-{taken + 1:03d}"


def _loads(raw):
    return json.loads(raw) if raw else None


@patisserie.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        category = _category_or_error(command.category_id)

        product = Product.create(
            code=next_product_code(category),
            name=command.name,
            category_id=str(category.id),
            variants=command.variants,
            description=command.description,
            images=command.images,
            videos=command.videos,
            tags=command.tags,
            is_veg=command.is_veg,
            has_egg=command.has_egg,
            badge=command.badge,
            cancel_offer=command.cancel_offer,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        if command.category_id:
            _category_or_error(command.category_id)

        product.update_details(
            variants=_loads(command.variants),
            name=command.name,
            description=command.description,
            category_id=command.category_id,
            images=_loads(command.images),
            videos=_loads(command.videos),
            tags=_loads(command.tags),
            is_veg=command.is_veg,
            has_egg=command.has_egg,
            badge=command.badge,
            cancel_offer=command.cancel_offer,
            is_active=command.is_active,
        )
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.deactivate()
        repo.add(product)
