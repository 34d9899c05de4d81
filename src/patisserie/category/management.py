"""Category management: commands and handlers."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, List, String, Text
from protean.utils.globals import current_domain

from patisserie.category.category import Category
from patisserie.domain import patisserie


@patisserie.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    description: String(max_length=500)
    images: List(content_type=str)
    videos: List(content_type=str)


@patisserie.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)
    description: String(max_length=500)
    images: Text(sanitize=False)  # JSON array, omitted when unchanged
    videos: Text(sanitize=False)
    is_active: Boolean()


@patisserie.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier(required=True)


def _ensure_unique_name(name, exclude_id=None):
    repo = current_domain.repository_for(Category)
    matches = repo._dao.query.filter(name__iexact=name.strip()).all().items
    if any(str(match.id) != str(exclude_id) for match in matches):
        raise ValidationError({"name": ["Category with this name already exists"]})


@patisserie.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        _ensure_unique_name(command.name)

        category = Category.create(
            name=command.name,
            description=command.description,
            images=command.images,
            videos=command.videos,
        )
        current_domain.repository_for(Category).add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        if command.name:
            _ensure_unique_name(command.name, exclude_id=category.id)

        category.update_details(
            name=command.name,
            description=command.description,
            images=json.loads(command.images) if command.images else None,
            videos=json.loads(command.videos) if command.videos else None,
            is_active=command.is_active,
        )
        repo.add(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        from patisserie.product.product import Product

        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        active_products = (
            current_domain.repository_for(Product)
            ._dao.query.filter(category_id=str(category.id), is_active=True)
            .count()
        )
        if active_products:
            raise ValidationError(
                {
                    "category": [
                        f"Cannot delete category. It has {active_products} active product(s). "
                        "Please move or delete the products first."
                    ]
                }
            )

        category.deactivate()
        repo.add(category)
