"""Domain events for the Category aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from patisserie.domain import patisserie


@patisserie.event(part_of="Category")
class CategoryCreated:
    """A new menu section was added."""

    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)


@patisserie.event(part_of="Category")
class CategoryUpdated:
    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    is_active: Boolean()


@patisserie.event(part_of="Category")
class CategoryDeactivated:
    """A category was soft-deleted and hidden from the storefront."""

    __version__ = 1

    category_id: Identifier(required=True)
    deactivated_at: DateTime(required=True)
