"""Domain events for the Product aggregate."""

from protean.fields import Boolean, Identifier, Integer, String

from patisserie.domain import patisserie


@patisserie.event(part_of="Product")
class ProductCreated:
    """A product was added to a category of the menu."""

    __version__ = 1

    product_id: Identifier(required=True)
    code: String(required=True)
    name: String(required=True)
    category_id: Identifier(required=True)


@patisserie.event(part_of="Product")
class ProductUpdated:
    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    is_active: Boolean()


@patisserie.event(part_of="Product")
class ProductDeactivated:
    __version__ = 1

    product_id: Identifier(required=True)


@patisserie.event(part_of="Product")
class ProductSold:
    """Units of a variant were sold through a placed order."""

    __version__ = 1

    product_id: Identifier(required=True)
    variant_index: Integer(required=True)
    quantity: Integer(required=True)
    total_order_count: Integer(required=True)
