"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer

from patisserie.domain import patisserie


@patisserie.event(part_of="Cart")
class CartItemAdded:
    __version__ = 1

    cart_id: Identifier(required=True)
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    variant_index: Integer(default=0)
    quantity: Integer(required=True)


@patisserie.event(part_of="Cart")
class CartCleared:
    __version__ = 1

    cart_id: Identifier(required=True)
    user_id: Identifier(required=True)
