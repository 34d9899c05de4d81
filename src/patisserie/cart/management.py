"""Cart commands: add, update, remove, clear and price reconciliation."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from patisserie.cart.cart import Cart
from patisserie.domain import patisserie
from patisserie.product.product import Product

logger = structlog.get_logger(__name__)


@patisserie.command(part_of="Cart")
class AddToCart:
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    variant_index: Integer(default=0, min_value=0)
    quantity: Integer(default=1, min_value=1)


@patisserie.command(part_of="Cart")
class UpdateCartItem:
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    variant_index: Integer(default=0, min_value=0)
    quantity: Integer(required=True, min_value=0)


@patisserie.command(part_of="Cart")
class RemoveCartItem:
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    variant_index: Integer(default=0, min_value=0)


@patisserie.command(part_of="Cart")
class ClearCart:
    user_id: Identifier(required=True)


@patisserie.command(part_of="Cart")
class RefreshCartPrices:
    user_id: Identifier(required=True)


def find_cart(user_id) -> Cart | None:
    carts = current_domain.repository_for(Cart)._dao.query.filter(user_id=str(user_id)).all().items
    return carts[0] if carts else None


def _category_name(product: Product) -> str | None:
    from patisserie.category.category import Category

    category = current_domain.repository_for(Category).get_or_none(product.category_id)
    return category.name if category else None


def snapshot(product: Product, variant_index: int) -> dict:
    """Display fields a cart line keeps from the catalogue."""
    return {
        "name": product.name,
        "price": product.final_price(variant_index),
        "image": product.featured_image,
        "category_name": _category_name(product),
        "has_egg": product.has_egg,
    }


def available_product(product_id) -> Product:
    product = current_domain.repository_for(Product).get_or_none(product_id)
    if product is None:
        raise ObjectNotFoundError("Product not found")
    if not product.is_active:
        raise ValidationError({"product_id": ["Product is not available"]})
    return product


def check_stock(product: Product, variant_index: int, requested: int) -> None:
    stock = product.stock_for(variant_index)
    if stock is not None and requested > stock:
        raise ValidationError({"quantity": [f"Only {stock} items available in stock"]})


@patisserie.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = available_product(command.product_id)
        product.variant_at(command.variant_index)

        cart = find_cart(command.user_id) or Cart.create(command.user_id)
        requested = cart.quantity_of(product.id, command.variant_index) + command.quantity
        check_stock(product, command.variant_index, requested)

        cart.add_item(product.id, command.variant_index, command.quantity, snapshot(product, command.variant_index))
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        cart = find_cart(command.user_id)
        if cart is None or cart.find_item(command.product_id, command.variant_index) is None:
            raise ObjectNotFoundError("Item not found in cart")

        if command.quantity > 0:
            product = available_product(command.product_id)
            check_stock(product, command.variant_index, command.quantity)

        cart.update_quantity(command.product_id, command.quantity, command.variant_index)
        current_domain.repository_for(Cart).add(cart)

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        cart = find_cart(command.user_id)
        if cart is None or cart.find_item(command.product_id, command.variant_index) is None:
            raise ObjectNotFoundError("Item not found in cart")

        cart.remove_item(command.product_id, command.variant_index)
        current_domain.repository_for(Cart).add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = find_cart(command.user_id)
        if cart is None or not cart.items:
            return

        cart.clear()
        current_domain.repository_for(Cart).add(cart)

    @handle(RefreshCartPrices)
    def refresh_prices(self, command):
        """Re-price every line from the catalogue and drop unavailable products.

        Returns the number of lines that changed or were removed.
        """
        cart = find_cart(command.user_id)
        if cart is None:
            return 0

        products = current_domain.repository_for(Product)
        changed = 0
        for item in list(cart.items):
            product = products.get_or_none(item.product_id)
            if product is None or not product.is_active or item.variant_index >= len(product.variants):
                cart.remove_items(item)
                changed += 1
                continue

            if cart.refresh_item(item, snapshot(product, item.variant_index)):
                changed += 1

        if changed:
            logger.info("Cart prices refreshed", user_id=str(command.user_id), changed=changed)
            current_domain.repository_for(Cart).add(cart)
        return changed
