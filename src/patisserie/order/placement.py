"""Checkout: turn the user's cart into an order.

Cash on delivery orders are placed immediately. Online orders are created
``pending`` together with a gateway order; the storefront completes the
payment and calls back into :mod:`patisserie.order.verification`.
"""

from datetime import timedelta

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from patisserie.config import setting
from patisserie.domain import patisserie
from patisserie.gateway import get_gateway
from patisserie.gateway.port import GatewayError
from patisserie.order.order import Order, OrderStatus, PaymentMethod, generate_order_number
from patisserie.utils.clock import as_utc, utcnow

logger = structlog.get_logger(__name__)

DUPLICATE_WINDOW = timedelta(seconds=60)


@patisserie.command(part_of="Order")
class PlaceOrder:
    user_id: Identifier(required=True)
    payment_method: String(required=True, max_length=20)
    delivery_location: String(max_length=200)
    hostel_name: String(max_length=100)
    location_id: Identifier()
    user_name: String(max_length=100)
    user_phone: String(max_length=20)
    donation_amount: Float(default=0.0, min_value=0)


def _priced_items(cart) -> tuple[list[dict], float, float]:
    """Price cart lines from the live catalogue, enforcing availability and stock."""
    from patisserie.cart.management import snapshot
    from patisserie.product.product import Product

    products = current_domain.repository_for(Product)
    items, cart_total, discounted_total = [], 0.0, 0.0

    for line in cart.items:
        product = products.get_or_none(line.product_id)
        if product is None or not product.is_active:
            raise ValidationError({"items": [f"{line.name or 'A product'} is no longer available"]})

        variant = product.variant_at(line.variant_index)
        stock = product.stock_for(line.variant_index)
        if stock is not None and line.quantity > stock:
            raise ValidationError({"items": [f"Insufficient stock for {product.name}. Only {stock} left."]})

        current = snapshot(product, line.variant_index)
        items.append(
            {
                "product_id": str(product.id),
                "product_name": product.name,
                "category_name": current["category_name"],
                "variant_index": line.variant_index,
                "quantity": line.quantity,
                "price": current["price"],
            }
        )
        cart_total += variant.price * line.quantity
        discounted_total += current["price"] * line.quantity

    return items, round(cart_total, 2), round(discounted_total, 2)


def _ensure_not_duplicate(user_id, grand_total):
    cutoff = utcnow() - DUPLICATE_WINDOW
    recent = (
        current_domain.repository_for(Order)
        ._dao.query.filter(user_id=str(user_id), grand_total=grand_total)
        .exclude(order_status=OrderStatus.CANCELLED.value)
        .limit(None)
        .all()
        .items
    )
    if any(as_utc(order.created_at) >= cutoff for order in recent if order.created_at):
        raise ValidationError(
            {"order": ["Duplicate order detected. Please wait a minute before placing the same order again"]}
        )


@patisserie.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        from patisserie.cart.management import find_cart
        from patisserie.donation.donation import MINIMUM_DONATION
        from patisserie.identity.user import User
        from patisserie.location.queries import delivery_charge_for
        from patisserie.shop.queries import is_shop_open

        if command.payment_method not in [method.value for method in PaymentMethod]:
            raise ValidationError({"payment_method": ["Invalid payment method. Must be: razorpay or cod"]})

        if not is_shop_open():
            raise ValidationError({"shop": ["Shop is currently closed"]})

        user = current_domain.repository_for(User).get(command.user_id)
        cart = find_cart(user.id)
        if cart is None or not cart.items:
            raise ValidationError({"cart": ["Cart is empty"]})

        items, cart_total, discounted_total = _priced_items(cart)
        delivery_charge = delivery_charge_for(
            command.location_id or user.location_id,
            default=float(setting("DELIVERY_CHARGE", 49)),
        )
        donation_amount = round(command.donation_amount or 0.0, 2)
        if 0 < donation_amount < MINIMUM_DONATION:
            raise ValidationError({"donation_amount": [f"Minimum donation amount is ₹{MINIMUM_DONATION}"]})
        grand_total = round(discounted_total + delivery_charge + donation_amount, 2)

        _ensure_not_duplicate(user.id, grand_total)

        order_number = generate_order_number()
        gateway, gateway_order = None, None
        if command.payment_method == PaymentMethod.RAZORPAY.value:
            gateway = get_gateway()
            try:
                gateway_order = gateway.create_order(int(round(grand_total * 100)), "INR", order_number)
            except GatewayError as exc:
                logger.error("Gateway order creation failed", order_number=order_number, error=str(exc))
                raise ValidationError({"payment": ["Unable to initiate payment. Please try again"]}) from exc

        order = Order.place(
            user_id=user.id,
            payment_method=command.payment_method,
            items=items,
            summary={
                "cart_total": cart_total,
                "discounted_total": discounted_total,
                "delivery_charge": delivery_charge,
                "donation_amount": donation_amount,
                "grand_total": grand_total,
            },
            customer={
                "user_name": command.user_name or user.name,
                "user_email": user.email,
                "user_phone": command.user_phone or user.phone,
                "delivery_location": command.delivery_location,
                "hostel_name": command.hostel_name or user.hostel_name,
            },
            order_number=order_number,
            gateway_order_id=gateway_order.id if gateway_order else None,
        )

        result = {"order_id": str(order.id), "order_number": order.order_number, "grand_total": grand_total}

        if gateway_order is not None:
            result.update(
                {
                    "gateway_order_id": gateway_order.id,
                    "amount": gateway_order.amount,
                    "currency": gateway_order.currency,
                    "key_id": gateway.key_id,
                }
            )

        current_domain.repository_for(Order).add(order)
        logger.info(
            "Order created",
            order_number=order.order_number,
            payment_method=order.payment_method,
            grand_total=grand_total,
        )
        return result
