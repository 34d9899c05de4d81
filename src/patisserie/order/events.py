"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, List, String, Text

from patisserie.domain import patisserie


@patisserie.event(part_of="Order")
class OrderInitiated:
    """An online order was created and is waiting for payment."""

    __version__ = 1

    order_id: Identifier(required=True)
    order_number: String(required=True)
    user_id: Identifier(required=True)
    grand_total: Float(required=True)
    gateway_order_id: String()


@patisserie.event(part_of="Order")
class OrderPlaced:
    """An order entered the kitchen queue.

    Raised at creation for cash on delivery and after payment verification for
    online orders. ``items`` carries ``product_id``, ``product_name``,
    ``category_name``, ``variant_index``, ``quantity`` and ``price``.
    """

    __version__ = 1

    order_id: Identifier(required=True)
    order_number: String(required=True)
    user_id: Identifier(required=True)
    payment_method: String(required=True)
    payment_status: String(required=True)
    grand_total: Float(required=True)
    donation_amount: Float(default=0.0)
    items: List(content_type=dict)
    user_name: String()
    user_email: String()
    user_phone: String()
    delivery_location: String()
    hostel_name: String()
    gateway_order_id: String()
    gateway_payment_id: String()
    placed_at: DateTime(required=True)


@patisserie.event(part_of="Order")
class OrderPaymentVerified:
    __version__ = 1

    order_id: Identifier(required=True)
    order_number: String(required=True)
    gateway_order_id: String()
    gateway_payment_id: String(required=True)
    amount: Float(required=True)
    verified_at: DateTime(required=True)


@patisserie.event(part_of="Order")
class OrderPaymentFailed:
    __version__ = 1

    order_id: Identifier(required=True)
    order_number: String(required=True)
    gateway_order_id: String()
    reason: String()


@patisserie.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id: Identifier(required=True)
    order_number: String(required=True)
    user_id: Identifier(required=True)
    user_email: String()
    user_name: String()
    previous_status: String(required=True)
    new_status: String(required=True)
    changed_at: DateTime(required=True)


@patisserie.event(part_of="Order")
class OrderCancelled:
    __version__ = 1

    order_id: Identifier(required=True)
    order_number: String(required=True)
    user_id: Identifier(required=True)
    reason: Text()
    cancelled_by: String()
    cancelled_at: DateTime(required=True)


@patisserie.event(part_of="Order")
class OrdersDispatched:
    """A batch of placed orders left the kitchen together.

    Raised once per batch, on the oldest order of the batch.
    """

    __version__ = 1

    order_ids: List(content_type=str)
    order_numbers: List(content_type=str)
    hostel_name: String()
    category_name: String()
    product_name: String()
    count: Integer(required=True)
    dispatched_at: DateTime(required=True)
