"""Batch dispatch of placed orders from the admin dispatch board."""

from datetime import UTC, datetime

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Integer, String
from protean.utils.globals import current_domain

from patisserie.domain import patisserie
from patisserie.order.events import OrdersDispatched
from patisserie.order.order import Order, OrderStatus
from patisserie.order.queries import category_of, hostel_of

logger = structlog.get_logger(__name__)


@patisserie.command(part_of="Order")
class DispatchOrders:
    hostel_name: String(required=True, max_length=100)
    category_name: String(required=True, max_length=100)
    product_name: String(required=True, max_length=200)
    count: Integer(required=True)


def matching_orders(hostel_name, category_name, product_name) -> list[Order]:
    """Placed orders for a hostel containing the product, oldest first."""
    placed = (
        current_domain.repository_for(Order)
        ._dao.query.filter(order_status=OrderStatus.PLACED.value)
        .order_by("created_at")
        .limit(None)
        .all()
        .items
    )
    return [
        order
        for order in placed
        if hostel_of(order) == hostel_name
        and any(item.product_name == product_name and category_of(item) == category_name for item in order.items)
    ]


@patisserie.command_handler(part_of=Order)
class DispatchOrdersHandler:
    @handle(DispatchOrders)
    def dispatch_orders(self, command):
        if command.count is None or command.count <= 0:
            raise ValidationError({"count": ["Count must be greater than 0"]})

        batch = matching_orders(command.hostel_name, command.category_name, command.product_name)[: command.count]
        if not batch:
            raise ObjectNotFoundError("No matching placed orders found")

        repo = current_domain.repository_for(Order)
        for order in batch:
            order.dispatch()

        batch[0].raise_(
            OrdersDispatched(
                order_ids=[str(order.id) for order in batch],
                order_numbers=[order.order_number for order in batch],
                hostel_name=command.hostel_name,
                category_name=command.category_name,
                product_name=command.product_name,
                count=len(batch),
                dispatched_at=datetime.now(UTC),
            )
        )
        for order in batch:
            repo.add(order)

        logger.info(
            "Orders dispatched",
            hostel=command.hostel_name,
            product=command.product_name,
            count=len(batch),
        )
        return [str(order.id) for order in batch]
