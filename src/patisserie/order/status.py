"""Admin status updates along the kitchen flow."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from patisserie.domain import patisserie
from patisserie.order.order import Order
from patisserie.order.queries import find_order


@patisserie.command(part_of="Order")
class UpdateOrderStatus:
    order_number: String(required=True, max_length=30)
    status: String(required=True, max_length=20)


@patisserie.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        order = find_order(command.order_number)
        order.change_status(command.status)
        current_domain.repository_for(Order).add(order)
        return order.order_status
