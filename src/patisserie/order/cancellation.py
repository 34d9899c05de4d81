"""Customer cancellation of their own order."""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from patisserie.auth.exceptions import PermissionDeniedError
from patisserie.domain import patisserie
from patisserie.order.order import Order
from patisserie.order.queries import find_order


@patisserie.command(part_of="Order")
class CancelOrder:
    order_number: String(required=True, max_length=30)
    user_id: Identifier(required=True)
    reason: Text()


@patisserie.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        order = find_order(command.order_number)
        if str(order.user_id) != str(command.user_id):
            raise PermissionDeniedError("Not authorized to cancel this order")

        order.cancel(reason=command.reason or "Cancelled by customer", cancelled_by="customer")
        current_domain.repository_for(Order).add(order)
