"""Stock and best-seller bookkeeping driven by placed orders."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from patisserie.domain import patisserie
from patisserie.order.events import OrderPlaced
from patisserie.product.product import Product

logger = structlog.get_logger(__name__)


@patisserie.command(part_of="Product")
class RecordProductSale:
    product_id: Identifier(required=True)
    variant_index: Integer(default=0, min_value=0)
    quantity: Integer(required=True, min_value=1)


def record_sale(product_id, variant_index, quantity):
    repo = current_domain.repository_for(Product)
    product = repo.get(product_id)
    product.record_sale(variant_index, quantity)
    repo.add(product)
    return product


@patisserie.command_handler(part_of=Product)
class RecordProductSaleHandler:
    @handle(RecordProductSale)
    def record_product_sale(self, command):
        product = record_sale(command.product_id, command.variant_index, command.quantity)
        return product.total_order_count


@patisserie.event_handler(part_of=Product, stream_category="patisserie::order")
class OrderSalesHandler:
    """Decrements stock and bumps order counts once an order is placed."""

    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        for item in event.items:
            try:
                record_sale(item["product_id"], item.get("variant_index", 0), item["quantity"])
            except (ObjectNotFoundError, ValidationError) as exc:
                logger.warning(
                    "Could not record product sale",
                    order_number=event.order_number,
                    product_id=item.get("product_id"),
                    error=str(exc),
                )
