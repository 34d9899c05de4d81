"""Read-side helpers for orders: lookups, listings, stats and the dispatch board."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from patisserie.auth.exceptions import PermissionDeniedError
from patisserie.order.order import Order, OrderStatus
from patisserie.utils.pagination import paginate
from patisserie.utils.serialization import to_data

UNKNOWN_HOSTEL = "Unknown Hostel"
UNKNOWN_CATEGORY = "Unknown Category"


def order_data(order: Order) -> dict:
    data = to_data(order, can_be_cancelled=order.can_be_cancelled)
    data["items"] = [
        {key: value for key, value in item.items() if not key.startswith("_")} for item in data.get("items", [])
    ]
    return data


def find_order(order_number: str) -> Order:
    orders = current_domain.repository_for(Order)._dao.query.filter(order_number=order_number).all().items
    if not orders:
        raise ObjectNotFoundError("Order not found")
    return orders[0]


def get_order_for(order_number: str, user_id: str, is_admin: bool = False) -> Order:
    order = find_order(order_number)
    if not is_admin and str(order.user_id) != str(user_id):
        raise PermissionDeniedError("Not authorized to view this order")
    return order


def list_user_orders(user_id: str, page: int = 1, limit: int = 10) -> tuple[list[dict], dict]:
    query = current_domain.repository_for(Order)._dao.query.filter(user_id=str(user_id)).order_by("-created_at")
    orders, pagination = paginate(query, page, limit)
    return [order_data(order) for order in orders], pagination


def list_orders(status: str | None = None, page: int = 1, limit: int = 10) -> tuple[list[dict], dict]:
    query = current_domain.repository_for(Order)._dao.query
    if status:
        query = query.filter(order_status=status)
    orders, pagination = paginate(query.order_by("-created_at"), page, limit)
    return [order_data(order) for order in orders], pagination


def order_stats() -> dict:
    query = current_domain.repository_for(Order)._dao.query
    stats = {status.value: query.filter(order_status=status.value).count() for status in OrderStatus}
    stats["total"] = query.count()
    return stats


def hostel_of(order: Order) -> str:
    return order.hostel_name or UNKNOWN_HOSTEL


def category_of(item) -> str:
    return item.category_name or UNKNOWN_CATEGORY


def grouped_pending_orders() -> list[dict]:
    """Placed orders grouped hostel -> category -> product for the dispatch board."""
    placed = (
        current_domain.repository_for(Order)
        ._dao.query.filter(order_status=OrderStatus.PLACED.value)
        .order_by("created_at")
        .limit(None)
        .all()
        .items
    )

    hostels: dict[str, dict] = {}
    for order in placed:
        hostel = hostels.setdefault(hostel_of(order), {"hostel": hostel_of(order), "totalOrders": 0, "categories": {}})
        for item in order.items:
            category = hostel["categories"].setdefault(
                category_of(item), {"category": category_of(item), "totalOrders": 0, "products": {}}
            )
            product = category["products"].setdefault(
                item.product_name,
                {
                    "productName": item.product_name,
                    "productId": str(item.product_id),
                    "orderCount": 0,
                    "totalQuantity": 0,
                    "orderIds": [],
                },
            )
            product["orderCount"] += 1
            product["totalQuantity"] += item.quantity
            product["orderIds"].append(str(order.id))
            category["totalOrders"] += 1
            hostel["totalOrders"] += 1

    return [
        {
            "hostel": hostel["hostel"],
            "totalOrders": hostel["totalOrders"],
            "categories": [
                {
                    "category": category["category"],
                    "totalOrders": category["totalOrders"],
                    "products": list(category["products"].values()),
                }
                for category in hostel["categories"].values()
            ],
        }
        for hostel in hostels.values()
    ]
