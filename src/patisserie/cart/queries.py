"""Read-side helpers for carts."""

from patisserie.cart.cart import Cart
from patisserie.cart.management import find_cart
from patisserie.utils.serialization import to_data


def cart_data(cart: Cart | None, user_id: str) -> dict:
    """The cart with totals; an empty cart when the user has none yet."""
    if cart is None:
        return {"user_id": user_id, "items": [], "cart_total": 0.0, "cart_count": 0}

    data = to_data(cart, cart_total=cart.cart_total, cart_count=cart.cart_count)
    data["items"] = [
        {key: value for key, value in item.items() if not key.startswith("_")} for item in data.get("items", [])
    ]
    return data


def get_cart(user_id: str) -> dict:
    return cart_data(find_cart(user_id), user_id)


def cart_count(user_id: str) -> int:
    cart = find_cart(user_id)
    return cart.cart_count if cart else 0
