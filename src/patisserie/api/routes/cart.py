"""The signed-in customer's cart."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from patisserie.api.dependencies import current_user
from patisserie.api.responses import envelope
from patisserie.api.schemas import AddToCartRequest, UpdateCartItemRequest
from patisserie.cart.management import AddToCart, ClearCart, RefreshCartPrices, RemoveCartItem, UpdateCartItem
from patisserie.cart.queries import cart_count, get_cart
from patisserie.identity.user import User

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("")
async def cart(user: User = Depends(current_user)):
    return envelope(get_cart(str(user.id)))


@router.get("/count")
async def count(user: User = Depends(current_user)):
    return envelope({"count": cart_count(str(user.id))})


@router.post("")
async def add_to_cart(body: AddToCartRequest, user: User = Depends(current_user)):
    command = AddToCart(
        user_id=str(user.id),
        product_id=body.product_id,
        variant_index=body.variant_index,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return envelope(get_cart(str(user.id)), "Item added to cart")


@router.put("/{product_id}")
async def update_item(product_id: str, body: UpdateCartItemRequest, user: User = Depends(current_user)):
    command = UpdateCartItem(
        user_id=str(user.id),
        product_id=product_id,
        variant_index=body.variant_index,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return envelope(get_cart(str(user.id)), "Cart updated")


@router.delete("/{product_id}")
async def remove_item(product_id: str, variant_index: int = 0, user: User = Depends(current_user)):
    command = RemoveCartItem(user_id=str(user.id), product_id=product_id, variant_index=variant_index)
    current_domain.process(command, asynchronous=False)
    return envelope(get_cart(str(user.id)), "Item removed from cart")


@router.delete("")
async def clear(user: User = Depends(current_user)):
    current_domain.process(ClearCart(user_id=str(user.id)), asynchronous=False)
    return envelope(get_cart(str(user.id)), "Cart cleared")


@router.post("/refresh")
async def refresh(user: User = Depends(current_user)):
    changed = current_domain.process(RefreshCartPrices(user_id=str(user.id)), asynchronous=False)
    return envelope({**get_cart(str(user.id)), "changed": changed})
