"""Checkout, order tracking and the admin dispatch board."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from patisserie.api.dependencies import Page, admin_user, current_user, page_params
from patisserie.api.responses import envelope, failure
from patisserie.api.schemas import (
    CancelOrderRequest,
    DispatchOrdersRequest,
    PlaceOrderRequest,
    UpdateOrderStatusRequest,
    VerifyPaymentRequest,
)
from patisserie.identity.user import User
from patisserie.order.cancellation import CancelOrder
from patisserie.order.dispatch import DispatchOrders
from patisserie.order.placement import PlaceOrder
from patisserie.order.queries import (
    find_order,
    get_order_for,
    grouped_pending_orders,
    list_orders,
    list_user_orders,
    order_data,
    order_stats,
)
from patisserie.order.status import UpdateOrderStatus
from patisserie.order.verification import VerifyPayment
from patisserie.utils.serialization import compact

router = APIRouter(prefix="/api/orders", tags=["orders"])
admin_router = APIRouter(prefix="/api/admin/orders", tags=["admin"], dependencies=[Depends(admin_user)])


@router.post("", status_code=201)
async def place_order(body: PlaceOrderRequest, user: User = Depends(current_user)):
    command = PlaceOrder(
        **compact(
            user_id=str(user.id),
            payment_method=body.payment_method,
            delivery_location=body.delivery_location,
            hostel_name=body.hostel_name,
            location_id=body.location_id,
            user_name=body.user_name,
            user_phone=body.user_phone,
            donation_amount=body.donation_amount,
        )
    )
    result = current_domain.process(command, asynchronous=False)
    return envelope(result, "Order created successfully", status_code=201)


@router.post("/verify-payment")
async def verify_payment(body: VerifyPaymentRequest, user: User = Depends(current_user)):
    get_order_for(body.order_number, str(user.id), user.is_admin)

    command = VerifyPayment(
        order_number=body.order_number,
        gateway_order_id=body.gateway_order_id,
        gateway_payment_id=body.gateway_payment_id,
        signature=body.signature,
    )
    result = current_domain.process(command, asynchronous=False)
    if not result["verified"]:
        return failure("Payment verification failed", 400, data=result)
    return envelope(result, "Payment verified successfully")


@router.get("")
async def my_orders(user: User = Depends(current_user), paging: Page = Depends(page_params)):
    data, pagination = list_user_orders(str(user.id), page=paging.page, limit=paging.limit)
    return envelope(data, pagination=pagination)


@router.get("/{order_number}")
async def order_detail(order_number: str, user: User = Depends(current_user)):
    return envelope(order_data(get_order_for(order_number, str(user.id), user.is_admin)))


@router.post("/{order_number}/cancel")
async def cancel_order(order_number: str, body: CancelOrderRequest, user: User = Depends(current_user)):
    command = CancelOrder(**compact(order_number=order_number, user_id=str(user.id), reason=body.reason))
    current_domain.process(command, asynchronous=False)
    return envelope(order_data(find_order(order_number)), "Order cancelled successfully")


# --- Admin ---


@admin_router.get("")
async def all_orders(status: str | None = None, paging: Page = Depends(page_params)):
    data, pagination = list_orders(status=status, page=paging.page, limit=paging.limit)
    return envelope(data, pagination=pagination)


@admin_router.get("/stats")
async def stats():
    return envelope(order_stats())


@admin_router.get("/grouped")
async def grouped():
    return envelope(grouped_pending_orders())


@admin_router.post("/dispatch")
async def dispatch(body: DispatchOrdersRequest):
    command = DispatchOrders(
        hostel_name=body.hostel_name,
        category_name=body.category_name,
        product_name=body.product_name,
        count=body.count,
    )
    order_ids = current_domain.process(command, asynchronous=False)
    return envelope(
        {"dispatchedOrderIds": order_ids, "count": len(order_ids)},
        f"{len(order_ids)} orders dispatched",
    )


@admin_router.patch("/{order_number}/status")
async def update_status(order_number: str, body: UpdateOrderStatusRequest):
    command = UpdateOrderStatus(order_number=order_number, status=body.status)
    current_domain.process(command, asynchronous=False)
    return envelope(order_data(find_order(order_number)), "Order status updated successfully")
