"""Every router of the HTTP API, in mounting order."""

from patisserie.api.routes.banners import router as banner_router
from patisserie.api.routes.cart import router as cart_router
from patisserie.api.routes.catalogue import category_router, product_router
from patisserie.api.routes.contact import router as contact_router
from patisserie.api.routes.donations import router as donation_router
from patisserie.api.routes.locations import hostel_router, location_router
from patisserie.api.routes.newsletter import router as newsletter_router
from patisserie.api.routes.notifications import router as notification_router
from patisserie.api.routes.orders import admin_router as admin_order_router
from patisserie.api.routes.orders import router as order_router
from patisserie.api.routes.payments import router as payment_router
from patisserie.api.routes.seo import router as seo_router
from patisserie.api.routes.shop import router as shop_router
from patisserie.api.routes.users import auth_router, user_router

ROUTERS = [
    category_router,
    product_router,
    banner_router,
    newsletter_router,
    contact_router,
    donation_router,
    payment_router,
    cart_router,
    order_router,
    admin_order_router,
    notification_router,
    shop_router,
    location_router,
    hostel_router,
    auth_router,
    user_router,
    seo_router,
]

__all__ = ["ROUTERS"]
