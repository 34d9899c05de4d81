"""Order status update: sent to the customer whenever the kitchen moves an order along."""

from html import escape

from patisserie.templates.common import BRAND, layout, status_label

_MESSAGES = {
    "confirmed": "Your order has been confirmed.",
    "preparing": "Our bakers are preparing your order.",
    "ready": "Your order is ready.",
    "out_for_delivery": "Your order is on its way!",
    "delivered": "Your order has been delivered. Enjoy!",
    "cancelled": "Your order has been cancelled.",
}


class OrderStatusTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        status = context.get("status", "")
        label = status_label(status)
        message = _MESSAGES.get(status, f"Your order status is now {label}.")
        tracking_url = context.get("tracking_url", "")

        body = f"Hi {context.get('user_name') or 'there'},\n\n{message}\n\nTrack your order: {tracking_url}\n\n{BRAND}"
        html_body = layout(
            f"Order #{order_number} - {label}",
            f"<p>{escape(message)}</p><p><a href=\"{escape(tracking_url)}\">Track your order</a></p>",
        )
        return {"subject": f"Order #{order_number} - {label}", "body": body, "html_body": html_body}
