"""Order confirmation: sent to the customer when an order is placed."""

from html import escape

from patisserie.templates.common import BRAND, item_lines, item_rows, layout, money


class OrderConfirmationTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        name = context.get("user_name") or "there"
        items = context.get("items") or []
        tracking_url = context.get("tracking_url", "")
        grand_total = money(context.get("grand_total"))
        payment = "Cash on Delivery" if context.get("payment_method") == "cod" else "Paid online"

        body = (
            f"Hi {name},\n\n"
            f"Thank you for your order #{order_number}!\n\n"
            f"{item_lines(items)}\n\n"
            f"Total: {grand_total} ({payment})\n"
            f"Delivering to: {context.get('hostel_name') or ''} {context.get('delivery_location') or ''}\n\n"
            f"Track your order: {tracking_url}\n\n"
            f"{BRAND}"
        )
        html_body = layout(
            f"Order Confirmation - #{order_number}",
            f"<p>Hi {escape(name)}, thank you for your order!</p>"
            f"{item_rows(items)}"
            f"<p><strong>Total:</strong> {grand_total} ({payment})</p>"
            f"<p><a href=\"{escape(tracking_url)}\">Track your order</a></p>",
        )
        return {"subject": f"Order Confirmation - #{order_number}", "body": body, "html_body": html_body}
