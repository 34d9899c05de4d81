"""New order alert: sent to the shop admins for every placed order."""

from html import escape

from patisserie.templates.common import item_lines, item_rows, layout, money


class NewOrderAlertTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        items = context.get("items") or []
        customer = f"{context.get('user_name') or ''} <{context.get('user_email') or ''}>"
        phone = context.get("user_phone") or "-"
        destination = f"{context.get('hostel_name') or 'Unknown Hostel'}, {context.get('delivery_location') or ''}"

        body = (
            f"New order #{order_number}\n\n"
            f"Customer: {customer}\nPhone: {phone}\nDeliver to: {destination}\n"
            f"Payment: {context.get('payment_method')} ({context.get('payment_status')})\n\n"
            f"{item_lines(items)}\n\n"
            f"Grand total: {money(context.get('grand_total'))}"
        )
        html_body = layout(
            f"New Order - #{order_number}",
            f"<p><strong>Customer:</strong> {escape(customer)}<br>"
            f"<strong>Phone:</strong> {escape(phone)}<br>"
            f"<strong>Deliver to:</strong> {escape(destination)}</p>"
            f"{item_rows(items)}"
            f"<p><strong>Grand total:</strong> {money(context.get('grand_total'))}</p>",
        )
        return {"subject": f"New Order - #{order_number}", "body": body, "html_body": html_body}
