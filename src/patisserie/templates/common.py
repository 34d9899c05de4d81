"""Shared pieces for the HTML email layout."""

from html import escape

BRAND = "La Patisserie"


def status_label(status: str) -> str:
    """``out_for_delivery`` -> ``Out For Delivery``."""
    return " ".join(word.capitalize() for word in (status or "").split("_"))


def money(amount) -> str:
    return f"₹{float(amount or 0):.2f}"


def layout(title: str, content: str) -> str:
    return (
        "<html><body style=\"font-family: Arial, sans-serif; color: #281c20;\">"
        f"<h2 style=\"color: #733857;\">{escape(title)}</h2>"
        f"{content}"
        f"<p style=\"color: #888; font-size: 12px;\">{BRAND}</p>"
        "</body></html>"
    )


def item_rows(items: list[dict]) -> str:
    rows = "".join(
        f"<tr><td>{escape(str(item.get('product_name', '')))}</td>"
        f"<td>{item.get('quantity', 0)}</td>"
        f"<td>{money(item.get('price', 0))}</td></tr>"
        for item in items
    )
    return f"<table><tr><th>Item</th><th>Qty</th><th>Price</th></tr>{rows}</table>"


def item_lines(items: list[dict]) -> str:
    return "\n".join(
        f"- {item.get('product_name', '')} x{item.get('quantity', 0)} @ {money(item.get('price', 0))}"
        for item in items
    )
