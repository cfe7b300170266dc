"""Rendering helpers for products, cart lines and bills."""

from __future__ import annotations

from rich.text import Text

from billing.bills import bill_time_label
from billing.config import CURRENCY_SYMBOL
from billing.models import PAYMENT_CASH, Bill, CartEntry, Product


def format_amount(amount: int | float) -> str:
    """Render a currency amount, dropping a trailing .0 on whole values."""
    if isinstance(amount, float) and amount.is_integer():
        amount = int(amount)
    return f"{CURRENCY_SYMBOL}{amount}"


def payment_badge_style(payment_method: str) -> str:
    """Return a consistent badge style for payment tags."""
    if payment_method == PAYMENT_CASH:
        return "bold #0b1f0f on #5fbf72"
    return "bold #ffffff on #5f3dc4"


def format_product_row(product: Product, quantity: int) -> Text:
    """Render a catalog row with its in-cart quantity, if any."""
    text = Text()
    text.append(f"{product.name} - {format_amount(product.price)}")
    if quantity:
        text.append("  ")
        text.append(f" − {quantity} + ", style="bold #ffffff on #007bff")
    return text


def format_cart_line(entry: CartEntry) -> Text:
    """Render ``name - price x qty = line total``."""
    return Text(
        f"{entry.product.name} - {format_amount(entry.product.price)} x {entry.quantity}"
        f" = {format_amount(entry.line_total)}"
    )


def format_bill_card(bill: Bill) -> Text:
    """Render one history entry: items, total, payment and time."""
    text = Text()
    for entry in bill.items:
        text.append(f"{entry.product.name} x {entry.quantity} = {format_amount(entry.line_total)}\n")
    text.append(f"Total: {format_amount(bill.total)}\n", style="bold")
    text.append("Payment: ")
    text.append(f" {bill.payment_method} ", style=payment_badge_style(bill.payment_method))
    text.append(f"\nTime: {bill_time_label(bill.date)}", style="dim")
    return text
