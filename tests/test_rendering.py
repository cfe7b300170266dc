from __future__ import annotations

from billing.models import Bill, CartEntry
from billing.rendering import format_amount, format_bill_card, format_cart_line, format_product_row


def test_format_amount():
    assert format_amount(150) == "₹150"
    assert format_amount(150.0) == "₹150"
    assert format_amount(12.5) == "₹12.5"


def test_format_cart_line(product_a):
    line = format_cart_line(CartEntry(product=product_a, quantity=2))
    assert line.plain == "Product A - ₹150 x 2 = ₹300"


def test_format_product_row_shows_quantity_only_when_in_cart(product_b):
    assert format_product_row(product_b, 0).plain == "Product B - ₹250"
    assert "− 3 +" in format_product_row(product_b, 3).plain


def test_format_bill_card(product_a, product_b):
    bill = Bill(
        date="2024-01-01T09:00",
        items=(CartEntry(product=product_a, quantity=2), CartEntry(product=product_b, quantity=1)),
        total=550,
        payment_method="PhonePe",
    )
    plain = format_bill_card(bill).plain

    assert "Product A x 2 = ₹300" in plain
    assert "Product B x 1 = ₹250" in plain
    assert "Total: ₹550" in plain
    assert "PhonePe" in plain
    assert "Time: " in plain
