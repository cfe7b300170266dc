from __future__ import annotations

import random
from collections import Counter
from datetime import datetime, timezone

import pytest

from billing.data import PRODUCTS
from billing.models import CartEntry, Product
from billing.storage import StorageError


def test_increment_inserts_then_counts_up(cart, product_a):
    cart.increment(product_a)
    assert cart.quantity_of(product_a.id) == 1

    cart.increment(product_a)
    cart.increment(product_a)
    assert cart.entries[product_a.id] == CartEntry(product=product_a, quantity=3)


def test_decrement_from_one_removes_entry(cart, product_a):
    cart.increment(product_a)
    cart.decrement(product_a.id)

    assert product_a.id not in cart.entries
    assert cart.is_empty
    assert cart.quantity_of(product_a.id) == 0


def test_decrement_unknown_or_empty_is_ignored(cart, product_a):
    cart.decrement("missing")
    assert cart.is_empty

    cart.increment(product_a)
    cart.decrement("missing")
    assert cart.quantity_of(product_a.id) == 1


def test_decrement_above_one_subtracts(cart, product_a):
    for _ in range(3):
        cart.increment(product_a)
    cart.decrement(product_a.id)
    assert cart.quantity_of(product_a.id) == 2


def test_snapshots_are_not_affected_by_later_mutations(cart, product_a, product_b):
    cart.increment(product_a)
    before = cart.entries

    cart.increment(product_a)
    cart.increment(product_b)
    cart.decrement(product_a.id)

    assert dict(before) == {product_a.id: CartEntry(product=product_a, quantity=1)}
    with pytest.raises(TypeError):
        before["x"] = CartEntry(product=product_a, quantity=1)  # type: ignore[index]


@pytest.mark.parametrize("seed", range(10))
def test_random_sequences_match_clamped_counts(cart, seed):
    rng = random.Random(seed)
    expected: Counter[str] = Counter()

    for _ in range(200):
        product = rng.choice(PRODUCTS)
        if rng.random() < 0.55:
            cart.increment(product)
            expected[product.id] += 1
        else:
            cart.decrement(product.id)
            if expected[product.id] > 0:
                expected[product.id] -= 1

        assert all(entry.quantity >= 1 for entry in cart.entries.values())

    for product in PRODUCTS:
        assert cart.quantity_of(product.id) == expected[product.id]
        assert (product.id in cart.entries) == (expected[product.id] > 0)


def test_compute_total(cart, product_a, product_b):
    assert cart.compute_total() == 0

    cart.increment(product_a)
    cart.increment(product_a)
    cart.increment(product_b)

    assert cart.compute_total() == 550
    assert cart.item_count == 3


def test_checkout_appends_bill_and_empties_cart(cart, bill_store, product_a, product_b):
    cart.increment(product_a)
    cart.increment(product_a)
    cart.increment(product_b)

    now = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
    bill = cart.checkout("Cash", bill_store, now=now)

    assert bill.total == 550
    assert bill.payment_method == "Cash"
    assert len(bill.items) == 2
    assert bill.date == "2024-01-01T09:00:00.000Z"
    assert cart.is_empty
    assert cart.compute_total() == 0
    assert bill_store.load() == [bill]


def test_checkout_empty_cart_is_permitted(cart, bill_store):
    bill = cart.checkout("PhonePe", bill_store)

    assert bill.items == ()
    assert bill.total == 0
    assert cart.compute_total() == 0
    assert bill_store.load() == [bill]


def test_checkout_stores_unlisted_payment_method_verbatim(cart, bill_store, product_a):
    cart.increment(product_a)
    bill = cart.checkout("Voucher", bill_store)
    assert bill_store.load()[0].payment_method == "Voucher"
    assert bill.payment_method == "Voucher"


def test_failed_append_keeps_cart(cart, failing_bill_store, product_a, product_b):
    cart.increment(product_a)
    cart.increment(product_b)

    with pytest.raises(StorageError):
        cart.checkout("Cash", failing_bill_store)

    assert cart.quantity_of(product_a.id) == 1
    assert cart.quantity_of(product_b.id) == 1
    assert cart.compute_total() == 400


def test_product_requires_positive_price():
    with pytest.raises(ValueError):
        Product(id="x", name="Free", price=0)


def test_cart_entry_requires_positive_quantity(product_a):
    with pytest.raises(ValueError):
        CartEntry(product=product_a, quantity=0)
