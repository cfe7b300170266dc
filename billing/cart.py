"""In-session cart state and checkout."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Mapping, Protocol

from billing.models import Bill, CartEntry, Product

logger = logging.getLogger(__name__)


class BillSink(Protocol):
    def append(self, bill: Bill) -> None: ...


def _utc_now_iso(now: datetime | None = None) -> str:
    moment = now or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    stamp = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


class CartManager:
    """Product id -> CartEntry mapping for one billing session.

    Every mutation swaps in a new dict, so a mapping returned by
    ``entries`` never changes after it has been handed out.
    """

    def __init__(self) -> None:
        self._entries: dict[str, CartEntry] = {}

    @property
    def entries(self) -> Mapping[str, CartEntry]:
        return MappingProxyType(self._entries)

    @property
    def is_empty(self) -> bool:
        return not self._entries

    @property
    def item_count(self) -> int:
        return sum(entry.quantity for entry in self._entries.values())

    def quantity_of(self, product_id: str) -> int:
        entry = self._entries.get(product_id)
        if entry is None:
            return 0
        return entry.quantity

    def increment(self, product: Product) -> None:
        existing = self._entries.get(product.id)
        quantity = existing.quantity + 1 if existing else 1
        self._entries = {**self._entries, product.id: CartEntry(product=product, quantity=quantity)}
        logger.debug("cart increment product_id=%r quantity=%d", product.id, quantity)

    def decrement(self, product_id: str) -> None:
        existing = self._entries.get(product_id)
        if existing is None:
            return

        updated = dict(self._entries)
        if existing.quantity == 1:
            del updated[product_id]
            logger.debug("cart remove product_id=%r", product_id)
        else:
            updated[product_id] = CartEntry(product=existing.product, quantity=existing.quantity - 1)
            logger.debug("cart decrement product_id=%r quantity=%d", product_id, existing.quantity - 1)
        self._entries = updated

    def compute_total(self) -> int | float:
        return sum(entry.line_total for entry in self._entries.values())

    def clear(self) -> None:
        self._entries = {}

    def checkout(self, payment_method: str, bill_store: BillSink, now: datetime | None = None) -> Bill:
        """Record the cart as a bill and empty the cart.

        The payment method is stored as given. If the store append raises,
        the error propagates and the cart keeps its contents.
        """
        bill = Bill(
            date=_utc_now_iso(now),
            items=tuple(self._entries.values()),
            total=self.compute_total(),
            payment_method=payment_method,
        )
        bill_store.append(bill)
        self.clear()
        logger.info(
            "checkout complete items=%d total=%s payment=%s",
            len(bill.items),
            bill.total,
            payment_method,
        )
        return bill
