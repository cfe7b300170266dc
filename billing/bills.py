"""Bill history persistence and date grouping."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Iterable

from billing.config import BILLS_STORAGE_KEY
from billing.models import Bill, CartEntry, Product
from billing.storage import KeyValueStore

logger = logging.getLogger(__name__)


class BillLogCorruptedError(ValueError):
    """Raised when persisted bill history cannot be decoded."""


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise BillLogCorruptedError(message)


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def bill_to_dict(bill: Bill) -> dict[str, Any]:
    return {
        "date": bill.date,
        "items": [
            {
                "product": {
                    "id": entry.product.id,
                    "name": entry.product.name,
                    "price": entry.product.price,
                },
                "quantity": entry.quantity,
            }
            for entry in bill.items
        ],
        "total": bill.total,
        "paymentMethod": bill.payment_method,
    }


def _entry_from_dict(raw: object, bill_index: int, item_index: int) -> CartEntry:
    where = f"bill {bill_index} item {item_index}"
    _require(isinstance(raw, dict), f"{where} is not an object")
    product = raw.get("product")  # type: ignore[union-attr]
    quantity = raw.get("quantity")  # type: ignore[union-attr]
    _require(isinstance(product, dict), f"{where} has no product object")
    _require(isinstance(product.get("id"), str), f"{where} product id must be a string")
    _require(isinstance(product.get("name"), str), f"{where} product name must be a string")
    _require(_is_number(product.get("price")), f"{where} product price must be a number")
    _require(
        isinstance(quantity, int) and not isinstance(quantity, bool),
        f"{where} quantity must be an integer",
    )
    try:
        return CartEntry(
            product=Product(id=product["id"], name=product["name"], price=product["price"]),
            quantity=quantity,  # type: ignore[arg-type]
        )
    except ValueError as exc:
        raise BillLogCorruptedError(f"{where}: {exc}") from exc


def bill_from_dict(raw: object, index: int = 0) -> Bill:
    """Rebuild one Bill from its stored JSON shape, validating every field."""
    where = f"bill {index}"
    _require(isinstance(raw, dict), f"{where} is not an object")
    date = raw.get("date")  # type: ignore[union-attr]
    items = raw.get("items")  # type: ignore[union-attr]
    total = raw.get("total")  # type: ignore[union-attr]
    payment_method = raw.get("paymentMethod")  # type: ignore[union-attr]

    _require(isinstance(date, str), f"{where} date must be a string")
    try:
        _local_datetime(date)  # type: ignore[arg-type]
    except (ValueError, OverflowError) as exc:
        raise BillLogCorruptedError(f"{where} date is not a usable ISO-8601 timestamp: {date!r}") from exc
    _require(isinstance(items, list), f"{where} items must be a list")
    _require(_is_number(total), f"{where} total must be a number")
    _require(isinstance(payment_method, str), f"{where} paymentMethod must be a string")

    return Bill(
        date=date,  # type: ignore[arg-type]
        items=tuple(_entry_from_dict(item, index, idx) for idx, item in enumerate(items)),  # type: ignore[arg-type]
        total=total,  # type: ignore[arg-type]
        payment_method=payment_method,  # type: ignore[arg-type]
    )


def serialize_bills(bills: Iterable[Bill]) -> str:
    """Encode a bill log as the JSON array stored under the bills key."""
    return json.dumps([bill_to_dict(bill) for bill in bills])


def _reject_constant(name: str) -> None:
    raise BillLogCorruptedError(f"Bill history contains non-finite number {name}")


def deserialize_bills(raw: str) -> list[Bill]:
    """Decode a stored bill log, raising BillLogCorruptedError on bad data."""
    try:
        decoded = json.loads(raw, parse_constant=_reject_constant)
    except BillLogCorruptedError:
        raise
    except (TypeError, ValueError) as exc:
        raise BillLogCorruptedError(f"Bill history is not valid JSON: {exc}") from exc
    _require(isinstance(decoded, list), "Bill history must be a JSON array")
    return [bill_from_dict(item, idx) for idx, item in enumerate(decoded)]


def _local_datetime(timestamp: str) -> datetime:
    parsed = datetime.fromisoformat(timestamp)
    if parsed.tzinfo is None:
        return parsed
    return parsed.astimezone()


def bill_day_label(timestamp: str) -> str:
    """Locale-formatted calendar date of a bill timestamp, in local time."""
    return _local_datetime(timestamp).strftime("%x")


def bill_time_label(timestamp: str) -> str:
    """Locale-formatted time of day of a bill timestamp, in local time."""
    return _local_datetime(timestamp).strftime("%X")


def group_bills_by_date(bills: Iterable[Bill]) -> dict[str, list[Bill]]:
    """Group bills by calendar day.

    Days appear in the order they are first seen and bills keep their
    input order inside each day. Nothing is cached; call again after the
    log changes.
    """
    grouped: dict[str, list[Bill]] = {}
    for bill in bills:
        grouped.setdefault(bill_day_label(bill.date), []).append(bill)
    return grouped


class BillStore:
    """Append-only bill log kept as one JSON value in a key-value store."""

    def __init__(self, storage: KeyValueStore, key: str = BILLS_STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key

    def load(self) -> list[Bill]:
        raw = self.storage.get(self.key)
        if raw is None:
            logger.debug("bill log empty key=%r", self.key)
            return []
        try:
            bills = deserialize_bills(raw)
        except BillLogCorruptedError:
            logger.error("bill log corrupted key=%r", self.key)
            raise
        logger.debug("bill log loaded key=%r count=%d", self.key, len(bills))
        return bills

    def load_grouped(self) -> dict[str, list[Bill]]:
        return group_bills_by_date(self.load())

    def append(self, bill: Bill) -> None:
        bills = self.load()
        bills.append(bill)
        self.storage.set(self.key, serialize_bills(bills))
        logger.info(
            "bill appended key=%r count=%d total=%s payment=%s",
            self.key,
            len(bills),
            bill.total,
            bill.payment_method,
        )

    def clear(self) -> None:
        self.storage.remove(self.key)
        logger.info("bill log cleared key=%r", self.key)
