from __future__ import annotations

import pytest

from billing.bills import BillStore
from billing.cart import CartManager
from billing.data import PRODUCTS_BY_ID
from billing.models import Product
from billing.storage import MemoryKeyValueStore, StorageError


class FailingKeyValueStore(MemoryKeyValueStore):
    """Reads work, writes and removes raise like a full or missing disk."""

    def set(self, key: str, value: str) -> None:
        raise StorageError(f"Could not write {key!r}: disk full")

    def remove(self, key: str) -> None:
        raise StorageError(f"Could not remove {key!r}: disk full")


@pytest.fixture
def product_a() -> Product:
    return PRODUCTS_BY_ID["1"]


@pytest.fixture
def product_b() -> Product:
    return PRODUCTS_BY_ID["2"]


@pytest.fixture
def cart() -> CartManager:
    return CartManager()


@pytest.fixture
def storage() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def bill_store(storage: MemoryKeyValueStore) -> BillStore:
    return BillStore(storage)


@pytest.fixture
def failing_bill_store() -> BillStore:
    return BillStore(FailingKeyValueStore())
