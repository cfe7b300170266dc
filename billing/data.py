"""Typed view of the static product catalog."""

from __future__ import annotations

from billing.constant import PRODUCT_CATALOG
from billing.models import Product

PRODUCTS: list[Product] = [
    Product(
        id=str(raw["id"]),
        name=str(raw["name"]),
        price=raw["price"],  # type: ignore[arg-type]
    )
    for raw in PRODUCT_CATALOG
]

PRODUCTS_BY_ID: dict[str, Product] = {product.id: product for product in PRODUCTS}
