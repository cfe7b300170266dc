"""Editable static product catalog."""

from __future__ import annotations

PRODUCT_CATALOG: list[dict[str, object]] = [
    {"id": "1", "name": "Product A", "price": 150},
    {"id": "2", "name": "Product B", "price": 250},
    {"id": "3", "name": "Product C", "price": 100},
]
