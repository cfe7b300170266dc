"""Domain models for the billing app."""

from __future__ import annotations

from dataclasses import dataclass

PAYMENT_PHONEPE = "PhonePe"
PAYMENT_CASH = "Cash"
PAYMENT_METHODS: tuple[str, ...] = (PAYMENT_PHONEPE, PAYMENT_CASH)


@dataclass(frozen=True)
class Product:
    """A catalog product."""

    id: str
    name: str
    price: int | float

    def __post_init__(self) -> None:
        if self.price <= 0:
            raise ValueError(f"Product {self.id!r} must have a positive price")


@dataclass(frozen=True)
class CartEntry:
    """One product line in the cart, or a snapshot of it inside a bill."""

    product: Product
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("CartEntry quantity must be at least 1")

    @property
    def line_total(self) -> int | float:
        return self.product.price * self.quantity


@dataclass(frozen=True)
class Bill:
    """A finalized checkout record."""

    date: str
    items: tuple[CartEntry, ...]
    total: int | float
    payment_method: str
