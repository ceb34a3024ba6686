"""
ShopTracker Product Primitive — Catalog Item
=============================================
A Product is an immutable value. The catalog replaces the stored
value on every mutation, so a Product handed to a caller can never
be used to bypass the catalog's mutation rules.

RULES:
- product_id and name must be non-empty
- quantity is a non-negative integer
- price is finite and non-negative
- Rules are checked on construction AND on every with_* transition
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace


def _check_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValueError("quantity must be an integer.")
    if quantity < 0:
        raise ValueError("Quantity cannot be negative.")
    return quantity


def _check_price(price) -> float:
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        raise ValueError("price must be a number.")
    if not math.isfinite(price):
        raise ValueError("Price must be a finite number.")
    if price < 0:
        raise ValueError("Price cannot be negative.")
    return float(price)


@dataclass(frozen=True)
class Product:
    product_id: str
    name: str
    quantity: int = 0
    price: float = 0.0

    def __post_init__(self):
        if not isinstance(self.product_id, str) or not self.product_id.strip():
            raise ValueError("Product ID required.")
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Product name required.")
        _check_quantity(self.quantity)
        object.__setattr__(self, "price", _check_price(self.price))

    def with_quantity(self, quantity: int) -> Product:
        return replace(self, quantity=_check_quantity(quantity))

    def with_price(self, price: float) -> Product:
        return replace(self, price=_check_price(price))

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "name": self.name,
            "quantity": self.quantity,
            "price": self.price,
        }

    def __str__(self) -> str:
        return f"{self.name} ({self.product_id})  Qty: {self.quantity}  €{self.price:.2f}"
