"""
ShopTracker Inventory Engine — Stock History Events
====================================================
Engine: Inventory

One InventoryEvent per successful catalog mutation. Events are
immutable and owned by the catalog's history; only clear_inventory()
removes them.

The product name is captured at event time so later renames do not
rewrite history. delta is always derived from the two quantities.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class InventoryEventKind(Enum):
    ADD = "ADD"
    REMOVE = "REMOVE"
    SET = "SET"
    ADJUST = "ADJUST"
    INCREASE = "INCREASE"
    DECREASE = "DECREASE"


def kind_for_delta(delta: int) -> InventoryEventKind:
    """Event kind recorded by a signed quantity adjustment."""
    if delta > 0:
        return InventoryEventKind.INCREASE
    if delta < 0:
        return InventoryEventKind.DECREASE
    return InventoryEventKind.SET


@dataclass(frozen=True)
class InventoryEvent:
    product_id: str
    product_name: str
    username: str
    kind: InventoryEventKind
    quantity_before: int
    quantity_after: int
    occurred_at: datetime

    def __post_init__(self):
        if not self.product_id or not isinstance(self.product_id, str):
            raise ValueError("product_id must be a non-empty string.")
        if not self.username or not isinstance(self.username, str):
            raise ValueError("username must be a non-empty string.")
        if not isinstance(self.kind, InventoryEventKind):
            raise ValueError("kind must be InventoryEventKind enum.")
        if self.quantity_before < 0 or self.quantity_after < 0:
            raise ValueError("event quantities cannot be negative.")

    @property
    def delta(self) -> int:
        return self.quantity_after - self.quantity_before

    def describe(self) -> str:
        return (
            f"{self.occurred_at.isoformat(sep=' ', timespec='seconds')} | "
            f"{self.username} | {self.kind.value} | "
            f"{self.product_name} ({self.product_id}) | "
            f"{self.quantity_before} → {self.quantity_after} | "
            f"Δ {self.delta:+d}"
        )

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "username": self.username,
            "kind": self.kind.value,
            "quantity_before": self.quantity_before,
            "quantity_after": self.quantity_after,
            "delta": self.delta,
            "occurred_at": self.occurred_at.isoformat(),
        }
