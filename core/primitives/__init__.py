"""
ShopTracker Core Primitives — Shared Building Blocks
=====================================================
Primitives are the engine-agnostic values that both engines consume.
They are:

- Pure Python (no Django dependency)
- Immutable (frozen dataclasses)
- Self-validating (invalid values cannot be constructed)

Primitives:
    actor    — Role enum and the role-bearing Actor identity
    account  — User directory record
    product  — Catalog item with stock count and price
"""

from core.primitives.account import Account
from core.primitives.actor import (
    PRIVILEGED_ROLES,
    SYSTEM_USERNAME,
    Actor,
    Role,
    actor_label,
)
from core.primitives.product import Product

__all__ = [
    "Account",
    "Actor",
    "PRIVILEGED_ROLES",
    "Product",
    "Role",
    "SYSTEM_USERNAME",
    "actor_label",
]
