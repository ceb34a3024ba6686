"""
ShopTracker Inventory Engine — Policies
========================================
Validation guards for catalog mutations. Each guard returns None
to pass, or a RejectionReason explaining the refusal.

The service runs guards in a fixed order:
    permission → existence → invariant
and stops at the first rejection.
"""

from __future__ import annotations

import math
from typing import Optional

from core.errors import ReasonCode, RejectionReason
from core.primitives.actor import Actor, actor_label
from core.primitives.product import Product
from core.security.access import AccessPolicy, Permission


def permission_policy(
    access: AccessPolicy,
    actor: Optional[Actor],
    permission: str,
) -> Optional[RejectionReason]:
    decision = access.check(actor, permission)
    if decision.granted:
        return None
    return RejectionReason(
        code=ReasonCode.PERMISSION_DENIED,
        message=f"{actor_label(actor)} denied {permission}: {decision.reason}.",
        policy_name="permission_policy",
    )


def product_exists_policy(
    product: Optional[Product],
    product_id: str,
) -> Optional[RejectionReason]:
    if product is not None:
        return None
    return RejectionReason(
        code=ReasonCode.NOT_FOUND,
        message=f"Product not found: {product_id}.",
        policy_name="product_exists_policy",
    )


def stock_values_policy(quantity, price) -> Optional[RejectionReason]:
    """Reject non-integer or negative quantity and non-finite or negative price."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 0:
        return RejectionReason(
            code=ReasonCode.VALIDATION_FAILED,
            message=f"Quantity must be a non-negative integer, got {quantity!r}.",
            policy_name="stock_values_policy",
        )
    if (
        isinstance(price, bool)
        or not isinstance(price, (int, float))
        or not math.isfinite(price)
        or price < 0
    ):
        return RejectionReason(
            code=ReasonCode.VALIDATION_FAILED,
            message=f"Price must be a finite non-negative number, got {price!r}.",
            policy_name="stock_values_policy",
        )
    return None


def negative_stock_policy(
    product: Product,
    delta,
) -> Optional[RejectionReason]:
    """Reject an adjustment that would take the quantity below zero."""
    if isinstance(delta, bool) or not isinstance(delta, int):
        return RejectionReason(
            code=ReasonCode.VALIDATION_FAILED,
            message=f"Adjustment must be an integer, got {delta!r}.",
            policy_name="negative_stock_policy",
        )
    if product.quantity + delta < 0:
        return RejectionReason(
            code=ReasonCode.INSUFFICIENT_STOCK,
            message=(
                f"Insufficient stock: {product.quantity} available, "
                f"adjustment of {delta} requested for {product.product_id}."
            ),
            policy_name="negative_stock_policy",
        )
    return None


def threshold_policy(threshold) -> Optional[RejectionReason]:
    """Reject a restock threshold that is not an integer. Negatives are clamped later."""
    if isinstance(threshold, bool) or not isinstance(threshold, int):
        return RejectionReason(
            code=ReasonCode.VALIDATION_FAILED,
            message=f"Restock threshold must be an integer, got {threshold!r}.",
            policy_name="threshold_policy",
        )
    return None


__all__ = [
    "negative_stock_policy",
    "permission_policy",
    "product_exists_policy",
    "stock_values_policy",
    "threshold_policy",
]
