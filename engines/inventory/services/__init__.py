"""
ShopTracker Inventory Engine — Application Service
===================================================
Permission-gated catalog mutations, low-stock computation and
stock history.

Every mutation runs under the catalog lock in this order:
    1. permission check
    2. existence check
    3. invariant check
    4. mutate
    5. record InventoryEvent + audit line
    6. return result
A rejected call returns False and touches neither the catalog nor
its history.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional

from core.audit.log import AuditLog
from core.config.settings import ShopTrackerSettings
from core.errors import RejectionReason
from core.primitives.actor import Actor, actor_label
from core.primitives.product import Product
from core.security.access import AccessPolicy, Permission
from core.time.clock import Clock, SystemClock
from engines.inventory.events import (
    InventoryEvent,
    InventoryEventKind,
    kind_for_delta,
)
from engines.inventory.policies import (
    negative_stock_policy,
    permission_policy,
    product_exists_policy,
    stock_values_policy,
    threshold_policy,
)

logger = logging.getLogger("shoptracker.inventory")


# ══════════════════════════════════════════════════════════════
# CATALOG STORE
# ══════════════════════════════════════════════════════════════

class ProductCatalog:
    """
    Shared in-memory catalog state.

    One instance per application, shared by reference with every
    InventoryService that needs it. Callers must hold `lock` around
    any read-modify-write sequence.
    """

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.products: Dict[str, Product] = {}
        self.history: List[InventoryEvent] = []
        self.thresholds: Dict[str, int] = {}

    def wipe(self) -> None:
        with self.lock:
            self.products.clear()
            self.history.clear()
            self.thresholds.clear()


# ══════════════════════════════════════════════════════════════
# APPLICATION SERVICE
# ══════════════════════════════════════════════════════════════

class InventoryService:
    """
    Inventory Engine application service.

    Dependencies are passed in by the composition root; the service
    owns none of them.
    """

    def __init__(
        self,
        *,
        catalog: ProductCatalog,
        access_policy: AccessPolicy,
        audit_log: AuditLog,
        clock: Optional[Clock] = None,
        settings: Optional[ShopTrackerSettings] = None,
    ):
        self._catalog = catalog
        self._access = access_policy
        self._audit = audit_log
        self._clock = clock or SystemClock()
        self._settings = settings or ShopTrackerSettings()
        self._system_actor = Actor.system(self._settings.system_actor)

    # ── Internals (caller holds catalog lock) ─────────────────

    def _record(
        self,
        product: Product,
        username: str,
        kind: InventoryEventKind,
        before: int,
        after: int,
    ) -> InventoryEvent:
        event = InventoryEvent(
            product_id=product.product_id,
            product_name=product.name,
            username=username,
            kind=kind,
            quantity_before=before,
            quantity_after=after,
            occurred_at=self._clock.now_utc(),
        )
        self._catalog.history.append(event)
        return event

    def _reject(self, operation: str, rejection: RejectionReason) -> bool:
        logger.info(f"{operation} REJECTED [{rejection.code}]: {rejection.message}")
        self._audit.record(f"{operation} REJECTED: {rejection.message}")
        return False

    # ── CRUD ───────────────────────────────────────────────────

    def add_product(self, actor: Optional[Actor], product: Product) -> bool:
        """Insert or overwrite the product stored at product.product_id."""
        with self._catalog.lock:
            rejection = permission_policy(self._access, actor, Permission.STOCK_MANAGE)
            if rejection:
                return self._reject("Add product", rejection)

            previous = self._catalog.products.get(product.product_id)
            before = previous.quantity if previous is not None else 0
            self._catalog.products[product.product_id] = product
            self._record(product, actor.username, InventoryEventKind.ADD, before, product.quantity)
            self._audit.record(
                f"Product added: {product.name} ({product.product_id}) "
                f"qty={product.quantity} by {actor.username}"
            )
            logger.info(f"Product {product.product_id} ADDED by {actor.username}")
            return True

    def remove_product(self, actor: Optional[Actor], product_id: str) -> bool:
        with self._catalog.lock:
            rejection = permission_policy(self._access, actor, Permission.STOCK_MANAGE)
            if rejection:
                return self._reject("Remove product", rejection)

            existing = self._catalog.products.get(product_id)
            rejection = product_exists_policy(existing, product_id)
            if rejection:
                return self._reject("Remove product", rejection)

            del self._catalog.products[product_id]
            self._record(existing, actor.username, InventoryEventKind.REMOVE, existing.quantity, 0)
            self._audit.record(
                f"Product removed: {existing.name} ({product_id}) by {actor.username}"
            )
            logger.info(f"Product {product_id} REMOVED by {actor.username}")
            return True

    def update_product(
        self,
        actor: Optional[Actor],
        product_id: str,
        quantity: int,
        price: float,
    ) -> bool:
        """Set quantity and price together; both or neither."""
        with self._catalog.lock:
            rejection = permission_policy(self._access, actor, Permission.STOCK_MANAGE)
            if rejection:
                return self._reject("Update product", rejection)

            existing = self._catalog.products.get(product_id)
            rejection = product_exists_policy(existing, product_id)
            if rejection:
                return self._reject("Update product", rejection)

            rejection = stock_values_policy(quantity, price)
            if rejection:
                return self._reject("Update product", rejection)

            updated = existing.with_quantity(quantity).with_price(price)
            self._catalog.products[product_id] = updated
            self._record(updated, actor.username, InventoryEventKind.SET, existing.quantity, quantity)
            self._audit.record(
                f"Product updated: {updated.name} ({product_id}) "
                f"qty {existing.quantity} -> {quantity}, price {existing.price:.2f} -> "
                f"{updated.price:.2f} by {actor.username}"
            )
            logger.info(f"Product {product_id} UPDATED by {actor.username}")
            return True

    def get_product(self, product_id: str) -> Optional[Product]:
        with self._catalog.lock:
            return self._catalog.products.get(product_id)

    def get_all_products(self) -> List[Product]:
        with self._catalog.lock:
            return list(self._catalog.products.values())

    def size(self) -> int:
        with self._catalog.lock:
            return len(self._catalog.products)

    def search_by_name(self, query: Optional[str]) -> List[Product]:
        """Case-insensitive substring match on product name."""
        if query is None:
            return []
        needle = query.lower()
        return [p for p in self.get_all_products() if needle in p.name.lower()]

    def clear_inventory(self) -> None:
        """Wipe products, thresholds and history. Callers must gate this."""
        with self._catalog.lock:
            self._catalog.wipe()
            self._audit.record("Inventory cleared")
            logger.info("Inventory CLEARED")

    # ── Quantity changes ───────────────────────────────────────

    def adjust_quantity(self, actor: Optional[Actor], product_id: str, delta: int) -> bool:
        """
        Apply a signed quantity change.

        Reachable by Role.USER while the access policy's user-adjust
        rule is enabled. Refuses any change that would leave the
        quantity negative.
        """
        with self._catalog.lock:
            rejection = permission_policy(self._access, actor, Permission.STOCK_ADJUST)
            if rejection:
                return self._reject("Adjust quantity", rejection)

            existing = self._catalog.products.get(product_id)
            rejection = product_exists_policy(existing, product_id)
            if rejection:
                return self._reject("Adjust quantity", rejection)

            rejection = negative_stock_policy(existing, delta)
            if rejection:
                return self._reject("Adjust quantity", rejection)

            new_quantity = existing.quantity + delta
            updated = existing.with_quantity(new_quantity)
            self._catalog.products[product_id] = updated
            self._record(
                updated, actor.username, kind_for_delta(delta),
                existing.quantity, new_quantity,
            )
            self._audit.record(
                f"Quantity adjusted: {updated.name} ({product_id}) "
                f"{delta:+d} -> {new_quantity} by {actor.username}"
            )
            logger.info(f"Product {product_id} ADJUSTED {delta:+d} by {actor.username}")
            return True

    def _step(self, product_id: str, step: int) -> bool:
        system = self._system_actor.username
        operation = "Increase stock" if step > 0 else "Decrease stock"
        with self._catalog.lock:
            existing = self._catalog.products.get(product_id)
            rejection = product_exists_policy(existing, product_id)
            if rejection:
                return self._reject(operation, rejection)

            rejection = negative_stock_policy(existing, step)
            if rejection:
                return self._reject(operation, rejection)

            new_quantity = existing.quantity + step
            updated = existing.with_quantity(new_quantity)
            self._catalog.products[product_id] = updated
            self._record(
                updated, system, kind_for_delta(step),
                existing.quantity, new_quantity,
            )
            self._audit.record(
                f"{operation}: {updated.name} ({product_id}) -> {new_quantity} by {system}"
            )
            return True

    def increase_stock(self, product_id: str) -> bool:
        """Add one unit, attributed to the system identity."""
        return self._step(product_id, +1)

    def decrease_stock(self, product_id: str) -> bool:
        """Remove one unit, attributed to the system identity; refuses at zero."""
        return self._step(product_id, -1)

    # ── Low stock / threshold ─────────────────────────────────

    def get_restock_threshold(self, product_id: str) -> int:
        with self._catalog.lock:
            return self._catalog.thresholds.get(
                product_id, self._settings.default_restock_threshold
            )

    def set_restock_threshold(
        self,
        actor: Optional[Actor],
        product_id: str,
        threshold: int,
    ) -> None:
        """
        Override the threshold for one product. Negative values clamp to 0.

        Unauthorized calls are a silent no-op; a non-integer value is
        refused and audited.
        """
        with self._catalog.lock:
            if not self._access.can_manage_stock(actor):
                logger.info(
                    f"Restock threshold for {product_id} IGNORED: "
                    f"{actor_label(actor)} lacks {Permission.STOCK_MANAGE}"
                )
                return
            rejection = threshold_policy(threshold)
            if rejection:
                self._reject("Set restock threshold", rejection)
                return
            value = max(0, threshold)
            self._catalog.thresholds[product_id] = value
            self._audit.record(
                f"Restock threshold for {product_id} set to {value} by {actor.username}"
            )

    def get_low_stock_products(self) -> List[Product]:
        with self._catalog.lock:
            default = self._settings.default_restock_threshold
            return [
                p for p in self._catalog.products.values()
                if p.quantity <= self._catalog.thresholds.get(p.product_id, default)
            ]

    def get_suggested_restock_quantity(self, product: Product) -> int:
        """
        Reorder-up-to heuristic: bring stock to twice the effective
        threshold. Not an optimal reorder quantity.
        """
        threshold = self.get_restock_threshold(product.product_id)
        return max(0, 2 * threshold - product.quantity)

    # ── History ───────────────────────────────────────────────

    def get_history(self) -> List[InventoryEvent]:
        """Oldest first. The returned list is an independent copy."""
        with self._catalog.lock:
            return list(self._catalog.history)

    # ── Bootstrap ─────────────────────────────────────────────

    def seed_default_stock_if_empty(self) -> bool:
        """
        Load the configured starter products into an empty catalog.

        Returns True when seeding happened; a non-empty catalog is
        left untouched.
        """
        system = self._system_actor.username
        with self._catalog.lock:
            if self._catalog.products:
                logger.debug("Default stock seeding skipped: catalog not empty")
                return False
            for product in self._settings.seed_products:
                self._catalog.products[product.product_id] = product
                self._record(product, system, InventoryEventKind.ADD, 0, product.quantity)
            self._audit.record(
                f"Default stock seeded ({len(self._settings.seed_products)} products) by {system}"
            )
            logger.info("Default stock SEEDED")
            return True


__all__ = [
    "InventoryService",
    "ProductCatalog",
]
