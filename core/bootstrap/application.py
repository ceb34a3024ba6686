"""
ShopTracker Bootstrap — Application Wiring
===========================================
The composition root owns the lifecycle of every shared object:

    AccessPolicy     one per application, injected into both services
    AuditLog         one per application, shared by both services
    ProductCatalog   one per application
    AccountDirectory one per application (in-memory unless supplied)

Nothing here is a module-level global. Callers that need several
sessions over the same state share one ShopTrackerApplication.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from core.audit.log import AuditLog
from core.config.settings import ShopTrackerSettings
from core.errors import SystemBootstrapError
from core.primitives.actor import PRIVILEGED_ROLES
from core.security.access import AccessPolicy
from core.time.clock import Clock, SystemClock
from engines.directory.repository import AccountDirectory, InMemoryAccountDirectory
from engines.directory.services import DirectoryService
from engines.inventory.services import InventoryService, ProductCatalog

logger = logging.getLogger("shoptracker.bootstrap")


@dataclass(frozen=True)
class ShopTrackerApplication:
    settings: ShopTrackerSettings
    clock: Clock
    access_policy: AccessPolicy
    audit_log: AuditLog
    catalog: ProductCatalog
    directory: AccountDirectory
    inventory: InventoryService
    users: DirectoryService


def _check_settings(settings: ShopTrackerSettings) -> None:
    if settings.seed_accounts and not any(
        seed.role in PRIVILEGED_ROLES for seed in settings.seed_accounts
    ):
        raise SystemBootstrapError(
            "SEED_ACCOUNTS_PRIVILEGED",
            "seed_accounts must include at least one ADMIN or MANAGER, "
            "otherwise nobody can manage stock or users.",
        )


def build_application(
    settings: Optional[ShopTrackerSettings] = None,
    *,
    clock: Optional[Clock] = None,
    directory: Optional[AccountDirectory] = None,
    seed: bool = True,
) -> ShopTrackerApplication:
    """
    Construct and wire every shared store and service.

    seed=True loads the starter products and accounts into empty
    stores (idempotent; non-empty stores are left alone).
    """
    settings = settings or ShopTrackerSettings()
    _check_settings(settings)
    clock = clock or SystemClock()

    access_policy = AccessPolicy(allow_user_adjust=settings.allow_user_adjust)
    audit_log = AuditLog(clock, timestamp_format=settings.audit_timestamp_format)
    catalog = ProductCatalog()
    directory = directory if directory is not None else InMemoryAccountDirectory()

    inventory = InventoryService(
        catalog=catalog,
        access_policy=access_policy,
        audit_log=audit_log,
        clock=clock,
        settings=settings,
    )
    users = DirectoryService(
        directory=directory,
        access_policy=access_policy,
        audit_log=audit_log,
        settings=settings,
    )

    if seed:
        inventory.seed_default_stock_if_empty()
        users.seed_default_users_if_empty()

    logger.info(
        f"ShopTracker application READY "
        f"(allow_user_adjust={settings.allow_user_adjust}, "
        f"default_restock_threshold={settings.default_restock_threshold})"
    )
    return ShopTrackerApplication(
        settings=settings,
        clock=clock,
        access_policy=access_policy,
        audit_log=audit_log,
        catalog=catalog,
        directory=directory,
        inventory=inventory,
        users=users,
    )
