"""
ShopTracker Core Config — Public API
=====================================
Application settings and seed data.
Doctrine: no tunable literals in engine logic.
"""

from core.config.settings import (
    DEFAULT_SEED_ACCOUNTS,
    DEFAULT_SEED_PRODUCTS,
    SeedAccount,
    ShopTrackerSettings,
)

__all__ = [
    "DEFAULT_SEED_ACCOUNTS",
    "DEFAULT_SEED_PRODUCTS",
    "SeedAccount",
    "ShopTrackerSettings",
]
