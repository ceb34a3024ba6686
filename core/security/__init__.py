"""
ShopTracker Core Security — Public API
=======================================
Role-based access policy shared by the inventory and directory engines.
"""

from core.security.access import (
    VALID_PERMISSIONS,
    AccessDecision,
    AccessPolicy,
    Permission,
)

__all__ = [
    "AccessDecision",
    "AccessPolicy",
    "Permission",
    "VALID_PERMISSIONS",
]
