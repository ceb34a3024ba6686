"""
ShopTracker Bootstrap — Composition Root
=========================================
Builds the shared stores and services exactly once per application.
"""

from core.bootstrap.application import ShopTrackerApplication, build_application
from core.errors import SystemBootstrapError

__all__ = [
    "ShopTrackerApplication",
    "SystemBootstrapError",
    "build_application",
]
