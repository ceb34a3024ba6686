"""
ShopTracker Core Config — Application Settings
===============================================
Every tunable the engines read lives here, never as a literal in
engine logic. Settings are frozen once built; the composition root
builds them once (defaults or environment) and passes them down.

Environment variables (all optional):
    SHOPTRACKER_DEFAULT_RESTOCK_THRESHOLD   integer >= 0
    SHOPTRACKER_ALLOW_USER_ADJUST           true/false
    SHOPTRACKER_SYSTEM_ACTOR                non-empty string
    SHOPTRACKER_AUDIT_TIMESTAMP_FORMAT      strftime pattern
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from core.primitives.actor import SYSTEM_USERNAME, Role
from core.primitives.product import Product


ENV_PREFIX = "SHOPTRACKER_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


# ══════════════════════════════════════════════════════════════
# SEED DATA
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SeedAccount:
    """Starter account created when the directory is empty."""

    username: str
    password: str
    full_name: str
    email: str
    role: Role


DEFAULT_SEED_PRODUCTS: Tuple[Product, ...] = (
    Product("A01", "Apples", 20, 0.50),
    Product("B01", "Bananas", 30, 0.40),
    Product("O01", "Oranges", 25, 0.60),
)

DEFAULT_SEED_ACCOUNTS: Tuple[SeedAccount, ...] = (
    SeedAccount("admin", "1234", "Alice Admin", "admin@shop.com", Role.ADMIN),
    SeedAccount("manager", "5678", "Mark Manager", "manager@shop.com", Role.MANAGER),
    SeedAccount("user", "0000", "Uma User", "user@shop.com", Role.USER),
)


# ══════════════════════════════════════════════════════════════
# SETTINGS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ShopTrackerSettings:
    default_restock_threshold: int = 5
    allow_user_adjust: bool = True
    system_actor: str = SYSTEM_USERNAME
    audit_timestamp_format: str = "%Y-%m-%d %H:%M:%S"
    # Placeholder reset scheme: username + suffix. Not a secure credential.
    temp_password_suffix: str = "1234"
    seed_products: Tuple[Product, ...] = field(default=DEFAULT_SEED_PRODUCTS)
    seed_accounts: Tuple[SeedAccount, ...] = field(default=DEFAULT_SEED_ACCOUNTS)

    def __post_init__(self) -> None:
        if (
            isinstance(self.default_restock_threshold, bool)
            or not isinstance(self.default_restock_threshold, int)
            or self.default_restock_threshold < 0
        ):
            raise ValueError(
                "default_restock_threshold must be a non-negative integer, "
                f"got {self.default_restock_threshold!r}."
            )
        if not self.system_actor or not isinstance(self.system_actor, str):
            raise ValueError("system_actor must be a non-empty string.")
        if not self.audit_timestamp_format:
            raise ValueError("audit_timestamp_format must be a non-empty string.")

        ids = [p.product_id for p in self.seed_products]
        if len(ids) != len(set(ids)):
            raise ValueError("seed_products must have unique product ids.")
        names = [a.username for a in self.seed_accounts]
        if len(names) != len(set(names)):
            raise ValueError("seed_accounts must have unique usernames.")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ShopTrackerSettings:
        """Build settings from SHOPTRACKER_* variables; unset keys keep defaults."""
        env = os.environ if environ is None else environ
        kwargs = {}

        raw = env.get(f"{ENV_PREFIX}DEFAULT_RESTOCK_THRESHOLD")
        if raw is not None:
            try:
                kwargs["default_restock_threshold"] = int(raw.strip())
            except ValueError as exc:
                raise ValueError(
                    f"{ENV_PREFIX}DEFAULT_RESTOCK_THRESHOLD must be an integer, got {raw!r}."
                ) from exc

        raw = env.get(f"{ENV_PREFIX}ALLOW_USER_ADJUST")
        if raw is not None:
            kwargs["allow_user_adjust"] = _parse_bool(
                raw, name=f"{ENV_PREFIX}ALLOW_USER_ADJUST"
            )

        raw = env.get(f"{ENV_PREFIX}SYSTEM_ACTOR")
        if raw is not None:
            kwargs["system_actor"] = raw.strip()

        raw = env.get(f"{ENV_PREFIX}AUDIT_TIMESTAMP_FORMAT")
        if raw is not None:
            kwargs["audit_timestamp_format"] = raw

        return cls(**kwargs)


def _parse_bool(raw: str, *, name: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}.")
