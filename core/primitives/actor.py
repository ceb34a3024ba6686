"""
ShopTracker Actor Primitive — Role-Bearing Identity
====================================================
The Actor Primitive captures WHO is attempting an action.
Every privileged call into the core carries an Actor (or None
for an unauthenticated caller).

Roles:
    ADMIN    — full stock and user management
    MANAGER  — policy-equivalent to ADMIN for stock and user management
    USER     — ordinary staff; read access plus quantity adjustment

RULES:
- An absent actor (None) is never privileged
- The system actor carries no role and is never privileged
- Actor values are immutable

This file contains NO persistence logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# ══════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════

class Role(Enum):
    """Closed set of account roles."""
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    USER = "USER"

    @classmethod
    def parse(cls, value) -> Role:
        if isinstance(value, Role):
            return value
        if not isinstance(value, str):
            raise ValueError("role must be a Role or role name.")
        try:
            return cls(value.strip().upper())
        except ValueError as exc:
            raise ValueError(
                f"role '{value}' not valid. "
                f"Must be one of: {[r.value for r in cls]}"
            ) from exc


PRIVILEGED_ROLES = frozenset({Role.ADMIN, Role.MANAGER})

SYSTEM_USERNAME = "system"


# ══════════════════════════════════════════════════════════════
# ACTOR DEFINITION
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Actor:
    """
    Identifies who is performing an action.

    Fields:
        username:   Account username (or the system sentinel name)
        role:       Role of the acting account; None for the system actor
    """
    username: str
    role: Optional[Role] = None

    def __post_init__(self):
        if not self.username or not isinstance(self.username, str):
            raise ValueError("username must be a non-empty string.")
        if self.role is not None and not isinstance(self.role, Role):
            raise ValueError("role must be Role enum or None.")

    @property
    def is_system(self) -> bool:
        return self.role is None

    def to_dict(self) -> dict:
        return {
            "username": self.username,
            "role": self.role.value if self.role else None,
        }

    @classmethod
    def of(cls, username: str, role: Role) -> Actor:
        """Factory for account-backed actors."""
        return cls(username=username, role=Role.parse(role))

    @classmethod
    def system(cls, name: str = SYSTEM_USERNAME) -> Actor:
        """Factory for the sentinel actor used on automatic mutations."""
        return cls(username=name, role=None)


def actor_label(actor: Optional[Actor]) -> str:
    """Display name for audit lines; tolerates an absent actor."""
    if actor is None:
        return "<null>"
    return actor.username
