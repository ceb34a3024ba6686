"""
ShopTracker Core Security — Access Policy
==========================================
Pure role-based access decisions.

The policy is constructed once by the composition root and injected
into every service that gates mutations. It holds no mutable state
and performs no I/O: the same actor always gets the same answer.

Privilege:
    ADMIN, MANAGER  — may manage stock and users (policy-equivalent)
    USER            — may only adjust quantities, and only while the
                      user-adjust rule is enabled
    None / system   — never privileged
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.primitives.actor import PRIVILEGED_ROLES, Actor, Role, actor_label


# ══════════════════════════════════════════════════════════════
# PERMISSION CONSTANTS
# ══════════════════════════════════════════════════════════════

class Permission:
    """
    Action classes the policy decides on.

    Convention: resource.action
    """

    STOCK_MANAGE = "stock.manage"
    STOCK_ADJUST = "stock.adjust"
    USERS_MANAGE = "users.manage"


VALID_PERMISSIONS = frozenset({
    Permission.STOCK_MANAGE,
    Permission.STOCK_ADJUST,
    Permission.USERS_MANAGE,
})


# ══════════════════════════════════════════════════════════════
# ACCESS DECISION
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AccessDecision:
    """Result of an access check, kept for logging and display."""

    actor: str
    permission: str
    granted: bool
    reason: str = ""


# ══════════════════════════════════════════════════════════════
# ACCESS POLICY
# ══════════════════════════════════════════════════════════════

class AccessPolicy:
    """
    Role → permitted action classes.

    allow_user_adjust:
        When True (default) an actor with Role.USER may call
        adjust_quantity. This is the only mutation reachable by the
        least-privileged role.
    """

    def __init__(self, *, allow_user_adjust: bool = True) -> None:
        self._allow_user_adjust = bool(allow_user_adjust)

    @property
    def allow_user_adjust(self) -> bool:
        return self._allow_user_adjust

    @staticmethod
    def _has_elevated_role(actor: Optional[Actor]) -> bool:
        return actor is not None and actor.role in PRIVILEGED_ROLES

    def can_manage_stock(self, actor: Optional[Actor]) -> bool:
        return self._has_elevated_role(actor)

    def can_manage_users(self, actor: Optional[Actor]) -> bool:
        return self._has_elevated_role(actor)

    def is_admin(self, actor: Optional[Actor]) -> bool:
        return actor is not None and actor.role == Role.ADMIN

    def is_manager(self, actor: Optional[Actor]) -> bool:
        return actor is not None and actor.role == Role.MANAGER

    def can_adjust_quantity(self, actor: Optional[Actor]) -> bool:
        if self.can_manage_stock(actor):
            return True
        return (
            self._allow_user_adjust
            and actor is not None
            and actor.role == Role.USER
        )

    def check(self, actor: Optional[Actor], permission: str) -> AccessDecision:
        """Evaluate one permission and explain the outcome."""
        if permission not in VALID_PERMISSIONS:
            raise ValueError(
                f"permission '{permission}' not valid. "
                f"Must be one of: {sorted(VALID_PERMISSIONS)}"
            )

        if permission == Permission.STOCK_ADJUST:
            granted = self.can_adjust_quantity(actor)
        elif permission == Permission.STOCK_MANAGE:
            granted = self.can_manage_stock(actor)
        else:
            granted = self.can_manage_users(actor)

        if granted:
            reason = f"role {actor.role.value} grants {permission}"
        elif actor is None:
            reason = "no authenticated actor"
        elif actor.role is None:
            reason = "system actor is never privileged"
        else:
            reason = f"role {actor.role.value} lacks {permission}"

        return AccessDecision(
            actor=actor_label(actor),
            permission=permission,
            granted=granted,
            reason=reason,
        )
