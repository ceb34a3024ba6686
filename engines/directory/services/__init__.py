"""
ShopTracker Directory Engine — Application Service
===================================================
Account lifecycle: create, delete, role change, password reset,
plus login verification and read-only listing/search.

Failure signalling:
    create_user, delete_user    → bool (single plausible cause each)
    change_user_role            → raises PermissionDenied | ValidationFailed | NotFound
    reset_password              → raises NotFound | CredentialMismatch

Every decision, accepted or refused, is written to the shared
AuditLog while the directory lock is still held.

The temporary credential issued by reset_password is a placeholder
scheme (username + fixed suffix). It is predictable and must not be
used near real credentials.
"""

from __future__ import annotations

import hmac
import logging
from typing import List, Optional

from core.audit.log import AuditLog
from core.config.settings import ShopTrackerSettings
from core.errors import (
    CredentialMismatch,
    NotFound,
    PermissionDenied,
    ValidationFailed,
)
from core.primitives.account import Account
from core.primitives.actor import Actor, Role, actor_label
from core.security.access import AccessPolicy
from engines.directory.repository import AccountDirectory

logger = logging.getLogger("shoptracker.directory")

MSG_ACCESS_DENIED = "ACCESS DENIED: "


class DirectoryService:
    def __init__(
        self,
        *,
        directory: AccountDirectory,
        access_policy: AccessPolicy,
        audit_log: AuditLog,
        settings: Optional[ShopTrackerSettings] = None,
    ):
        self._directory = directory
        self._access = access_policy
        self._audit = audit_log
        self._settings = settings or ShopTrackerSettings()

    # ── Create / delete ───────────────────────────────────────

    def create_user(self, actor: Optional[Actor], account: Account) -> bool:
        with self._directory.lock:
            if not self._access.can_manage_users(actor):
                self._audit.record(
                    f"{MSG_ACCESS_DENIED}{actor_label(actor)} tried to create user "
                    f"{account.username}"
                )
                logger.info(f"Create user {account.username} REJECTED [PERMISSION_DENIED]")
                return False

            if self._directory.exists(account.username):
                self._audit.record(
                    f"User creation FAILED (duplicate username): {account.username}"
                )
                logger.info(f"Create user {account.username} REJECTED [CONFLICT]")
                return False

            self._directory.save(account)
            self._audit.record(f"User created: {account.username} by {actor.username}")
            logger.info(f"User {account.username} CREATED by {actor.username}")
            return True

    def delete_user(self, actor: Optional[Actor], username: str) -> bool:
        with self._directory.lock:
            if not self._access.can_manage_users(actor):
                self._audit.record(
                    f"{MSG_ACCESS_DENIED}{actor_label(actor)} tried to delete user {username}"
                )
                logger.info(f"Delete user {username} REJECTED [PERMISSION_DENIED]")
                return False

            if not self._directory.exists(username):
                self._audit.record(f"User deletion FAILED (not found): {username}")
                logger.info(f"Delete user {username} REJECTED [NOT_FOUND]")
                return False

            self._directory.delete(username)
            self._audit.record(f"User deleted: {username} by {actor.username}")
            logger.info(f"User {username} DELETED by {actor.username}")
            return True

    # ── Read ──────────────────────────────────────────────────

    def list_users(self) -> List[Account]:
        return list(self._directory.find_all())

    def search_users(self, query: Optional[str]) -> List[Account]:
        """Case-insensitive match on username, full name or email."""
        if query is None:
            return []
        return [a for a in self._directory.find_all() if a.matches(query)]

    def find_user(self, username: str) -> Optional[Account]:
        return self._directory.find(username)

    # ── Role change ───────────────────────────────────────────

    def change_user_role(
        self,
        actor: Optional[Actor],
        username: str,
        new_role: Role,
    ) -> Account:
        """
        Checks run permission → role value → target existence; the first
        failure raises and leaves the directory untouched.
        """
        with self._directory.lock:
            if not self._access.can_manage_users(actor):
                self._audit.record(
                    f"{MSG_ACCESS_DENIED}{actor_label(actor)} tried to change role for {username}"
                )
                raise PermissionDenied(actor_label(actor), "change roles")

            try:
                role = Role.parse(new_role)
            except ValueError as exc:
                self._audit.record(
                    f"Role change FAILED (invalid role {new_role!r}) for {username} "
                    f"by {actor.username}"
                )
                raise ValidationFailed(str(exc)) from exc

            target = self._directory.find(username)
            if target is None:
                self._audit.record(f"Role change FAILED (not found): {username}")
                raise NotFound("Target user", username)

            updated = target.with_role(role)
            self._directory.save(updated)
            self._audit.record(
                f"Role changed for {username}: {target.role.value} -> "
                f"{role.value} by {actor.username}"
            )
            logger.info(f"User {username} role CHANGED to {role.value} by {actor.username}")
            return updated

    # ── Password reset ────────────────────────────────────────

    def _temporary_password(self, username: str) -> str:
        # Placeholder: deterministic and guessable.
        return f"{username}{self._settings.temp_password_suffix}"

    def reset_password(self, username: str, email: str) -> str:
        """
        Verify the recovery email and issue a temporary credential.

        The new credential is returned exactly once and is never
        written to the audit log.
        """
        with self._directory.lock:
            account = self._directory.find(username)
            if account is None:
                self._audit.record(f"Password reset FAILED: user not found: {username}")
                raise NotFound("User", username)

            if email is None or account.email.lower() != email.lower():
                self._audit.record(f"Password reset FAILED for {username} (email mismatch)")
                raise CredentialMismatch(username)

            temp = self._temporary_password(username)
            self._directory.save(account.with_password(temp))
            self._audit.record(f"Password reset for {username}")
            logger.info(f"Password RESET for {username}")
            return temp

    # ── Login ─────────────────────────────────────────────────

    def authenticate(self, username: str, password: str) -> Optional[Account]:
        """Return the account when the credential matches and it is active."""
        account = self._directory.find(username) if username else None
        if (
            account is None
            or not account.active
            or password is None
            or not hmac.compare_digest(account.password.encode(), password.encode())
        ):
            # Same message whichever check failed.
            self._audit.record(f"Login FAILED for {username}")
            return None
        self._audit.record(f"Login succeeded for {username}")
        return account

    # ── Bootstrap ─────────────────────────────────────────────

    def seed_default_users_if_empty(self) -> bool:
        with self._directory.lock:
            if self._directory.find_all():
                logger.debug("Default user seeding skipped: directory not empty")
                return False
            for seed in self._settings.seed_accounts:
                self._directory.save(
                    Account(
                        username=seed.username,
                        password=seed.password,
                        full_name=seed.full_name,
                        email=seed.email,
                        role=seed.role,
                    )
                )
            self._audit.record(
                f"Default users seeded ({len(self._settings.seed_accounts)} accounts)"
            )
            logger.info("Default users SEEDED")
            return True


__all__ = [
    "DirectoryService",
]
