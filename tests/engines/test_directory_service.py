"""
ShopTracker — Directory Service Tests
======================================
Account lifecycle, role changes, password reset, login and search.
"""

from datetime import datetime, timezone

import pytest

from core.audit import AuditLog
from core.config import ShopTrackerSettings
from core.errors import (
    CredentialMismatch,
    NotFound,
    PermissionDenied,
    ReasonCode,
    ShopTrackerError,
    ValidationFailed,
)
from core.primitives import Account, Actor, Role
from core.security import AccessPolicy
from core.time import FixedClock
from engines.directory.repository import InMemoryAccountDirectory
from engines.directory.services import DirectoryService

NOW = datetime(2026, 2, 20, 12, 0, 0, tzinfo=timezone.utc)

ADMIN_ACCOUNT = Account("admin", "pw", "Admin", "admin@x.com", Role.ADMIN)
USER_ACCOUNT = Account("user", "pw", "User", "user@x.com", Role.USER)
ALICE = Account("alice", "oldpw", "Alice", "alice@shop.com", Role.USER)

ADMIN = ADMIN_ACCOUNT.as_actor()
MANAGER = Actor.of("manager", Role.MANAGER)
USER = USER_ACCOUNT.as_actor()


@pytest.fixture
def directory():
    return InMemoryAccountDirectory((ADMIN_ACCOUNT, USER_ACCOUNT, ALICE))


@pytest.fixture
def audit():
    return AuditLog(FixedClock(NOW))


@pytest.fixture
def service(directory, audit):
    return DirectoryService(
        directory=directory,
        access_policy=AccessPolicy(),
        audit_log=audit,
    )


# ══════════════════════════════════════════════════════════════
# CREATE / DELETE
# ══════════════════════════════════════════════════════════════

class TestCreateUser:
    def test_admin_creates(self, service, directory, audit):
        bob = Account("bob", "pw", "Bob", "bob@shop.com")
        assert service.create_user(ADMIN, bob)
        assert directory.find("bob") == bob
        assert audit.entries()[-1].endswith("User created: bob by admin")

    def test_manager_creates(self, service):
        assert service.create_user(MANAGER, Account("bob", "pw", "Bob", "bob@shop.com"))

    def test_user_cannot_create(self, service, directory, audit):
        assert not service.create_user(USER, Account("bob", "pw", "Bob", "bob@shop.com"))
        assert not directory.exists("bob")
        assert "ACCESS DENIED: user tried to create user bob" in audit.entries()[-1]

    def test_absent_actor_cannot_create(self, service, audit):
        assert not service.create_user(None, Account("bob", "pw", "Bob", "bob@shop.com"))
        assert "<null>" in audit.entries()[-1]

    def test_duplicate_username_rejected(self, service, directory, audit):
        impostor = Account("alice", "x", "Impostor", "evil@x.com", Role.ADMIN)
        assert not service.create_user(ADMIN, impostor)
        assert directory.find("alice") == ALICE
        assert "duplicate username" in audit.entries()[-1]


class TestDeleteUser:
    def test_admin_deletes(self, service, directory):
        assert service.delete_user(ADMIN, "alice")
        assert not directory.exists("alice")

    def test_missing_user(self, service, audit):
        assert not service.delete_user(ADMIN, "ghost")
        assert "not found" in audit.entries()[-1]

    def test_user_cannot_delete(self, service, directory):
        assert not service.delete_user(USER, "alice")
        assert directory.exists("alice")


# ══════════════════════════════════════════════════════════════
# ROLE CHANGE
# ══════════════════════════════════════════════════════════════

class TestChangeUserRole:
    def test_admin_changes_role(self, service, directory, audit):
        updated = service.change_user_role(ADMIN, "user", Role.MANAGER)
        assert updated.role == Role.MANAGER
        assert directory.find("user").role == Role.MANAGER
        assert "Role changed for user: USER -> MANAGER by admin" in audit.entries()[-1]

    def test_user_cannot_change_role(self, service, directory):
        with pytest.raises(PermissionDenied) as exc_info:
            service.change_user_role(USER, "admin", Role.MANAGER)
        assert exc_info.value.code == ReasonCode.PERMISSION_DENIED
        assert directory.find("admin").role == Role.ADMIN

    def test_absent_actor_denied(self, service):
        with pytest.raises(PermissionDenied):
            service.change_user_role(None, "alice", Role.ADMIN)

    def test_missing_target(self, service):
        with pytest.raises(NotFound) as exc_info:
            service.change_user_role(ADMIN, "ghost", Role.USER)
        assert exc_info.value.code == ReasonCode.NOT_FOUND

    def test_permission_checked_before_existence(self, service):
        with pytest.raises(PermissionDenied):
            service.change_user_role(USER, "ghost", Role.USER)

    def test_role_name_accepted(self, service):
        assert service.change_user_role(MANAGER, "alice", "admin").role == Role.ADMIN

    def test_unknown_role_from_unprivileged_actor_is_permission_denied(self, service, directory):
        with pytest.raises(PermissionDenied):
            service.change_user_role(USER, "admin", "SUPERUSER")
        assert directory.find("admin").role == Role.ADMIN

    def test_unknown_role_from_admin_fails_validation(self, service, directory, audit):
        with pytest.raises(ValidationFailed) as exc_info:
            service.change_user_role(ADMIN, "alice", "SUPERUSER")
        assert isinstance(exc_info.value, ShopTrackerError)
        assert exc_info.value.code == ReasonCode.VALIDATION_FAILED
        assert directory.find("alice").role == Role.USER
        assert "invalid role 'SUPERUSER'" in audit.entries()[-1]


# ══════════════════════════════════════════════════════════════
# PASSWORD RESET
# ══════════════════════════════════════════════════════════════

class TestResetPassword:
    def test_success_returns_stored_credential(self, service, directory):
        new_password = service.reset_password("alice", "alice@shop.com")
        assert new_password
        assert directory.find("alice").password == new_password

    def test_email_match_is_case_insensitive(self, service):
        assert service.reset_password("alice", "ALICE@Shop.com") == "alice1234"

    def test_mismatch_leaves_credential_unchanged(self, service, directory):
        with pytest.raises(CredentialMismatch) as exc_info:
            service.reset_password("alice", "wrong@x.com")
        assert isinstance(exc_info.value, ValidationFailed)
        assert exc_info.value.code == ReasonCode.CREDENTIAL_MISMATCH
        assert directory.find("alice").password == "oldpw"

    def test_unknown_user(self, service):
        with pytest.raises(NotFound):
            service.reset_password("bob", "bob@shop.com")

    def test_credential_never_logged(self, service, audit):
        new_password = service.reset_password("alice", "alice@shop.com")
        assert all(new_password not in line for line in audit.entries())

    def test_configured_suffix(self, directory, audit):
        service = DirectoryService(
            directory=directory,
            access_policy=AccessPolicy(),
            audit_log=audit,
            settings=ShopTrackerSettings(temp_password_suffix="-tmp"),
        )
        assert service.reset_password("alice", "alice@shop.com") == "alice-tmp"


# ══════════════════════════════════════════════════════════════
# LOGIN / READ / SEED
# ══════════════════════════════════════════════════════════════

class TestAuthenticate:
    def test_valid_credentials(self, service):
        assert service.authenticate("alice", "oldpw") == ALICE

    def test_wrong_password(self, service, audit):
        assert service.authenticate("alice", "nope") is None
        assert audit.entries()[-1].endswith("Login FAILED for alice")

    def test_unknown_user(self, service):
        assert service.authenticate("ghost", "pw") is None

    def test_inactive_account(self, directory, service):
        directory.save(Account("gone", "pw", "Gone", "gone@x.com", active=False))
        assert service.authenticate("gone", "pw") is None

    def test_login_after_reset(self, service):
        temp = service.reset_password("alice", "alice@shop.com")
        assert service.authenticate("alice", "oldpw") is None
        assert service.authenticate("alice", temp).username == "alice"


class TestReads:
    def test_list_users_sorted(self, service):
        assert [a.username for a in service.list_users()] == ["admin", "alice", "user"]

    def test_list_is_snapshot(self, service, directory):
        users = service.list_users()
        users.clear()
        assert len(directory.find_all()) == 3

    def test_search_matches_name_username_email(self, service):
        assert [a.username for a in service.search_users("ALI")] == ["alice"]
        assert [a.username for a in service.search_users("@x.com")] == ["admin", "user"]
        assert service.search_users("nobody") == []
        assert service.search_users(None) == []

    def test_find_user(self, service):
        assert service.find_user("alice") == ALICE
        assert service.find_user("ghost") is None


class TestSeedUsers:
    def test_seed_empty_directory(self, audit):
        directory = InMemoryAccountDirectory()
        service = DirectoryService(
            directory=directory, access_policy=AccessPolicy(), audit_log=audit,
        )
        assert service.seed_default_users_if_empty()
        assert not service.seed_default_users_if_empty()
        assert [a.username for a in directory.find_all()] == ["admin", "manager", "user"]
        assert directory.find("manager").role == Role.MANAGER

    def test_seed_skipped_when_populated(self, service, directory):
        assert not service.seed_default_users_if_empty()
        assert not directory.exists("manager")
