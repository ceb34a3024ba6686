"""
Tests for core.bootstrap — Composition root wiring.
"""

from datetime import datetime, timezone

import pytest

from core.bootstrap import SystemBootstrapError, build_application
from core.config import SeedAccount, ShopTrackerSettings
from core.errors import ShopTrackerError
from core.primitives import Actor, Product, Role
from core.time import FixedClock
from engines.directory.repository import InMemoryAccountDirectory


T0 = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestBuildApplication:
    def test_services_share_one_audit_log(self):
        app = build_application(clock=FixedClock(T0), seed=False)
        admin = Actor.of("admin", Role.ADMIN)

        app.inventory.add_product(admin, Product("P1", "Hammer", 5, 10.0))
        app.users.delete_user(admin, "nobody")

        lines = app.audit_log.entries()
        assert len(lines) == 2
        assert "Product added" in lines[0]
        assert "User deletion FAILED" in lines[1]

    def test_seeds_products_and_users(self):
        app = build_application(clock=FixedClock(T0))
        assert app.inventory.size() == 3
        assert [a.username for a in app.users.list_users()] == ["admin", "manager", "user"]

    def test_seed_false_leaves_stores_empty(self):
        app = build_application(seed=False)
        assert app.inventory.size() == 0
        assert app.users.list_users() == []

    def test_supplied_directory_is_used(self):
        directory = InMemoryAccountDirectory()
        app = build_application(directory=directory)
        assert app.directory is directory
        assert directory.exists("admin")

    def test_policy_follows_settings(self):
        app = build_application(ShopTrackerSettings(allow_user_adjust=False), seed=False)
        assert not app.access_policy.allow_user_adjust
        assert not app.access_policy.can_adjust_quantity(Actor.of("uma", Role.USER))

    def test_two_applications_do_not_share_state(self):
        first = build_application(seed=False)
        second = build_application(seed=False)
        first.inventory.add_product(Actor.of("admin", Role.ADMIN), Product("P1", "Hammer", 1, 1.0))
        assert second.inventory.size() == 0

    def test_refuses_seed_without_privileged_account(self):
        settings = ShopTrackerSettings(
            seed_accounts=(SeedAccount("uma", "pw", "Uma", "uma@shop.com", Role.USER),)
        )
        with pytest.raises(SystemBootstrapError, match="SEED_ACCOUNTS_PRIVILEGED") as exc_info:
            build_application(settings)
        assert isinstance(exc_info.value, ShopTrackerError)
        assert exc_info.value.check == "SEED_ACCOUNTS_PRIVILEGED"
