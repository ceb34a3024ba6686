"""
Tests for core.errors — RejectionReason and the error hierarchy.
"""

import pytest

from core.errors import (
    Conflict,
    CredentialMismatch,
    NotFound,
    PermissionDenied,
    ReasonCode,
    RejectionReason,
    ShopTrackerError,
    ValidationFailed,
)
from core.primitives import Account
from engines.directory.repository import InMemoryAccountDirectory


class TestRejectionReason:
    def test_to_dict(self):
        reason = RejectionReason(ReasonCode.NOT_FOUND, "Product not found: X.", "product_exists_policy")
        assert reason.to_dict() == {
            "code": "NOT_FOUND",
            "message": "Product not found: X.",
            "policy_name": "product_exists_policy",
        }

    def test_requires_message(self):
        with pytest.raises(ValueError, match="message"):
            RejectionReason(ReasonCode.NOT_FOUND, "", "p")


class TestHierarchy:
    def test_codes(self):
        assert PermissionDenied("user", "change roles").code == ReasonCode.PERMISSION_DENIED
        assert NotFound("User", "bob").code == ReasonCode.NOT_FOUND
        assert ValidationFailed("bad").code == ReasonCode.VALIDATION_FAILED
        assert CredentialMismatch("bob").code == ReasonCode.CREDENTIAL_MISMATCH
        assert Conflict("Account", "bob").code == ReasonCode.CONFLICT

    def test_all_share_base(self):
        for error in (
            PermissionDenied("u", "x"),
            NotFound("User", "bob"),
            CredentialMismatch("bob"),
            Conflict("Account", "bob"),
        ):
            assert isinstance(error, ShopTrackerError)

    def test_messages(self):
        assert str(NotFound("User", "bob")) == "User not found: bob"
        assert str(CredentialMismatch("bob")) == "Email does not match stored email."
        assert "change roles" in str(PermissionDenied("user", "change roles"))


class TestDirectoryConflict:
    def test_duplicate_initial_accounts_refused(self):
        bob = Account("bob", "pw", "Bob", "bob@shop.com")
        with pytest.raises(Conflict, match="Account already exists: bob"):
            InMemoryAccountDirectory((bob, bob))
