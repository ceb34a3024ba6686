"""
ShopTracker Core — Errors and Rejection Reasons
================================================
Two layers:

RejectionReason
    Structured explanation for a refused mutation. Boolean-returning
    operations never raise; they build a RejectionReason, log it and
    return False.

ShopTrackerError hierarchy
    Raised only by operations whose callers must branch on the failure
    kind (role change, password reset), by directory construction,
    and by build_application when settings cannot yield a usable shop.

Every rejection must be:
- Deterministic (same input → same rejection)
- Machine-readable (code)
- Human-readable (message)
"""

from __future__ import annotations

from dataclasses import dataclass


# ══════════════════════════════════════════════════════════════
# STANDARD REASON CODES
# ══════════════════════════════════════════════════════════════

class ReasonCode:
    """Known rejection codes. Convention: SCREAMING_SNAKE_CASE."""

    PERMISSION_DENIED = "PERMISSION_DENIED"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    CREDENTIAL_MISMATCH = "CREDENTIAL_MISMATCH"
    CONFLICT = "CONFLICT"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"


# ══════════════════════════════════════════════════════════════
# REJECTION REASON (frozen explanation structure)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RejectionReason:
    """
    Structured reason for a refused mutation.

    Fields:
        code:        Machine-readable code (a ReasonCode value).
        message:     Human-readable explanation.
        policy_name: Name of the check that refused the call.
    """

    code: str
    message: str
    policy_name: str

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")

        if not self.policy_name or not isinstance(self.policy_name, str):
            raise ValueError("policy_name must be a non-empty string.")

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "policy_name": self.policy_name,
        }


# ══════════════════════════════════════════════════════════════
# EXCEPTIONS
# ══════════════════════════════════════════════════════════════

class ShopTrackerError(Exception):
    """Base error for recoverable core failures."""

    code = ReasonCode.VALIDATION_FAILED

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class PermissionDenied(ShopTrackerError):
    """Actor lacks the role required for the operation."""

    code = ReasonCode.PERMISSION_DENIED

    def __init__(self, actor: str, action: str):
        self.actor = actor
        self.action = action
        super().__init__(
            f"Actor '{actor}' does not have permission to {action}."
        )


class NotFound(ShopTrackerError):
    """Referenced product or account does not exist."""

    code = ReasonCode.NOT_FOUND

    def __init__(self, kind: str, key: str):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} not found: {key}")


class ValidationFailed(ShopTrackerError):
    """Input violates an entity invariant; nothing was mutated."""

    code = ReasonCode.VALIDATION_FAILED


class CredentialMismatch(ValidationFailed):
    """Supplied recovery email does not match the stored one."""

    code = ReasonCode.CREDENTIAL_MISMATCH

    def __init__(self, username: str):
        self.username = username
        super().__init__("Email does not match stored email.")


class Conflict(ShopTrackerError):
    """Entity with the same identity key already exists."""

    code = ReasonCode.CONFLICT

    def __init__(self, kind: str, key: str):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} already exists: {key}")


class SystemBootstrapError(ShopTrackerError):
    """
    Settings cannot produce a usable shop, so build_application refuses
    to hand out services.

    `check` names the failed settings check, for example
    SEED_ACCOUNTS_PRIVILEGED when no seed account could ever manage
    stock or users.
    """

    def __init__(self, check: str, detail: str):
        self.check = check
        self.detail = detail
        super().__init__(f"Cannot start ShopTracker ({check}): {detail}")
