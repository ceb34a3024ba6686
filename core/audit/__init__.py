"""
ShopTracker Core Audit — Public API
====================================
Immutable, append-only, thread-safe audit logging.
"""

from core.audit.log import AuditLog
from core.audit.models import AuditEntry

__all__ = [
    "AuditEntry",
    "AuditLog",
]
