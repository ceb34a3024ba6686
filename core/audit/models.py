"""
ShopTracker Core Audit — Immutable Audit Models
================================================
Append-only audit lines. Frozen dataclasses — once created, never
modified. Individual entries are never deleted.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class AuditEntry:
    """
    Immutable record of one access decision or state change.

    Produced by both the inventory and directory engines.
    """

    sequence: int
    occurred_at: datetime
    message: str

    def __post_init__(self) -> None:
        if not self.message or not isinstance(self.message, str):
            raise ValueError("AuditEntry message must be a non-empty string.")
        if self.sequence < 1:
            raise ValueError("AuditEntry sequence starts at 1.")

    def format(self, timestamp_format: str = "%Y-%m-%d %H:%M:%S") -> str:
        return f"{self.occurred_at.strftime(timestamp_format)} - {self.message}"
