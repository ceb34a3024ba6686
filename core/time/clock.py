"""
ShopTracker Core Time — Injected Clocks
========================================
InventoryEvent and AuditEntry timestamps come from a Clock handed to
the services by build_application. Stored timestamps are always UTC,
whatever zone the caller's clock was built in.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol, Union


class Clock(Protocol):
    def now_utc(self) -> datetime:
        ...  # pragma: no cover


class SystemClock:
    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Stands still until moved with advance(). Used by tests to pin
    audit lines and history timestamps.

    A start time in another zone is converted to UTC; naive datetimes
    are refused because their zone is unknown.
    """

    def __init__(self, start: datetime) -> None:
        if start.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._now = start.astimezone(timezone.utc)

    def now_utc(self) -> datetime:
        return self._now

    def advance(self, step: Union[float, timedelta]) -> None:
        """Move forward by a timedelta or a number of seconds."""
        if not isinstance(step, timedelta):
            step = timedelta(seconds=step)
        self._now += step
