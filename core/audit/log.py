"""
ShopTracker Core Audit — Append-Only Audit Log
===============================================
One AuditLog instance is shared by every service in an application
(constructed by the composition root). Appends are serialized by an
internal lock; services call record() while still holding their own
store lock so that log order matches mutation order.

Reads return snapshots. The only removal path is clear(), an
administrative reset that callers must gate.
"""

from __future__ import annotations

import logging
import threading
from typing import List, Optional, Tuple

from core.audit.models import AuditEntry
from core.time.clock import Clock, SystemClock

logger = logging.getLogger("shoptracker.audit")


class AuditLog:
    def __init__(
        self,
        clock: Optional[Clock] = None,
        *,
        timestamp_format: str = "%Y-%m-%d %H:%M:%S",
    ) -> None:
        self._clock = clock or SystemClock()
        self._timestamp_format = timestamp_format
        self._lock = threading.Lock()
        self._entries: List[AuditEntry] = []
        self._next_sequence = 1

    def record(self, message: str) -> AuditEntry:
        """Append one line. Immutable once appended."""
        with self._lock:
            entry = AuditEntry(
                sequence=self._next_sequence,
                occurred_at=self._clock.now_utc(),
                message=message,
            )
            self._entries.append(entry)
            self._next_sequence += 1
        logger.info(message)
        return entry

    def entries(self) -> List[str]:
        """Display-ready lines, oldest first."""
        with self._lock:
            snapshot = tuple(self._entries)
        return [e.format(self._timestamp_format) for e in snapshot]

    def records(self) -> Tuple[AuditEntry, ...]:
        with self._lock:
            return tuple(self._entries)

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        # Sequence numbers keep counting so cleared lines are never reused.
        with self._lock:
            self._entries.clear()
