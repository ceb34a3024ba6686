"""
ShopTracker Directory Engine — Account Directory
================================================
Protocol + InMemory implementation for account storage.

Doctrine:
- The directory is a dependency injection point (testable, swappable).
- InMemory directory is the authoritative default store.
- The Django ORM directory lives in the adapters layer.
- Each directory exposes one re-entrant `lock`; the Directory Service
  holds it across check-then-act sequences.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Optional, Protocol

from core.errors import Conflict
from core.primitives.account import Account


class AccountDirectory(Protocol):
    lock: threading.RLock

    def exists(self, username: str) -> bool:
        ...

    def find(self, username: str) -> Optional[Account]:
        ...

    def find_all(self) -> List[Account]:
        """Snapshot of every stored account, ordered by username."""
        ...

    def save(self, account: Account) -> None:
        """Insert or replace the account stored under account.username."""
        ...

    def delete(self, username: str) -> bool:
        """Remove the account; returns False when nothing was stored."""
        ...


class InMemoryAccountDirectory:
    """Thread-safe in-memory account directory."""

    def __init__(self, accounts: tuple[Account, ...] = ()):
        self.lock = threading.RLock()
        self._accounts: Dict[str, Account] = {}
        for account in accounts:
            if account.username in self._accounts:
                raise Conflict("Account", account.username)
            self._accounts[account.username] = account

    def exists(self, username: str) -> bool:
        with self.lock:
            return username in self._accounts

    def find(self, username: str) -> Optional[Account]:
        with self.lock:
            return self._accounts.get(username)

    def find_all(self) -> List[Account]:
        with self.lock:
            return [self._accounts[k] for k in sorted(self._accounts)]

    def save(self, account: Account) -> None:
        with self.lock:
            self._accounts[account.username] = account

    def delete(self, username: str) -> bool:
        with self.lock:
            return self._accounts.pop(username, None) is not None

    def clear(self) -> None:
        """Drop every account (test helper)."""
        with self.lock:
            self._accounts.clear()
