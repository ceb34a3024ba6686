"""
ShopTracker Django Store - DB-backed Account Directory
=======================================================
Implements the AccountDirectory protocol over StoredAccount rows.

`lock` serializes check-then-act sequences inside one process;
each write additionally runs in its own transaction.
"""

from __future__ import annotations

import logging
import threading
from typing import List, Optional

from django.db import transaction

from adapters.django_store.models import StoredAccount
from core.primitives.account import Account
from core.primitives.actor import Role

logger = logging.getLogger("shoptracker.adapters")


def _to_account(row: StoredAccount) -> Account:
    return Account(
        username=row.username,
        password=row.password,
        full_name=row.full_name,
        email=row.email,
        role=Role(row.role),
        active=row.active,
    )


class DjangoAccountDirectory:
    def __init__(self) -> None:
        self.lock = threading.RLock()

    def exists(self, username: str) -> bool:
        if not isinstance(username, str) or not username.strip():
            return False
        return StoredAccount.objects.filter(username=username.strip()).exists()

    def find(self, username: str) -> Optional[Account]:
        if not isinstance(username, str) or not username.strip():
            return None
        row = StoredAccount.objects.filter(username=username.strip()).first()
        if row is None:
            return None
        return _to_account(row)

    def find_all(self) -> List[Account]:
        return [_to_account(row) for row in StoredAccount.objects.order_by("username")]

    def save(self, account: Account) -> None:
        with self.lock, transaction.atomic():
            StoredAccount.objects.update_or_create(
                username=account.username,
                defaults={
                    "password": account.password,
                    "full_name": account.full_name,
                    "email": account.email,
                    "role": account.role.value,
                    "active": account.active,
                },
            )
        logger.debug(f"Account {account.username} STORED")

    def delete(self, username: str) -> bool:
        with self.lock, transaction.atomic():
            deleted, _ = StoredAccount.objects.filter(username=username).delete()
        return deleted > 0
