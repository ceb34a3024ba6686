"""
ShopTracker Django Store - Relational Account State
====================================================
One row per Account. The username is the primary key, so the
database itself refuses duplicate identities.
"""

from __future__ import annotations

from django.db import models


class StoredRole(models.TextChoices):
    ADMIN = "ADMIN", "Admin"
    MANAGER = "MANAGER", "Manager"
    USER = "USER", "User"


class StoredAccount(models.Model):
    username = models.CharField(primary_key=True, max_length=150)
    # Opaque credential as handed over by the Directory Service.
    password = models.CharField(max_length=255)
    full_name = models.CharField(max_length=255, default="", blank=True)
    email = models.CharField(max_length=255, default="", blank=True)
    role = models.CharField(
        max_length=20,
        choices=StoredRole.choices,
        default=StoredRole.USER,
    )
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "shoptracker_accounts"
        ordering = ["username"]

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"
