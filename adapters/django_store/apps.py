"""
ShopTracker Django Store - App Configuration
=============================================
Persistent account directory.
"""

from django.apps import AppConfig


class ShopTrackerStoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "adapters.django_store"
    label = "shoptracker_store"
    verbose_name = "ShopTracker Account Store"
