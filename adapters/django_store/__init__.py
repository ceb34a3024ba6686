"""
ShopTracker Django storage adapter.
Relational Account Directory over the Django ORM.

Import DjangoAccountDirectory from adapters.django_store.directory
once Django is configured; this package import stays ORM-free.
"""
