# Services package init
"""
Food Ordering Backend — Services Layer
========================================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Stores receive the request's AsyncSession plus plain values, apply the
       business rules, and return ORM objects or raise application errors.

Service Inventory:
    - CredentialStore: registration, password verification, password changes
    - CatalogStore:    menu item create/read/update/delete
"""
