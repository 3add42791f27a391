"""
Food Ordering Backend — Application Package Initializer
=========================================================

What: Marks the `food_ordering` directory as a Python package.
Who:  Imported by uvicorn (food_ordering.main:app), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Services (Credential/Catalog)  │  ← Validation, hashing, CRUD
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes turn HTTP requests into exactly one store call; stores own the
    business rules and never see HTTP objects.
"""

__version__ = "1.0.0"
