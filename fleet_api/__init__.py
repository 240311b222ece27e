"""
Fleet API — Application Package Initializer
============================================

What: Marks the `fleet_api` directory as a Python package.
Why:  Enables module imports like `from fleet_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The service is a thin layered CRUD API over three resources (cars, drivers, vehicles):

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Resource Handlers)      │  ← CRUD contract, error translation
    ├─────────────────────────────────────┤
    │   Store (Persistence Adapter)       │  ← id-keyed CRUD over one table
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Engine/Sessions)   │  ← Async SQLAlchemy, built per app
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
