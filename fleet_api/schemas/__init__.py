"""
Fleet API — Pydantic Request/Response Schemas
==============================================

Schemas are separate from the SQLAlchemy models: they define the camelCase API
contract and drive FastAPI's OpenAPI generation, while the models define storage.
"""
