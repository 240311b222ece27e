"""
Fleet API — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own SQLite file under pytest's tmp_path, so tests
       never share records and never need a PostgreSQL server.

Fixture Hierarchy (all function-scoped):
    test_settings → Settings pointing at a fresh SQLite file, retries without waits
    database      → Database with tables created (store/service tests)
    app           → FastAPI app built from test_settings, tables created
    test_client   → HTTPX AsyncClient talking to `app` through ASGITransport
    *_payload     → valid request bodies for each resource
"""

import os
import tempfile

# Override settings BEFORE any fleet_api import: fleet_api.main builds a default
# app at import time from the environment
os.environ["DATABASE_URL"] = (
    f"sqlite+aiosqlite:///{tempfile.mkdtemp(prefix='fleet_test_')}/import.db"
)
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fleet_api.config import Settings
from fleet_api.database import Database


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'fleet_test.db'}",
        log_level="WARNING",
        store_retry_attempts=2,
        store_retry_min_wait=0,
        store_retry_max_wait=0,
    )


@pytest_asyncio.fixture
async def database(test_settings):
    """A Database with all tables created, disposed after the test."""
    db = Database(test_settings)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def app(test_settings):
    """
    A fresh application per test.

    ASGITransport does not run the lifespan, so tables are created here.
    """
    from fleet_api.main import create_app

    application = create_app(test_settings)
    await application.state.database.create_all()
    yield application
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def test_client(app):
    """
    Async HTTP client routed directly to the app (no server needed).

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def car_payload():
    return {
        "driverId": "627622eaa1161789f49f277c",
        "make": "Honda",
        "model": "Civic",
        "number": "AX1234KA",
        "year": 2018,
        "status": "standard",
    }


@pytest.fixture
def driver_payload():
    return {
        "name": "Alex Ray",
        "birthDate": "23.10.1996",
        "address": "Green Street",
        "city": "Kharkiv",
        "rating": 10,
        "status": "active",
    }


@pytest.fixture
def vehicle_payload():
    return {
        "category": "standard",
        "brand": "honda",
        "number": "AX1234KA",
        "productionYear": 2018,
        "owner": "Alan Ray",
    }
