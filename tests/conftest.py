# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - Fresh in-memory SQLite schema for every test
# - TestClient for HTTP-level tests (lifespan not started)
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["FRONTEND_URL"] = "http://localhost:5173"
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.main import app
from core.services.product_service import ProductService
from lib.database import Base, SessionLocal, engine, sync_schema


ALLOWED_ORIGIN = "http://localhost:5173"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def database():
    """Create all tables before the test and drop them afterwards."""
    sync_schema(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(database):
    """A session bound to the test database."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(database):
    """HTTP client for the API."""
    return TestClient(app)


@pytest.fixture
def create_product(database):
    """
    Factory that inserts a product and returns its id.

    Each call uses its own short-lived session so no transaction stays
    open while the API handles requests.
    """

    def _create(name: str = "Laptop", price: float = 999.99) -> int:
        with SessionLocal() as session:
            return ProductService.create_product(session, name=name, price=price).id

    return _create


@pytest.fixture
def product_id(create_product):
    """Id of one existing product."""
    return create_product()


@pytest.fixture
def sample_product_payload():
    """Valid body for POST /api/products."""
    return {"name": "Test Product", "price": 100}


@pytest.fixture
def sample_update_payload():
    """Valid body for PUT /api/products/{id}."""
    return {"name": "Updated Product", "price": 150, "isAvailable": True}
