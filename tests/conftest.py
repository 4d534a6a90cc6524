"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from main import app
from vegshop.db import get_db


@pytest.fixture
def db():
    """Fresh in-memory MongoDB database for each test."""
    return AsyncMongoMockClient()["vegshop_test"]


@pytest.fixture
def client(db):
    """Create a test client with database override."""

    async def override_get_db():
        return db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_vegetable(client):
    """Factory that creates a catalog vegetable and returns its id."""

    def _make(name="Carrot", price=40, category="root", photo="https://img/carrot.jpg"):
        response = client.post(
            "/vegetables",
            json={"name": name, "price": price, "category": category, "photo": photo},
        )
        assert response.status_code == 201
        return response.json()["id"]

    return _make


@pytest.fixture
def vegetable_id(make_vegetable):
    return make_vegetable()
