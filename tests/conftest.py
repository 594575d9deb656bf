import asyncio

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from jewelry_admin.config.database import get_database
from jewelry_admin.main import app
from jewelry_admin.utils.rate_limit import api_rate_limit, strict_rate_limit


@pytest.fixture
def db():
    return AsyncMongoMockClient(tz_aware=True)["sabri_jewelry_test"]


@pytest.fixture
def client(db):
    async def override_get_database():
        return db

    app.dependency_overrides[get_database] = override_get_database
    api_rate_limit.reset()
    strict_rate_limit.reset()

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def run():
    """Run a coroutine (database seeding and checks) outside the app."""
    return asyncio.run


@pytest.fixture
def seed(db, run):
    def _seed(collection, *docs):
        result = run(db[collection].insert_many([dict(doc) for doc in docs]))
        return result.inserted_ids

    return _seed


def product_payload(**overrides):
    payload = {
        "name": "Pearl Drop Necklace",
        "description": "Elegant pearl drop necklace",
        "price": 3999,
        "originalPrice": 5999,
        "cost": 2500,
        "category": "necklaces",
        "stock": 25,
        "sku": "NECK001",
        "images": ["https://cdn.example.com/neck001.jpg"],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_product():
    return product_payload
