"""
Shared fixtures: an in-memory SQLite database and an in-process Redis double.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTH_ENABLED"] = "false"
os.environ["LOG_FORMAT"] = "console"

import pytest
from fastapi.testclient import TestClient

import stockroom.models  # noqa: F401
from stockroom.core.database import Base, SessionLocal, engine
from stockroom.core.redis_client import cache_manager, session_manager
from stockroom.main import app


class FakeRedis:
    """Dict-backed stand-in for the handful of Redis commands the app uses."""

    def __init__(self):
        self.store = {}
        self.ttls = {}

    def setex(self, key, ttl, value):
        self.store[key] = value
        self.ttls[key] = ttl
        return True

    def get(self, key):
        return self.store.get(key)

    def delete(self, key):
        self.ttls.pop(key, None)
        return 1 if self.store.pop(key, None) is not None else 0

    def expire(self, key, ttl):
        if key not in self.store:
            return False
        self.ttls[key] = ttl
        return True

    def ping(self):
        return True


@pytest.fixture(autouse=True)
def database():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def fake_redis(monkeypatch):
    redis = FakeRedis()
    monkeypatch.setattr(cache_manager, "client", redis)
    monkeypatch.setattr(session_manager, "client", redis)
    return redis


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def product(client):
    """A catalog product created through the API."""
    response = client.post("/api/v1/products", json={
        "name": "Essentials Hoodie",
        "image": "https://img.example.com/hoodie.jpg",
        "brand": "Fear of God",
        "sizes": ["S", "M", "L"],
        "size_quantities": {"S": 2, "M": 1},
    })
    assert response.status_code == 201
    return response.json()
