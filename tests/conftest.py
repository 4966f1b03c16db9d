"""
Pytest configuration and fixtures for SuperCart tests.
"""
import os

# Set test environment before importing app modules
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-for-unit-tests-only"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from supercart.api.deps import get_lock_service, get_popularity_service
from supercart.data.database import Base, get_db
from supercart.data.models import ProductModel, UserModel
from supercart.main import app
from supercart.utils.security import get_password_hash


class FakeLockService:
    """In-memory stand-in for the redis cart lock."""

    def __init__(self):
        self.held = {}
        self.refuse = False

    def new_token(self):
        return f"token-{len(self.held) + 1}"

    def acquire_cart_lock(self, cart_id, token, ttl):
        if self.refuse or cart_id in self.held:
            return False
        self.held[cart_id] = token
        return True

    def release_cart_lock(self, cart_id, token):
        if self.held.get(cart_id) == token:
            del self.held[cart_id]
            return True
        return False


class FakePopularityService:
    """Collects selections instead of dispatching Celery tasks."""

    def __init__(self):
        self.calls = []

    def record_selection(self, selection):
        self.calls.append(list(selection))


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def lock_service():
    return FakeLockService()


@pytest.fixture
def popularity_service():
    return FakePopularityService()


@pytest.fixture
def client(session_factory, lock_service, popularity_service):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_lock_service] = lambda: lock_service
    app.dependency_overrides[get_popularity_service] = lambda: popularity_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_product(db_session):
    def _make(external_id, name, prices, category="General", **kwargs):
        product = ProductModel(
            external_id=external_id,
            name=name,
            category=category,
            prices=prices,
            **kwargs,
        )
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        return product

    return _make


def _register(client, name, email, password="password123"):
    resp = client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def user_headers(client):
    body = _register(client, "Dana", "dana@shop.io")
    return {"x-auth-token": body["token"]}


@pytest.fixture
def other_user_headers(client):
    body = _register(client, "Noam", "noam@shop.io")
    return {"x-auth-token": body["token"]}


@pytest.fixture
def admin_headers(client, db_session):
    admin = UserModel(
        name="Admin",
        email="admin@shop.io",
        password_hash=get_password_hash("adminpass123"),
        is_admin=True,
    )
    db_session.add(admin)
    db_session.commit()

    resp = client.post(
        "/api/auth/login",
        json={"email": "admin@shop.io", "password": "adminpass123"},
    )
    assert resp.status_code == 200, resp.text
    return {"x-auth-token": resp.json()["token"]}
