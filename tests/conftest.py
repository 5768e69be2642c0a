import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"

from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from expense_tracker.core.security import hash_password
from expense_tracker.db import crud
from expense_tracker.db.database import Base, SessionLocal, engine, init_db
from expense_tracker.main import app


@pytest.fixture(autouse=True)
def _tables():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(db):
    def _make(email="asha@example.com", name="Asha", password="secret123"):
        return crud.create_user(db, name=name, email=email, password_hash=hash_password(password))

    return _make


@pytest.fixture
def add_expense(db):
    def _add(owner, amount, date, title="Lunch", category="Food"):
        return crud.create_expense(
            db,
            owner_id=owner.id,
            title=title,
            amount=Decimal(str(amount)),
            category=category,
            date=datetime.fromisoformat(date),
        )

    return _add


@pytest.fixture
def register_user(client):
    """Register through the API and return bearer headers for the new user."""

    def _register(email="asha@example.com", name="Asha", password="secret123"):
        r = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
        assert r.status_code == 201, r.text
        return {"Authorization": f"Bearer {r.json()['token']}"}

    return _register


@pytest.fixture
def auth_headers(register_user):
    return register_user()
