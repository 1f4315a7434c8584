# backend/tests/conftest.py
# ---------------------------------------------------------------------
# Ground rules:
# - Required settings are put in the environment before the app is imported
# - One in-memory SQLite database (StaticPool), rebuilt for every test
# - Each request gets its own session through the get_db override
# - auth_headers / other_headers are two independent tenants
# ---------------------------------------------------------------------
import os

os.environ.setdefault("PORT", "3001")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-long-enough-for-hs256")
os.environ.setdefault("FRONTEND_URL", "http://localhost:5173")
os.environ["ENVIRONMENT"] = "test"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from database import Base, engine, get_db  # noqa: E402
from main import app  # noqa: E402

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def _fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db_session():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def register(client, email, password=PASSWORD, name=None):
    body = {"email": email, "password": password}
    if name:
        body["name"] = name
    return client.post("/api/auth/register", json=body)


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(client):
    res = register(client, "owner@example.com", name="Owner")
    assert res.status_code == 201, res.text
    return bearer(res.json()["data"]["token"])


@pytest.fixture
def other_headers(client):
    res = register(client, "intruder@example.com", name="Intruder")
    assert res.status_code == 201, res.text
    return bearer(res.json()["data"]["token"])


# ---------- small builders shared by the resource tests ----------
def make_item(client, headers, **overrides):
    body = {
        "productName": "Widget A",
        "sku": "WID-001",
        "category": "Electronics",
        "quantity": 10,
        "unitPrice": 12.75,
        "reorderLevel": 3,
    }
    body.update(overrides)
    res = client.post("/api/inventory", json=body, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()["data"]


def make_supplier(client, headers, name="Supplier ABC", **overrides):
    body = {"name": name, "email": "orders@abc.example.com", "contactPerson": "Alice Brown"}
    body.update(overrides)
    res = client.post("/api/suppliers", json=body, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()["data"]


def make_customer(client, headers, name="John Doe", **overrides):
    body = {"name": name, "email": "john@example.com", "companyType": "Retail"}
    body.update(overrides)
    res = client.post("/api/customers", json=body, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()["data"]
