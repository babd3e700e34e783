"""
Shared fixtures.

The app is pointed at a throwaway SQLite file with Kafka and tracing
switched off before it is imported, so each test gets a freshly seeded
database and no external services.
"""

import os
import tempfile
from pathlib import Path

import pytest

_DB_DIR = Path(tempfile.mkdtemp(prefix="restaurant_pos_tests_"))
_DB_FILE = _DB_DIR / "test.db"

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_FILE}"
os.environ["KAFKA_ENABLED"] = "false"
os.environ["OTLP_ENDPOINT"] = ""
os.environ["SEED_DEMO_DATA"] = "true"

from fastapi.testclient import TestClient  # noqa: E402

from restaurant_pos.config import settings  # noqa: E402
from restaurant_pos.main import app  # noqa: E402


@pytest.fixture
def client():
    if _DB_FILE.exists():
        _DB_FILE.unlink()
    with TestClient(app) as c:
        yield c


@pytest.fixture
def authed_client(client):
    response = client.post(
        "/api/auth/login",
        json={"email": settings.demo_email, "password": settings.demo_password},
    )
    assert response.status_code == 200
    return client


@pytest.fixture
def menu_items(authed_client):
    """Seeded menu keyed by item name."""
    response = authed_client.get("/dashboard/menu/items")
    return {item["name"]: item for item in response.json()}


@pytest.fixture
def tables(authed_client):
    """Seeded tables keyed by table name."""
    response = authed_client.get("/dashboard/tables")
    return {table["name"]: table for table in response.json()}
